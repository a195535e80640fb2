"""Narrative assembly for the cost breakdown.

Turns the resolved metrics and the computed components into the
methodology formula and plain-language narrative shown for each line of
the breakdown. All amounts are formatted with the country's symbol and
locale grouping, without fractional digits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from babel.numbers import format_decimal

from plmcost.catalog.countries import Country
from plmcost.cost_library.registry import get_all_components
from plmcost.engine.calculator import round_currency
from plmcost.engine.resolver import ResolvedMetrics
from plmcost.engine.result import CalculationResult, CostBreakdownItem, CostComponents
from plmcost.models.enums import (
    OVERRIDABLE_METRICS,
    CostComponent,
    InfoLocation,
    MetricKey,
    OverrideState,
)
from plmcost.models.inputs import OperationalCounts

logger = logging.getLogger(__name__)

DEFAULT_METRIC_SOURCE = "(based on industry standards)."


@dataclass(frozen=True)
class ComponentDescription:
    methodology_formula: str
    calculation_narrative: str


@dataclass(frozen=True)
class MetricSummaryLine:
    """One monetary metric as listed in the methodology section."""

    metric_key: MetricKey
    label: str
    value: float
    display_value: str
    usd_equivalent: Optional[str]
    is_custom: bool


def format_currency(value: float, country: Country) -> str:
    """Symbol plus the whole amount grouped for the country's locale."""
    amount = format_decimal(
        round_currency(value),
        format="#,##0",
        locale=country.locale.replace("-", "_"),
    )
    return f"{country.currency_symbol}{amount}"


def format_usd(value: float) -> str:
    amount = format_decimal(round_currency(value), format="#,##0", locale="en_US")
    return f"${amount}"


def format_count(value: float) -> str:
    """Counts print in full, without a trailing '.0' when they are whole."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_percent(multiplier: float) -> str:
    return f"{multiplier * 100:g}%"


def describe(
    resolved: ResolvedMetrics,
    counts: OperationalCounts,
    components: CostComponents,
    info_location: InfoLocation,
    country: Country,
) -> dict[CostComponent, ComponentDescription]:
    """Build the formula and narrative strings for every component."""
    def money(value: float) -> str:
        return format_currency(value, country)

    engineers = format_count(counts.engineers)
    sites = format_count(counts.num_sites)
    countries = format_count(counts.num_countries)
    products = format_count(counts.new_products)
    reworks = format_count(counts.reworks)
    delays = format_count(counts.delays)
    hours = f"{components.wasted_hours:.1f}"

    collaboration = components.cost(CostComponent.COLLABORATION)
    rework = components.cost(CostComponent.REWORK)
    delay = components.cost(CostComponent.DELAY)
    silo = components.cost(CostComponent.SILO_RISK)

    descriptions = {
        CostComponent.COLLABORATION: ComponentDescription(
            methodology_formula=(
                f"({money(resolved.average_engineer_salary)}/year ÷ 52 wk) "
                f"× {hours}h × {engineers} eng."
            ),
            calculation_narrative=(
                "The average annual salary of an engineer is estimated at "
                f"{money(resolved.average_engineer_salary)}. With a structure of "
                f"{sites} sites in {countries} countries, an inefficiency in "
                "communication and data searching is estimated at "
                f"{hours} hours/week per engineer. For {engineers} engineers, "
                f"this represents an annual loss of {money(collaboration)}."
            ),
        ),
        CostComponent.REWORK: ComponentDescription(
            methodology_formula=(
                f"{products} products × {reworks} reworks/prod × "
                f"{money(resolved.rework_cost)}/rework"
            ),
            calculation_narrative=(
                f"With {products} new products and {reworks} reworks for each, "
                f"the company faces {format_count(counts.new_products * counts.reworks)} "
                "rework cycles. At an estimated cost of "
                f"{money(resolved.rework_cost)} per cycle, the annual loss is "
                f"{money(rework)}."
            ),
        ),
        CostComponent.DELAY: ComponentDescription(
            methodology_formula=(
                f"({money(resolved.new_product_revenue)}/prod ÷ 52 wk) "
                f"× {delays} wk × {products} prod"
            ),
            calculation_narrative=(
                "If a new product generates annual revenue of "
                f"{money(resolved.new_product_revenue)}, each week of delay "
                f"represents a loss of {money(resolved.new_product_revenue / 52)}. "
                f"With a delay of {delays} weeks on {products} products, the "
                f"opportunity cost is {money(delay)}."
            ),
        ),
    }

    if InfoLocation(info_location) is InfoLocation.PERSONAL_PC:
        percent = format_percent(resolved.silo_cost_multiplier)
        descriptions[CostComponent.SILO_RISK] = ComponentDescription(
            methodology_formula=f"({money(rework)} + {money(delay)}) × {percent}",
            calculation_narrative=(
                "Storing critical data on personal PCs introduces significant "
                "risk. This decentralized method increases the likelihood of "
                f"errors and reworks. A risk multiplier of {percent} is applied "
                "to rework and delay costs, resulting in an additional risk "
                f"cost of {money(silo)}."
            ),
        )
    else:
        descriptions[CostComponent.SILO_RISK] = ComponentDescription(
            methodology_formula="Zero cost for using a centralized system",
            calculation_narrative=(
                "Using a centralized corporate system is a good practice that "
                "mitigates the risks of isolated information. This cost is zero."
            ),
        )
    return descriptions


def build_breakdown(
    resolved: ResolvedMetrics,
    counts: OperationalCounts,
    components: CostComponents,
    info_location: InfoLocation,
    country: Country,
) -> tuple[CostBreakdownItem, ...]:
    """Assemble the breakdown items in registered component order."""
    descriptions = describe(resolved, counts, components, info_location, country)
    items = []
    for definition in get_all_components():
        component_cost = components.get(definition.id)
        description = descriptions[definition.id]
        items.append(
            CostBreakdownItem(
                category=definition.category,
                cost=component_cost.cost,
                methodology_formula=description.methodology_formula,
                calculation_narrative=description.calculation_narrative,
                metric_key=definition.metric_key.value,
                metric_value=resolved.value(definition.metric_key),
                metric_label=definition.metric_label,
                metric_source=DEFAULT_METRIC_SOURCE,
                is_metric_overridden=resolved.is_overridden(definition.metric_key),
            )
        )
    return tuple(items)


def build_result(
    resolved: ResolvedMetrics,
    counts: OperationalCounts,
    components: CostComponents,
    info_location: InfoLocation,
    country: Country,
) -> CalculationResult:
    """Numeric result with empty prose, ready for the narrative provider."""
    breakdown = build_breakdown(resolved, counts, components, info_location, country)
    return CalculationResult(total_cost=components.total, cost_breakdown=breakdown)


# ---------------------------------------------------------------------------
# Methodology section
# ---------------------------------------------------------------------------

_METRIC_LABELS = {
    MetricKey.AVERAGE_ENGINEER_SALARY: "Annual Engineer Salary",
    MetricKey.REWORK_COST: "Cost per Rework",
    MetricKey.NEW_PRODUCT_REVENUE: "Annual Revenue per Product",
}

_RATIONALE: dict[OverrideState, tuple[tuple[str, str], ...]] = {
    OverrideState.NO_OVERRIDES: (
        (
            "Data Source",
            "The values are based on an analysis of economic metrics for each "
            "country and sector, using public domain sources such as salary "
            "surveys and industrial cost reports. They represent a statistical "
            "consensus for a medium-sized company, serving as a robust, "
            "localized benchmark.",
        ),
        (
            "Value's Purpose",
            "The goal is not to guess the exact cost of a particular error in "
            "your company, but to use a credible and defensible market average "
            "to make the calculation strategically representative.",
        ),
        (
            "Purposely Conservative",
            "They were deliberately chosen to be conservative. In many cases, "
            "actual costs can be much higher. This ensures that the loss "
            'estimate is a credible and hard-to-refute "floor" rather than an '
            "exaggeration.",
        ),
    ),
    OverrideState.PARTIALLY_OVERRIDDEN: (
        (
            "Data Source",
            "This analysis combines conservative industry estimates with actual "
            "data provided by you. This mixed approach significantly increases "
            "the calculation's accuracy, adapting it better to your company's "
            "financial reality while maintaining a market benchmark for other "
            "variables.",
        ),
        (
            "Value's Purpose",
            "The industry values act as a credible benchmark for the variables "
            "that were not modified, while the data you provided ensures that "
            "key areas of the calculation are as accurate as possible.",
        ),
        (
            "Conservative and Real Values",
            "The application's estimates are deliberately conservative to "
            'provide a credible "floor." The combination with your actual data '
            "results in a robust, hybrid analysis.",
        ),
    ),
    OverrideState.FULLY_OVERRIDDEN: (
        (
            "Data Source",
            "All calculations are based on the actual values you provided. This "
            "transforms the analysis into an accurate financial reflection of "
            "your company's specific operational inefficiencies, eliminating "
            "market estimates.",
        ),
        (
            "Value's Purpose",
            "By using your own data, the calculator offers a fully customized "
            "result that reflects the reality of your operations and costs.",
        ),
        (
            "Calculation Accuracy",
            "The result is a direct reflection of the information you have "
            "provided, leading to the most accurate possible analysis of your "
            "current situation.",
        ),
    ),
}


def methodology_variant(state: OverrideState) -> tuple[tuple[str, str], ...]:
    """Rationale paragraphs as (heading, text) pairs for an override state."""
    return _RATIONALE[OverrideState(state)]


def metric_summary(resolved: ResolvedMetrics, country: Country) -> list[MetricSummaryLine]:
    """Effective monetary metrics, with USD equivalents for non-USD countries."""
    lines = []
    for metric_key in OVERRIDABLE_METRICS:
        value = resolved.value(metric_key)
        usd_equivalent = None
        if country.code != "USD":
            usd_equivalent = format_usd(country.to_usd(value))
        lines.append(
            MetricSummaryLine(
                metric_key=metric_key,
                label=_METRIC_LABELS[metric_key],
                value=value,
                display_value=format_currency(value, country),
                usd_equivalent=usd_equivalent,
                is_custom=resolved.is_overridden(metric_key),
            )
        )
    return lines


def operational_summary(resolved: ResolvedMetrics) -> list[tuple[str, str]]:
    """Non-editable operational constants as (label, text) pairs."""
    return [
        (
            "Base Weekly Inefficiency Hours",
            f"{format_count(resolved.base_wasted_hours)} hours per engineer",
        ),
        (
            "Additional Inefficiency per Site",
            f"{format_count(resolved.hours_per_site)} hours per additional site",
        ),
        (
            "Additional Inefficiency per Country",
            f"{format_count(resolved.hours_per_country)} hours per additional country",
        ),
        (
            "Silo Risk Multiplier",
            f"{format_percent(resolved.silo_cost_multiplier)} (applied to rework and delay costs)",
        ),
    ]
