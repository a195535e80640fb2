"""Tests for narrative assembly, currency formatting and the methodology section."""

import pytest

from plmcost.catalog.countries import get_country
from plmcost.engine.calculator import calculate
from plmcost.engine.narrative import (
    DEFAULT_METRIC_SOURCE,
    build_breakdown,
    build_result,
    describe,
    format_count,
    format_currency,
    metric_summary,
    methodology_variant,
    operational_summary,
)
from plmcost.engine.resolver import resolve
from plmcost.cost_library.registry import get_all_components
from plmcost.models.enums import CostComponent, InfoLocation, MetricKey, OverrideState
from plmcost.models.inputs import OperationalCounts

FALLBACK = "general-discrete-manufacturing"


class TestFormatCurrency:
    def test_usd_grouping(self, usd):
        assert format_currency(486_538, usd) == "$486,538"

    def test_german_grouping_for_eur(self):
        assert format_currency(26_923, get_country("EUR")) == "€26.923"

    def test_brazilian_symbol(self):
        assert format_currency(1_250_000, get_country("BRL")) == "R$1.250.000"

    def test_no_fractional_digits(self, usd):
        assert format_currency(38_461.54, usd) == "$38,462"


class TestFormatCount:
    def test_whole_counts_drop_decimal(self):
        assert format_count(15.0) == "15"
        assert format_count(0) == "0"

    def test_large_counts_print_in_full(self):
        assert format_count(1_234_567) == "1234567"
        assert format_count(1_000_000.0) == "1000000"

    def test_fractional_counts_keep_digits(self):
        assert format_count(2.5) == "2.5"
        assert format_count(1234.75) == "1234.75"


class TestDescribe:
    def test_collaboration_strings(self, base_resolved, base_counts, usd):
        components = calculate(base_resolved, base_counts, InfoLocation.CORPORATE)
        text = describe(base_resolved, base_counts, components, InfoLocation.CORPORATE, usd)
        collab = text[CostComponent.COLLABORATION]
        assert collab.methodology_formula == "($70,000/year ÷ 52 wk) × 2.0h × 10 eng."
        assert collab.calculation_narrative == (
            "The average annual salary of an engineer is estimated at $70,000. "
            "With a structure of 1 sites in 1 countries, an inefficiency in "
            "communication and data searching is estimated at 2.0 hours/week per "
            "engineer. For 10 engineers, this represents an annual loss of $26,923."
        )

    def test_rework_and_delay_strings(self, base_resolved, base_counts, usd):
        components = calculate(base_resolved, base_counts, InfoLocation.CORPORATE)
        text = describe(base_resolved, base_counts, components, InfoLocation.CORPORATE, usd)
        assert text[CostComponent.REWORK].methodology_formula == (
            "5 products × 3 reworks/prod × $5,000/rework"
        )
        assert "the company faces 15 rework cycles" in text[CostComponent.REWORK].calculation_narrative
        assert text[CostComponent.DELAY].methodology_formula == (
            "($2,000,000/prod ÷ 52 wk) × 2 wk × 5 prod"
        )
        assert "each week of delay represents a loss of $38,462" in (
            text[CostComponent.DELAY].calculation_narrative
        )

    def test_silo_personal_pc(self, base_resolved, base_counts, usd):
        components = calculate(base_resolved, base_counts, InfoLocation.PERSONAL_PC)
        silo = describe(base_resolved, base_counts, components, InfoLocation.PERSONAL_PC, usd)[
            CostComponent.SILO_RISK
        ]
        assert silo.methodology_formula == "($75,000 + $384,615) × 20%"
        assert "additional risk cost of $91,923" in silo.calculation_narrative

    def test_silo_corporate(self, base_resolved, base_counts, usd):
        components = calculate(base_resolved, base_counts, InfoLocation.CORPORATE)
        silo = describe(base_resolved, base_counts, components, InfoLocation.CORPORATE, usd)[
            CostComponent.SILO_RISK
        ]
        assert silo.methodology_formula == "Zero cost for using a centralized system"
        assert silo.calculation_narrative.endswith("This cost is zero.")

    def test_large_counts_in_strings(self, base_resolved, usd):
        counts = OperationalCounts(
            engineers=1_234_567, num_sites=1, num_countries=1,
            new_products=1000, reworks=1000, delays=2,
        )
        components = calculate(base_resolved, counts, InfoLocation.CORPORATE)
        text = describe(base_resolved, counts, components, InfoLocation.CORPORATE, usd)
        collab = text[CostComponent.COLLABORATION]
        assert collab.methodology_formula.endswith("× 2.0h × 1234567 eng.")
        assert text[CostComponent.REWORK].methodology_formula == (
            "1000 products × 1000 reworks/prod × $5,000/rework"
        )
        assert "the company faces 1000000 rework cycles" in (
            text[CostComponent.REWORK].calculation_narrative
        )
        assert "e+" not in text[CostComponent.DELAY].methodology_formula

    def test_narrative_uses_rounded_costs(self, base_resolved, base_counts, usd):
        components = calculate(base_resolved, base_counts, InfoLocation.PERSONAL_PC)
        items = build_breakdown(base_resolved, base_counts, components, InfoLocation.PERSONAL_PC, usd)
        for item in items:
            if item.cost:
                assert format_currency(item.cost, usd) in item.calculation_narrative


class TestBuildBreakdown:
    def test_four_items_in_fixed_order(self, base_resolved, base_counts, usd):
        result = build_result(
            base_resolved, base_counts,
            calculate(base_resolved, base_counts, InfoLocation.CORPORATE),
            InfoLocation.CORPORATE, usd,
        )
        assert [item.metric_key for item in result.cost_breakdown] == [
            "averageEngineerSalary", "reworkCost", "newProductRevenue", "siloCostMultiplier",
        ]
        assert result.total_cost == 486_538
        assert result.total_cost == sum(result.component_costs())
        assert result.summary == ""
        assert all(item.explanation == "" for item in result.cost_breakdown)

    def test_order_follows_registered_positions(self, base_resolved, base_counts, usd):
        components = calculate(base_resolved, base_counts, InfoLocation.CORPORATE)
        items = build_breakdown(base_resolved, base_counts, components, InfoLocation.CORPORATE, usd)
        assert [item.category for item in items] == [d.category for d in get_all_components()]
        assert [item.cost for item in items] == [
            components.cost(d.id) for d in get_all_components()
        ]

    def test_override_flags_only_that_item(self, base_counts, usd):
        resolved = resolve(FALLBACK, "", "USD", {"averageEngineerSalary": 100_000})
        components = calculate(resolved, base_counts, InfoLocation.CORPORATE)
        items = build_breakdown(resolved, base_counts, components, InfoLocation.CORPORATE, usd)
        assert items[0].is_metric_overridden
        assert items[0].metric_value == 100_000
        assert items[0].cost == 38_462
        assert not any(item.is_metric_overridden for item in items[1:])

    def test_silo_item_reports_multiplier(self, base_resolved, base_counts, usd):
        components = calculate(base_resolved, base_counts, InfoLocation.CORPORATE)
        silo = build_breakdown(base_resolved, base_counts, components, InfoLocation.CORPORATE, usd)[3]
        assert silo.metric_value == pytest.approx(0.20)
        assert silo.metric_label == "Silo Risk Multiplier"
        assert silo.metric_source == DEFAULT_METRIC_SOURCE


class TestMethodologySection:
    @pytest.mark.parametrize("state,third_heading", [
        (OverrideState.NO_OVERRIDES, "Purposely Conservative"),
        (OverrideState.PARTIALLY_OVERRIDDEN, "Conservative and Real Values"),
        (OverrideState.FULLY_OVERRIDDEN, "Calculation Accuracy"),
    ])
    def test_rationale_variant(self, state, third_heading):
        paragraphs = methodology_variant(state)
        assert len(paragraphs) == 3
        assert paragraphs[0][0] == "Data Source"
        assert paragraphs[2][0] == third_heading

    def test_usd_summary_has_no_conversion(self, base_resolved, usd):
        lines = metric_summary(base_resolved, usd)
        assert [line.display_value for line in lines] == ["$70,000", "$5,000", "$2,000,000"]
        assert all(line.usd_equivalent is None for line in lines)

    def test_local_currency_summary_shows_usd(self):
        resolved = resolve(FALLBACK, "", "COP", {"reworkCost": 40_000_000})
        lines = metric_summary(resolved, get_country("COP"))
        rework = next(line for line in lines if line.metric_key is MetricKey.REWORK_COST)
        assert rework.is_custom
        assert rework.usd_equivalent == "$10,000"

    def test_operational_summary(self, base_resolved):
        rows = dict(operational_summary(base_resolved))
        assert rows["Base Weekly Inefficiency Hours"] == "2 hours per engineer"
        assert rows["Silo Risk Multiplier"] == "20% (applied to rework and delay costs)"
