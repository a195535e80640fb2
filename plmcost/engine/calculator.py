"""Core calculation engine.

Takes resolved metrics + operational counts -> produces the four hidden
cost components and their total.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable

# Importing formulas registers every cost component
from plmcost.cost_library.formulas import calc_wasted_hours
from plmcost.cost_library.registry import get_all_components, get_component
from plmcost.engine.resolver import ResolvedMetrics
from plmcost.engine.result import ComponentCost, CostComponents
from plmcost.models.enums import CostComponent, InfoLocation
from plmcost.models.inputs import OperationalCounts

logger = logging.getLogger(__name__)


def round_currency(value: float) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _formula(component_id: CostComponent) -> Callable[..., float]:
    definition = get_component(component_id)
    if definition is None:
        raise KeyError(f"No registered cost component '{component_id.value}'")
    return definition.formula_fn


class CostCalculator:
    """Stateless engine that runs the hidden-cost calculation."""

    def calculate(
        self,
        resolved: ResolvedMetrics,
        counts: OperationalCounts,
        info_location: InfoLocation,
    ) -> CostComponents:
        """Compute every component, rounding each before summing the total."""
        info_location = InfoLocation(info_location)

        wasted_hours = calc_wasted_hours(
            base_wasted_hours=resolved.base_wasted_hours,
            hours_per_site=resolved.hours_per_site,
            hours_per_country=resolved.hours_per_country,
            num_sites=counts.num_sites,
            num_countries=counts.num_countries,
        )
        collaboration = _formula(CostComponent.COLLABORATION)(
            average_engineer_salary=resolved.average_engineer_salary,
            wasted_hours=wasted_hours,
            engineers=counts.engineers,
        )
        rework = _formula(CostComponent.REWORK)(
            new_products=counts.new_products,
            reworks=counts.reworks,
            rework_cost_per_cycle=resolved.rework_cost,
        )
        delay = _formula(CostComponent.DELAY)(
            new_product_revenue=resolved.new_product_revenue,
            delays=counts.delays,
            new_products=counts.new_products,
        )
        # Silo risk scales the unrounded execution costs
        silo = _formula(CostComponent.SILO_RISK)(
            rework_loss=rework,
            delay_loss=delay,
            silo_cost_multiplier=resolved.silo_cost_multiplier,
            info_location=info_location,
        )

        raw_costs = {
            CostComponent.COLLABORATION: collaboration,
            CostComponent.REWORK: rework,
            CostComponent.DELAY: delay,
            CostComponent.SILO_RISK: silo,
        }
        items = tuple(
            ComponentCost(
                component=definition.id,
                raw=raw_costs[definition.id],
                cost=round_currency(raw_costs[definition.id]),
            )
            for definition in get_all_components()
        )
        total = sum(item.cost for item in items)

        logger.debug(
            f"Calculated total {total} {resolved.currency_code} for industry "
            f"{resolved.industry_key} (wasted hours {wasted_hours:.2f})"
        )
        return CostComponents(items=items, wasted_hours=wasted_hours, total=total)


def calculate(
    resolved: ResolvedMetrics,
    counts: OperationalCounts,
    info_location: InfoLocation,
) -> CostComponents:
    """Module-level shortcut for CostCalculator().calculate()."""
    return CostCalculator().calculate(resolved, counts, info_location)
