"""Immutable result data structures."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

from plmcost.models.enums import ChartType, CostComponent


@dataclass(frozen=True)
class ComponentCost:
    """A single cost component before and after rounding."""

    component: CostComponent
    raw: float
    cost: int


@dataclass(frozen=True)
class CostComponents:
    """Numeric output of the calculator."""

    items: tuple[ComponentCost, ...]
    wasted_hours: float
    total: int

    def get(self, component: CostComponent) -> ComponentCost:
        for item in self.items:
            if item.component is component:
                return item
        raise KeyError(component)

    def cost(self, component: CostComponent) -> int:
        return self.get(component).cost


@dataclass(frozen=True)
class CostBreakdownItem:
    """One line of the breakdown shown to the user."""

    category: str
    cost: int
    methodology_formula: str
    calculation_narrative: str
    metric_key: str
    metric_value: float
    metric_label: str
    metric_source: str
    is_metric_overridden: bool = False
    explanation: str = ""


@dataclass(frozen=True)
class ChartInterpretations:
    bar: str = ""
    pie: str = ""
    radar: str = ""

    def get(self, chart_type: ChartType) -> str:
        return getattr(self, ChartType(chart_type).value)


@dataclass(frozen=True)
class CalculationResult:
    """Top-level result for one submit or recalculation.

    Numbers are fixed at construction; prose is added by with_narrative(),
    which returns a new object.
    """

    total_cost: int
    cost_breakdown: tuple[CostBreakdownItem, ...]
    summary: str = ""
    methodology_notes: str = ""
    chart_interpretations: ChartInterpretations = field(
        default_factory=ChartInterpretations
    )

    def with_narrative(
        self,
        summary: str,
        explanations: Sequence[str],
        methodology_notes: str,
        chart_interpretations: ChartInterpretations,
    ) -> CalculationResult:
        """Copy of this result with the prose fields filled in."""
        if len(explanations) != len(self.cost_breakdown):
            raise ValueError(
                f"Expected {len(self.cost_breakdown)} explanations, got {len(explanations)}"
            )
        breakdown = tuple(
            replace(item, explanation=text)
            for item, text in zip(self.cost_breakdown, explanations)
        )
        return replace(
            self,
            cost_breakdown=breakdown,
            summary=summary,
            methodology_notes=methodology_notes,
            chart_interpretations=chart_interpretations,
        )

    def component_costs(self) -> list[int]:
        return [item.cost for item in self.cost_breakdown]
