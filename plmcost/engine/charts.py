"""Series for the bar, pie and radar charts."""

from __future__ import annotations

import re
from dataclasses import dataclass

from plmcost.engine.result import CalculationResult
from plmcost.models.inputs import OperationalCounts

_LABEL_PREFIX = re.compile(r"Cost of |Cost from ", re.IGNORECASE)
_INEFFICIENCY_PREFIX = re.compile(r"Inefficiency from ", re.IGNORECASE)

RADAR_LABELS = ("No. Engineers", "No. Sites", "No. Countries", "No. Reworks", "Weeks Delay")


@dataclass(frozen=True)
class ChartData:
    cost_labels: tuple[str, ...]
    cost_data: tuple[int, ...]
    input_labels: tuple[str, ...]
    normalized_input_data: tuple[float, ...]


def short_label(category: str) -> str:
    """'Cost of Inefficiency from Distributed Collaboration' -> 'Distributed Collaboration'"""
    label = _LABEL_PREFIX.sub("", category, count=1)
    return _INEFFICIENCY_PREFIX.sub("", label, count=1)


def build_chart_data(result: CalculationResult, counts: OperationalCounts) -> ChartData:
    """Cost series for non-zero items plus the normalized inefficiency profile."""
    non_zero = [item for item in result.cost_breakdown if item.cost > 0]

    inputs = (
        counts.engineers,
        counts.num_sites,
        counts.num_countries,
        counts.reworks,
        counts.delays,
    )
    peak = max(inputs)
    normalized = tuple((value / peak) * 100 if peak > 0 else 0.0 for value in inputs)

    return ChartData(
        cost_labels=tuple(short_label(item.category) for item in non_zero),
        cost_data=tuple(item.cost for item in non_zero),
        input_labels=RADAR_LABELS,
        normalized_input_data=normalized,
    )
