from __future__ import annotations

from abc import ABC, abstractmethod

from plmcost.engine.result import CalculationResult, ChartInterpretations
from plmcost.models.narrative import NarrativeContent, NarrativeContext


class NarrativeGenerationError(RuntimeError):
    """The narrative provider failed or returned unusable content."""


class NarrativeProvider(ABC):
    """Abstract base for services that write prose around fixed numbers."""

    @abstractmethod
    async def generate(
        self, context: NarrativeContext, result: CalculationResult
    ) -> NarrativeContent:
        """Return prose for the result. Must not depend on altering numbers."""
        ...


def decorate(result: CalculationResult, content: NarrativeContent) -> CalculationResult:
    """Copy the prose fields of ``content`` onto a new result.

    Totals, costs and metric values are carried over untouched.
    """
    interpretations = content.chart_interpretations
    return result.with_narrative(
        summary=content.summary,
        explanations=[item.explanation for item in content.explanations],
        methodology_notes=content.methodology_notes,
        chart_interpretations=ChartInterpretations(
            bar=interpretations.bar,
            pie=interpretations.pie,
            radar=interpretations.radar,
        ),
    )
