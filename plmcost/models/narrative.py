from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from plmcost.catalog.countries import Country
from plmcost.models.enums import InfoLocation


@dataclass(frozen=True)
class NarrativeContext:
    """Company context handed to the narrative provider alongside the numbers."""

    company_name: str
    industry: str
    sector: str
    country: Country
    engineers: float
    num_sites: float
    num_countries: float
    info_location: InfoLocation


class Explanation(BaseModel):
    explanation: str


class ChartInterpretationsPayload(BaseModel):
    bar: str
    pie: str
    radar: str


class NarrativeContent(BaseModel):
    """Prose returned by the narrative provider.

    Field aliases match the JSON keys the model is asked to produce.
    """

    model_config = ConfigDict(populate_by_name=True)

    summary: str
    explanations: list[Explanation] = Field(min_length=4, max_length=4)
    methodology_notes: str = Field(alias="methodologyNotes")
    chart_interpretations: ChartInterpretationsPayload = Field(alias="chartInterpretations")
