from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OperationalCounts(BaseModel):
    """Validated operational counts entered on the form."""

    model_config = ConfigDict(allow_inf_nan=False, frozen=True)

    engineers: float = Field(ge=0, description="Engineers and designers")
    num_sites: float = Field(ge=0, description="Sites with engineering teams")
    num_countries: float = Field(ge=0, description="Countries with engineering teams")
    new_products: float = Field(ge=0, description="New products or revisions per year")
    reworks: float = Field(ge=0, description="Reworks per product")
    delays: float = Field(ge=0, description="Average weeks of delay per product")
