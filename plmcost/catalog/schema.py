"""Pydantic models for the industry metric catalog."""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from plmcost.catalog.countries import supported_currency_codes
from plmcost.models.enums import MetricKey

# Catalog field holding the per-currency amounts for each monetary metric.
MONETARY_FIELDS: dict[MetricKey, str] = {
    MetricKey.AVERAGE_ENGINEER_SALARY: "average_engineer_salary",
    MetricKey.REWORK_COST: "rework_cost",
    MetricKey.NEW_PRODUCT_REVENUE: "new_product_revenue",
}


class IndustryMetrics(BaseModel):
    """Monetary and operational constants for one industry or sector."""

    average_engineer_salary: dict[str, float] = Field(
        description="Annual engineer salary keyed by currency code"
    )
    rework_cost: dict[str, float] = Field(
        description="Cost of a single rework cycle keyed by currency code"
    )
    new_product_revenue: dict[str, float] = Field(
        description="Annual revenue of one new product keyed by currency code"
    )
    base_wasted_hours: float = Field(ge=0, description="Weekly hours lost per engineer")
    hours_per_site: float = Field(ge=0, description="Extra weekly hours per additional site")
    hours_per_country: float = Field(
        ge=0, description="Extra weekly hours per additional country"
    )
    silo_cost_multiplier: float = Field(
        ge=0, description="Penalty applied to rework and delay costs"
    )

    @field_validator("average_engineer_salary", "rework_cost", "new_product_revenue")
    @classmethod
    def amounts_finite_and_non_negative(cls, v: dict[str, float]) -> dict[str, float]:
        for code, amount in v.items():
            if not math.isfinite(amount) or amount < 0:
                raise ValueError(f"Amount for {code} must be a non-negative number, got {amount}")
        return v

    @model_validator(mode="after")
    def covers_every_supported_currency(self) -> IndustryMetrics:
        required = supported_currency_codes()
        for field_name in MONETARY_FIELDS.values():
            missing = required - set(getattr(self, field_name))
            if missing:
                raise ValueError(f"{field_name} is missing currencies: {sorted(missing)}")
        return self

    def amount(self, metric_key: MetricKey, currency_code: str) -> float:
        """Catalog amount of a monetary metric in the given currency."""
        return getattr(self, MONETARY_FIELDS[metric_key])[currency_code]


class IndustryData(BaseModel):
    """Base metrics for an industry plus optional per-sector replacements."""

    base_metrics: IndustryMetrics
    sectors: dict[str, IndustryMetrics] = Field(default_factory=dict)

    def sector_metrics(self, sector_key: Optional[str]) -> Optional[IndustryMetrics]:
        if not sector_key:
            return None
        return self.sectors.get(sector_key)


class MetricCatalog(BaseModel):
    """Top-level metric catalog document."""

    id: str
    version: str
    fallback_industry: str
    industries: dict[str, IndustryData] = Field(min_length=1)

    @model_validator(mode="after")
    def fallback_industry_present(self) -> MetricCatalog:
        if self.fallback_industry not in self.industries:
            raise ValueError(
                f"Fallback industry '{self.fallback_industry}' has no metrics record"
            )
        return self

    def get_industry(self, industry_key: str) -> Optional[IndustryData]:
        return self.industries.get(industry_key)

    @property
    def fallback(self) -> IndustryData:
        return self.industries[self.fallback_industry]
