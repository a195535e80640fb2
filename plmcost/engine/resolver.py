"""Metric resolution: industry/sector/currency lookup plus user overrides.

Lookup order is sector record, then industry base record, then the
catalog's fallback industry. The catalog has already been completed at
load time, so every industry option resolves to a concrete record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

from plmcost.catalog.countries import supported_currency_codes
from plmcost.catalog.industries import OTHER
from plmcost.catalog.loader import get_default_catalog
from plmcost.catalog.schema import IndustryMetrics, MetricCatalog
from plmcost.engine.overrides import MetricOverrides, is_valid_override
from plmcost.models.enums import OVERRIDABLE_METRICS, MetricKey

logger = logging.getLogger(__name__)

OverridesInput = Union[MetricOverrides, Mapping[str, float], None]


class ResolutionError(LookupError):
    """Metrics could not be resolved from the static tables."""


@dataclass(frozen=True)
class ResolvedMetrics:
    """Effective constants for a single calculation."""

    industry_key: str
    sector_key: Optional[str]
    currency_code: str
    average_engineer_salary: float
    rework_cost: float
    new_product_revenue: float
    base_wasted_hours: float
    hours_per_site: float
    hours_per_country: float
    silo_cost_multiplier: float
    overridden: frozenset[MetricKey] = frozenset()
    catalog_defaults: Mapping[MetricKey, float] = field(default_factory=dict)

    def value(self, metric_key: MetricKey) -> float:
        return {
            MetricKey.AVERAGE_ENGINEER_SALARY: self.average_engineer_salary,
            MetricKey.REWORK_COST: self.rework_cost,
            MetricKey.NEW_PRODUCT_REVENUE: self.new_product_revenue,
            MetricKey.SILO_COST_MULTIPLIER: self.silo_cost_multiplier,
        }[metric_key]

    def is_overridden(self, metric_key: MetricKey) -> bool:
        return metric_key in self.overridden


def select_metrics(
    industry_key: str,
    sector_key: Optional[str],
    catalog: MetricCatalog,
) -> tuple[str, Optional[str], IndustryMetrics]:
    """Pick the catalog record for an industry/sector selection.

    Returns the industry key actually used, the sector key actually used
    (None when base metrics apply) and the metrics record.
    """
    if industry_key == OTHER or catalog.get_industry(industry_key) is None:
        industry_key = catalog.fallback_industry
    industry_data = catalog.get_industry(industry_key)

    if sector_key and sector_key != OTHER:
        sector_metrics = industry_data.sector_metrics(sector_key)
        if sector_metrics is not None:
            return industry_key, sector_key, sector_metrics

    return industry_key, None, industry_data.base_metrics


def resolve(
    industry_key: str,
    sector_key: Optional[str],
    currency_code: str,
    overrides: OverridesInput = None,
    catalog: Optional[MetricCatalog] = None,
) -> ResolvedMetrics:
    """Return the effective metrics for a calculation.

    Raises ResolutionError for a currency outside the country table or a
    catalog record that lacks an amount for it.
    """
    if catalog is None:
        catalog = get_default_catalog()

    if currency_code not in supported_currency_codes():
        raise ResolutionError(f"Unsupported currency code: {currency_code!r}")

    used_industry, used_sector, metrics = select_metrics(industry_key, sector_key, catalog)

    if isinstance(overrides, MetricOverrides):
        raw_overrides = overrides.as_dict()
    else:
        raw_overrides = dict(overrides or {})

    effective: dict[MetricKey, float] = {}
    defaults: dict[MetricKey, float] = {}
    overridden: set[MetricKey] = set()

    for metric_key in OVERRIDABLE_METRICS:
        try:
            default = metrics.amount(metric_key, currency_code)
        except KeyError as e:
            raise ResolutionError(
                f"Catalog record for '{used_industry}' has no {metric_key.value} "
                f"amount in {currency_code}"
            ) from e
        defaults[metric_key] = default

        override = raw_overrides.get(metric_key.value)
        if override is not None and is_valid_override(override):
            effective[metric_key] = float(override)
            overridden.add(metric_key)
        else:
            if override is not None:
                logger.warning(f"Ignoring invalid override {override!r} for {metric_key.value}")
            effective[metric_key] = default

    return ResolvedMetrics(
        industry_key=used_industry,
        sector_key=used_sector,
        currency_code=currency_code,
        average_engineer_salary=effective[MetricKey.AVERAGE_ENGINEER_SALARY],
        rework_cost=effective[MetricKey.REWORK_COST],
        new_product_revenue=effective[MetricKey.NEW_PRODUCT_REVENUE],
        base_wasted_hours=metrics.base_wasted_hours,
        hours_per_site=metrics.hours_per_site,
        hours_per_country=metrics.hours_per_country,
        silo_cost_multiplier=metrics.silo_cost_multiplier,
        overridden=frozenset(overridden),
        catalog_defaults=defaults,
    )
