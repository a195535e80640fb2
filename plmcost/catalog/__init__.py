from .countries import COUNTRIES, Country, get_country, supported_currency_codes
from .industries import FALLBACK_INDUSTRY, INDUSTRY_OPTIONS, SECTORS
from .loader import CatalogError, get_default_catalog, load_catalog
from .schema import IndustryData, IndustryMetrics, MetricCatalog

__all__ = [
    "COUNTRIES",
    "Country",
    "get_country",
    "supported_currency_codes",
    "FALLBACK_INDUSTRY",
    "INDUSTRY_OPTIONS",
    "SECTORS",
    "CatalogError",
    "get_default_catalog",
    "load_catalog",
    "IndustryData",
    "IndustryMetrics",
    "MetricCatalog",
]
