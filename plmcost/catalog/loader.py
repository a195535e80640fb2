"""Load, validate, and complete the industry metric catalog."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from plmcost.catalog.industries import INDUSTRY_OPTIONS
from plmcost.catalog.schema import MetricCatalog

logger = logging.getLogger(__name__)

# Default directory for catalog documents
_CONFIG_DIR = Path(__file__).parent / "configs"


class CatalogError(ValueError):
    """The bundled metric catalog is missing or inconsistent."""


def load_catalog(file_path: Path | None = None) -> MetricCatalog:
    """Load and validate a metric catalog from a JSON file.

    If no path is provided, loads the bundled V1 catalog. The result is
    completed so that every industry option has a metrics record.
    """
    if file_path is None:
        file_path = _CONFIG_DIR / "industry_metrics_v1.json"

    if not file_path.exists():
        raise FileNotFoundError(f"Metric catalog not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    try:
        catalog = MetricCatalog.model_validate(raw)
    except ValidationError as e:
        raise CatalogError(f"Invalid metric catalog {file_path.name}: {e}") from e

    return complete_catalog(catalog, (opt.value for opt in INDUSTRY_OPTIONS))


def complete_catalog(catalog: MetricCatalog, industry_keys: Iterable[str]) -> MetricCatalog:
    """Return a catalog where every listed industry has a metrics record.

    Industries without their own record share the fallback industry's
    record. The input catalog is left untouched.
    """
    industries = dict(catalog.industries)
    filled: list[str] = []
    for key in industry_keys:
        if key not in industries:
            industries[key] = catalog.fallback
            filled.append(key)

    if filled:
        logger.debug(
            f"Completed {len(filled)} industries from {catalog.fallback_industry}: "
            f"{', '.join(filled)}"
        )
    return catalog.model_copy(update={"industries": industries})


@lru_cache(maxsize=1)
def get_default_catalog() -> MetricCatalog:
    """Load the bundled catalog once per process."""
    return load_catalog()
