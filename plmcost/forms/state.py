"""Calculator form state, field-change rules and submit validation."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace

from plmcost.catalog.countries import DEFAULT_CURRENCY, get_country
from plmcost.catalog.industries import (
    GENERAL_SECTOR_LABEL,
    OTHER,
    find_option_by_label,
    get_industry_label,
    sectors_for,
)
from plmcost.models.enums import InfoLocation
from plmcost.models.inputs import OperationalCounts

logger = logging.getLogger(__name__)

INFO_LOCATION_LABELS = {
    InfoLocation.CORPORATE: "Corporate System",
    InfoLocation.PERSONAL_PC: "Personal PC",
}

# Form field -> (OperationalCounts field, label used in messages)
COUNT_FIELDS: dict[str, tuple[str, str]] = {
    "engineers": ("engineers", "Number of engineers"),
    "num_sites": ("num_sites", "Number of sites"),
    "num_countries": ("num_countries", "Number of countries"),
    "new_products": ("new_products", "New products per year"),
    "reworks": ("reworks", "Reworks per product"),
    "delays": ("delays", "Weeks of delay"),
}


class InputValidationError(ValueError):
    """The form cannot be submitted; carries every problem found."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass(frozen=True)
class FormState:
    """Raw form values as typed by the user.

    Counts stay strings until submit so partially typed input is kept.
    """

    company_name: str = ""
    industry: str = ""
    industry_input: str = ""
    other_industry: str = ""
    sector: str = ""
    sector_input: str = ""
    other_sector: str = ""
    country_code: str = DEFAULT_CURRENCY
    engineers: str = "10"
    num_sites: str = "1"
    num_countries: str = "1"
    info_location: InfoLocation = InfoLocation.CORPORATE
    new_products: str = "5"
    reworks: str = "3"
    delays: str = "2"


FORM_FIELDS = frozenset(f.name for f in fields(FormState))


def apply_field_change(state: FormState, field_name: str, raw: str) -> FormState:
    """Return the form state after the user edits one field."""
    if field_name not in FORM_FIELDS:
        raise KeyError(f"Unknown form field: {field_name}")

    if field_name == "industry_input":
        return _change_industry(state, raw)
    if field_name == "sector_input":
        return _change_sector(state, raw)
    if field_name == "info_location":
        return replace(state, info_location=InfoLocation(raw))
    return replace(state, **{field_name: raw})


def _change_industry(state: FormState, raw: str) -> FormState:
    option = find_option_by_label(raw)
    if option is not None:
        industry, other_industry = option.value, ""
    else:
        industry, other_industry = OTHER, raw

    updated = replace(
        state, industry_input=raw, industry=industry, other_industry=other_industry
    )
    if industry != state.industry:
        # Sector choices belong to the previous industry
        updated = replace(updated, sector="", other_sector="", sector_input="")
    return updated


def _change_sector(state: FormState, raw: str) -> FormState:
    if raw in ("", GENERAL_SECTOR_LABEL):
        sector, other_sector = "", ""
    elif raw in sectors_for(state.industry):
        sector, other_sector = raw, ""
    else:
        sector, other_sector = OTHER, raw
    return replace(state, sector_input=raw, sector=sector, other_sector=other_sector)


def _parse_count(raw: str) -> float | None:
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def validate_form(state: FormState) -> list[str]:
    """Every reason the form cannot be submitted; empty when it is valid."""
    errors = []
    if not state.industry or not state.industry_input:
        errors.append("Please select or specify an industry.")
    if not state.company_name.strip():
        errors.append("Please enter a company name.")
    if get_country(state.country_code) is None:
        errors.append(f"Unknown country code: {state.country_code}")
    for form_field, (_, label) in COUNT_FIELDS.items():
        if _parse_count(getattr(state, form_field)) is None:
            errors.append(f"{label} must be a non-negative number.")
    return errors


def to_counts(state: FormState) -> OperationalCounts:
    """Validated operational counts for a submit.

    Raises InputValidationError listing every problem with the form.
    """
    errors = validate_form(state)
    if errors:
        logger.info(f"Form rejected: {errors}")
        raise InputValidationError(errors)
    return OperationalCounts(
        **{
            count_field: _parse_count(getattr(state, form_field))
            for form_field, (count_field, _) in COUNT_FIELDS.items()
        }
    )


def industry_label(state: FormState) -> str:
    if state.industry == OTHER and state.other_industry:
        return state.other_industry
    return get_industry_label(state.industry) or state.industry


def sector_label(state: FormState) -> str:
    if state.sector == OTHER and state.other_sector:
        return state.other_sector
    return state.sector


def info_location_label(info_location: InfoLocation) -> str:
    return INFO_LOCATION_LABELS[InfoLocation(info_location)]
