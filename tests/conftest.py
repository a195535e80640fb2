"""Shared test fixtures for the plmcost test suite."""

import pytest

from plmcost.catalog.countries import get_country
from plmcost.engine.calculator import calculate
from plmcost.engine.narrative import build_result
from plmcost.engine.resolver import resolve
from plmcost.forms.state import FormState
from plmcost.models.enums import InfoLocation
from plmcost.models.inputs import OperationalCounts
from plmcost.models.narrative import (
    ChartInterpretationsPayload,
    Explanation,
    NarrativeContent,
)
from plmcost.providers.base import decorate

FALLBACK = "general-discrete-manufacturing"


@pytest.fixture
def base_counts() -> OperationalCounts:
    """Counts of the reference example: 10 engineers, one site, one country."""
    return OperationalCounts(
        engineers=10,
        num_sites=1,
        num_countries=1,
        new_products=5,
        reworks=3,
        delays=2,
    )


@pytest.fixture
def usd():
    return get_country("USD")


@pytest.fixture
def base_resolved():
    """General discrete manufacturing metrics in USD, no overrides."""
    return resolve(FALLBACK, "", "USD")


@pytest.fixture
def filled_form() -> FormState:
    """A submittable form whose industry falls back to general manufacturing."""
    return FormState(
        company_name="Acme Machines",
        industry="industrial-machinery",
        industry_input="Industrial Machinery",
        country_code="USD",
        info_location=InfoLocation.CORPORATE,
    )


@pytest.fixture
def narrative_content() -> NarrativeContent:
    return NarrativeContent(
        summary="Hidden costs drain capital.",
        explanations=[
            Explanation(explanation="Collaboration insight."),
            Explanation(explanation="Rework insight."),
            Explanation(explanation="Delay insight."),
            Explanation(explanation="Silo insight."),
        ],
        methodology_notes="Conservative market estimates.",
        chart_interpretations=ChartInterpretationsPayload(
            bar="Delay dominates.", pie="One concentrated problem.", radar="Process quality."
        ),
    )


@pytest.fixture
def completed_result(base_resolved, base_counts, usd, narrative_content):
    """The reference example with prose attached, as stored after a submit."""
    components = calculate(base_resolved, base_counts, InfoLocation.CORPORATE)
    result = build_result(base_resolved, base_counts, components, InfoLocation.CORPORATE, usd)
    return decorate(result, narrative_content)
