"""System prompt and formatter for the consultant-style cost narrative."""

from __future__ import annotations

from babel import numbers

from plmcost.engine.narrative import format_count
from plmcost.engine.result import CalculationResult
from plmcost.models.enums import InfoLocation
from plmcost.models.narrative import NarrativeContext

SYSTEM_PROMPT = """\
You are a senior business strategy consultant specializing in process \
optimization for manufacturing companies using PLM (Product Lifecycle \
Management) systems. You receive company context and cost results that have \
already been calculated, and you write a persuasive, professional analysis \
around them.

## Rules
- The numbers are final. Never recalculate, round differently or contradict them.
- Write in a confident executive register, one paragraph per field.
- Respond with a single JSON object and nothing else: no markdown fences, \
no commentary before or after.

## JSON Output Format
{
    "summary": "...",
    "explanations": [
        {"explanation": "..."},
        {"explanation": "..."},
        {"explanation": "..."},
        {"explanation": "..."}
    ],
    "methodologyNotes": "...",
    "chartInterpretations": {
        "bar": "...",
        "pie": "...",
        "radar": "..."
    }
}
"""

_INFO_LOCATION_TEXT = {
    InfoLocation.CORPORATE: "Corporate system (centralized)",
    InfoLocation.PERSONAL_PC: "Personal PCs (highly decentralized)",
}

_SILO_GUIDANCE = {
    InfoLocation.PERSONAL_PC: (
        "Emphasize that storing data on PCs is the biggest operational risk, "
        "creating 'silos' that guarantee the use of outdated information. Explain "
        "that the calculated cost is a risk premium the company pays for not "
        "having control over its intellectual assets."
    ),
    InfoLocation.CORPORATE: (
        "Praise the decision to use a corporate system, but warn that without a "
        "formal PLM structure, even centralized systems can become disorganized "
        "and generate hidden costs. Mention that the risk cost is zero thanks to "
        "this good initial practice."
    ),
}


def _money(value: int, currency_code: str) -> str:
    return numbers.format_currency(value, currency_code, locale="en_US")


def _plain(value: int) -> str:
    return numbers.format_decimal(value, format="#,##0", locale="en_US")


def format_narrative_prompt(context: NarrativeContext, result: CalculationResult) -> str:
    """Format the user message with the calculated figures and writing instructions."""
    country = context.country
    sites = format_count(context.num_sites)
    countries = format_count(context.num_countries)
    breakdown = result.cost_breakdown
    lines: list[str] = []

    lines.append("# Company Data and Context")
    lines.append(f"- Company Name: {context.company_name}")
    lines.append(f"- Industry: {context.industry}")
    if context.sector:
        lines.append(f"- Specific Sector: {context.sector}")
    lines.append(f"- Country: {country.name}")
    lines.append(f"- Currency: {country.code}")
    lines.append(
        f"- Structure: {format_count(context.engineers)} engineers across "
        f"{sites} sites and {countries} countries."
    )
    lines.append(f"- Information Management: {_INFO_LOCATION_TEXT[context.info_location]}.")

    lines.append("\n# Numerical Results (already calculated, do not change them)")
    lines.append(f"- Total Estimated Annual Loss: {_money(result.total_cost, country.code)}")
    lines.append("- Cost Breakdown:")
    for item in breakdown:
        lines.append(f"  - {item.category}: {_money(item.cost, country.code)}")

    lines.append("\n# Content to Write")
    lines.append(
        f"1. summary: An executive-level paragraph. Frame the total cost "
        f"({_plain(result.total_cost)}) as a strategic risk for a company with a "
        f"distributed structure ({sites} sites). Define this cost as a 'capital "
        "drain' that inhibits innovation. Position a PLM as the critical "
        "investment to unify information, optimize multi-site collaboration, "
        "and strengthen competitiveness."
    )
    lines.append(
        "2. explanations: One \"Consultant's Insight\" per breakdown item, in the "
        "same order. Connect the numerical cost to a process weakness, "
        "considering the company's structure and data management."
    )
    guidance = [
        f"Explain how the complexity of having {sites} sites and {countries} "
        "countries creates communication and data-searching overhead that a "
        "centralized PLM eliminates.",
        'Link reworks to the lack of a "single source of truth," a problem '
        "exacerbated by distributed teams and non-centralized data.",
        "Argue that delays are a direct consequence of operational friction "
        "(inefficient communication and reworks), preventing the agility needed "
        "to compete.",
        _SILO_GUIDANCE[context.info_location],
    ]
    for item, text in zip(breakdown, guidance):
        lines.append(f'   - For "{item.category}" ({_plain(item.cost)}): {text}')
    lines.append(
        "3. methodologyNotes: A brief summary of the assumptions. Mention that "
        "the calculations are based on metrics that model the complexity of "
        "collaboration in distributed teams and the risks of decentralized data "
        "management, offering a realistic estimate."
    )
    lines.append(
        "4. chartInterpretations: One interpretation per chart type, "
        f"contextualized to the challenges of a company with {sites} sites."
    )
    lines.append(
        "   - bar: What the comparison of the bars reveals. Does the biggest cost "
        "come from structural complexity (collaboration), execution "
        "(reworks/delays), or risk (silos)?"
    )
    lines.append(
        "   - pie: The percentage distribution. Does it show one concentrated "
        "problem or several contributing issues? How does this help prioritize "
        "a PLM investment?"
    )
    lines.append(
        "   - radar: The \"inefficiency profile.\" High values for sites and "
        "countries suggest scale and complexity issues; high values for reworks "
        "or delays suggest process quality problems. What profile emerges?"
    )

    return "\n".join(lines)
