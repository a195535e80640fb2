"""Hidden-cost formulas for poor product-lifecycle management.

Each function is a pure calculation with no side effects. Monetary
inputs are annual figures in the selected local currency and results
are unrounded.
"""

from plmcost.cost_library.registry import register_component
from plmcost.models.enums import CostComponent, InfoLocation, MetricKey

WEEKS_PER_YEAR = 52


def calc_wasted_hours(
    base_wasted_hours: float,
    hours_per_site: float,
    hours_per_country: float,
    num_sites: float,
    num_countries: float,
) -> float:
    """Weekly hours lost per engineer.

    Only sites and countries beyond the first add hours, so values of 0
    and 1 are equivalent.
    """
    if base_wasted_hours < 0 or hours_per_site < 0 or hours_per_country < 0:
        raise ValueError("wasted-hour constants cannot be negative")
    if num_sites < 0:
        raise ValueError("num_sites cannot be negative")
    if num_countries < 0:
        raise ValueError("num_countries cannot be negative")
    return (
        base_wasted_hours
        + max(0, num_sites - 1) * hours_per_site
        + max(0, num_countries - 1) * hours_per_country
    )


@register_component(
    component_id=CostComponent.COLLABORATION,
    category="Cost of Inefficiency from Distributed Collaboration",
    description=(
        "Salary paid for time engineers lose to communication and data "
        "searching across sites and countries. "
        "Formula: (annual_salary / 52) * wasted_hours * engineers."
    ),
    metric_key=MetricKey.AVERAGE_ENGINEER_SALARY,
    metric_label="Annual Salary",
    position=0,
)
def calc_collaboration_cost(
    average_engineer_salary: float,
    wasted_hours: float,
    engineers: float,
) -> float:
    """Collaboration = (salary / 52) x wasted_hours x engineers"""
    if average_engineer_salary < 0:
        raise ValueError("average_engineer_salary cannot be negative")
    if wasted_hours < 0:
        raise ValueError("wasted_hours cannot be negative")
    if engineers < 0:
        raise ValueError("engineers cannot be negative")
    return (average_engineer_salary / WEEKS_PER_YEAR) * wasted_hours * engineers


@register_component(
    component_id=CostComponent.REWORK,
    category="Cost of Engineering and Production Rework",
    description=(
        "Cost of rework cycles caused by design errors or outdated information. "
        "Formula: new_products * reworks_per_product * cost_per_rework."
    ),
    metric_key=MetricKey.REWORK_COST,
    metric_label="Cost per Rework",
    position=1,
)
def calc_rework_cost(
    new_products: float,
    reworks: float,
    rework_cost_per_cycle: float,
) -> float:
    """Rework = products x reworks_per_product x cost_per_cycle"""
    if new_products < 0:
        raise ValueError("new_products cannot be negative")
    if reworks < 0:
        raise ValueError("reworks cannot be negative")
    if rework_cost_per_cycle < 0:
        raise ValueError("rework_cost_per_cycle cannot be negative")
    return new_products * reworks * rework_cost_per_cycle


@register_component(
    component_id=CostComponent.DELAY,
    category="Opportunity Cost from Market Delay",
    description=(
        "Revenue lost while new products are late to market. "
        "Formula: (annual_revenue_per_product / 52) * weeks_of_delay * new_products."
    ),
    metric_key=MetricKey.NEW_PRODUCT_REVENUE,
    metric_label="Annual Revenue per Product",
    position=2,
)
def calc_delay_cost(
    new_product_revenue: float,
    delays: float,
    new_products: float,
) -> float:
    """Delay = (revenue / 52) x weeks_of_delay x products"""
    if new_product_revenue < 0:
        raise ValueError("new_product_revenue cannot be negative")
    if delays < 0:
        raise ValueError("delays cannot be negative")
    if new_products < 0:
        raise ValueError("new_products cannot be negative")
    return (new_product_revenue / WEEKS_PER_YEAR) * delays * new_products


@register_component(
    component_id=CostComponent.SILO_RISK,
    category="Cost of Risk from Information Silos",
    description=(
        "Risk premium paid when critical product data lives on personal PCs. "
        "Formula: (rework_cost + delay_cost) * silo_multiplier, zero for a "
        "corporate system."
    ),
    metric_key=MetricKey.SILO_COST_MULTIPLIER,
    metric_label="Silo Risk Multiplier",
    position=3,
)
def calc_silo_risk_cost(
    rework_loss: float,
    delay_loss: float,
    silo_cost_multiplier: float,
    info_location: InfoLocation,
) -> float:
    """Silo = (rework + delay) x multiplier when data is decentralized, else 0"""
    if InfoLocation(info_location) is not InfoLocation.PERSONAL_PC:
        return 0.0
    if rework_loss < 0 or delay_loss < 0:
        raise ValueError("rework and delay losses cannot be negative")
    if silo_cost_multiplier < 0:
        raise ValueError("silo_cost_multiplier cannot be negative")
    return (rework_loss + delay_loss) * silo_cost_multiplier
