from enum import Enum


class InfoLocation(str, Enum):
    CORPORATE = "corporate"
    PERSONAL_PC = "personal_pc"


class MetricKey(str, Enum):
    AVERAGE_ENGINEER_SALARY = "averageEngineerSalary"
    REWORK_COST = "reworkCost"
    NEW_PRODUCT_REVENUE = "newProductRevenue"
    SILO_COST_MULTIPLIER = "siloCostMultiplier"


# Only the monetary metrics can be replaced by user-supplied values.
OVERRIDABLE_METRICS: tuple[MetricKey, ...] = (
    MetricKey.AVERAGE_ENGINEER_SALARY,
    MetricKey.REWORK_COST,
    MetricKey.NEW_PRODUCT_REVENUE,
)


class OverrideState(str, Enum):
    NO_OVERRIDES = "no_overrides"
    PARTIALLY_OVERRIDDEN = "partially_overridden"
    FULLY_OVERRIDDEN = "fully_overridden"


class ChartType(str, Enum):
    BAR = "bar"
    PIE = "pie"
    RADAR = "radar"


class CostComponent(str, Enum):
    COLLABORATION = "collaboration"
    REWORK = "rework"
    DELAY = "delay"
    SILO_RISK = "silo_risk"
