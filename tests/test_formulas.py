"""Unit tests for each hidden-cost formula."""

import pytest

from plmcost.cost_library.formulas import (
    calc_collaboration_cost,
    calc_delay_cost,
    calc_rework_cost,
    calc_silo_risk_cost,
    calc_wasted_hours,
)
from plmcost.cost_library.registry import get_all_components, get_component
from plmcost.models.enums import CostComponent, InfoLocation, MetricKey


class TestWastedHours:
    def test_single_site_has_no_penalty(self):
        assert calc_wasted_hours(2.0, 0.5, 1.0, num_sites=1, num_countries=1) == pytest.approx(2.0)

    def test_additional_sites_and_countries(self):
        # 2.0 + 2 * 0.5 + 1 * 1.0
        assert calc_wasted_hours(2.0, 0.5, 1.0, num_sites=3, num_countries=2) == pytest.approx(4.0)

    def test_zero_sites_same_as_one(self):
        zero = calc_wasted_hours(2.0, 0.5, 1.0, num_sites=0, num_countries=0)
        one = calc_wasted_hours(2.0, 0.5, 1.0, num_sites=1, num_countries=1)
        assert zero == one

    def test_monotonic_in_sites(self):
        values = [calc_wasted_hours(2.0, 0.5, 1.0, n, 1) for n in range(0, 6)]
        assert values == sorted(values)

    def test_negative_sites_raises(self):
        with pytest.raises(ValueError, match="num_sites"):
            calc_wasted_hours(2.0, 0.5, 1.0, num_sites=-1, num_countries=1)


class TestCollaborationCost:
    def test_basic_calculation(self):
        # $70,000 / 52 * 2h * 10 engineers = $26,923.08
        result = calc_collaboration_cost(70_000, wasted_hours=2.0, engineers=10)
        assert result == pytest.approx(26_923.0769, rel=1e-6)

    def test_zero_engineers(self):
        assert calc_collaboration_cost(70_000, wasted_hours=2.0, engineers=0) == 0.0

    def test_negative_salary_raises(self):
        with pytest.raises(ValueError, match="average_engineer_salary"):
            calc_collaboration_cost(-1, wasted_hours=2.0, engineers=10)


class TestReworkCost:
    def test_basic_calculation(self):
        assert calc_rework_cost(new_products=5, reworks=3, rework_cost_per_cycle=5_000) == 75_000

    def test_negative_reworks_raises(self):
        with pytest.raises(ValueError, match="reworks"):
            calc_rework_cost(new_products=5, reworks=-3, rework_cost_per_cycle=5_000)


class TestDelayCost:
    def test_basic_calculation(self):
        # $2M / 52 * 2 weeks * 5 products
        result = calc_delay_cost(new_product_revenue=2_000_000, delays=2, new_products=5)
        assert result == pytest.approx(384_615.3846, rel=1e-6)

    def test_no_delay(self):
        assert calc_delay_cost(new_product_revenue=2_000_000, delays=0, new_products=5) == 0.0


class TestSiloRiskCost:
    def test_personal_pc_applies_multiplier(self):
        result = calc_silo_risk_cost(75_000, 384_615.3846, 0.20, InfoLocation.PERSONAL_PC)
        assert result == pytest.approx(91_923.0769, rel=1e-6)

    def test_corporate_is_exactly_zero(self):
        result = calc_silo_risk_cost(75_000, 384_615.3846, 0.20, InfoLocation.CORPORATE)
        assert result == 0.0

    def test_accepts_raw_string_location(self):
        assert calc_silo_risk_cost(100, 100, 0.5, "personal_pc") == pytest.approx(100)


class TestRegistry:
    def test_four_components_in_breakdown_order(self):
        ids = [d.id for d in get_all_components()]
        assert ids == [
            CostComponent.COLLABORATION,
            CostComponent.REWORK,
            CostComponent.DELAY,
            CostComponent.SILO_RISK,
        ]

    def test_silo_reports_multiplier(self):
        definition = get_component(CostComponent.SILO_RISK)
        assert definition.metric_key is MetricKey.SILO_COST_MULTIPLIER
        assert definition.category == "Cost of Risk from Information Silos"

    def test_formula_functions_registered(self):
        assert get_component(CostComponent.REWORK).formula_fn is calc_rework_cost
