"""Tests for the cost engine."""

import logging
from dataclasses import replace

import pytest

from hydrolift.core.catalog import BallValveTier, load_catalog
from hydrolift.core.cost import (
    CATEGORIES,
    CostBreakdown,
    accessories_price,
    ball_valve_price,
    ball_valve_tier,
    compute_cost,
    cylinder_price,
    hose_cost,
)
from hydrolift.core.cylinder import LoadInputs, evaluate_cylinders, find_evaluation
from hydrolift.core.selection import HoseConfiguration, select_components, update_selection

MARGINS = 1.16 * 1.30


def _config_90x10():
    inputs = LoadInputs(1000, 800, 3000, 0.5, suspension="2:1", cylinder_count=2, buffer=300)
    return select_components(find_evaluation(evaluate_cylinders(inputs), "90x10"), inputs)


class TestCylinderPrice:
    def test_formula(self):
        expected = (278.0 + 108.0 * 1.65) * MARGINS * 2
        assert cylinder_price("90x10", 1.65, 2) == pytest.approx(expected)

    def test_two_piece_surcharge(self):
        one = cylinder_price("90x10", 1.65, 1)
        two = cylinder_price("90x10", 1.65, 1, two_piece=True)
        assert two - one == pytest.approx(120.0 * MARGINS)

    def test_unknown_type_is_zero(self, caplog):
        """Scenario B: unpriced cylinder type costs nothing and does not raise."""
        with caplog.at_level(logging.WARNING):
            assert cylinder_price("999x9", 2.0, 2) == 0.0
        assert "999x9" in caplog.text


class TestHoseCost:
    def test_single_cylinder_main_line_only(self):
        hoses = HoseConfiguration("1-1/2", "1-1/4", cylinder_count=1)
        assert hose_cost(hoses) == pytest.approx(24.5 * 5)

    def test_multi_cylinder(self):
        hoses = HoseConfiguration("1-1/2", "1-1/4", main_length=4, cylinder_length=3, cylinder_count=2)
        assert hose_cost(hoses) == pytest.approx(24.5 * 4 + 17.8 * 3 * 2)

    def test_unknown_diameter(self):
        hoses = HoseConfiguration("9", "9", cylinder_count=2)
        assert hose_cost(hoses) == 0.0


class TestBallValve:
    @pytest.mark.parametrize(
        "name, tier",
        [
            ("0,5'' KV1P", BallValveTier.KV),
            ("0,75'' EV100", BallValveTier.EV100_075),
            ("1,5'' EV100", BallValveTier.EV100_150),
            ("2'' EV100", BallValveTier.EV100_200),
            ("0,5'' GV", None),
        ],
    )
    def test_tier(self, name, tier):
        assert ball_valve_tier(name) is tier

    def test_price_by_main_valve(self):
        assert ball_valve_price("ev100_150") == pytest.approx(67.0)
        assert ball_valve_price("kv2s050") == pytest.approx(24.0)

    def test_fallback_price(self):
        assert ball_valve_price("gv050") == pytest.approx(42.0)
        assert ball_valve_price("unknown") == pytest.approx(42.0)


class TestAccessoriesPrice:
    def test_power_unit_hoses_not_counted(self):
        assert accessories_price({"power_unit_hoses"}, "ev100_075") == 0.0

    def test_ball_valve_dynamic(self):
        assert accessories_price({"ball_valve"}, "ev100_150") == pytest.approx(67.0)

    def test_sum(self):
        assert accessories_price({"hand_pump", "manometer"}, "ev100_075") == pytest.approx(99.0)

    def test_unknown_ignored(self):
        assert accessories_price({"hand_pump", "mystery"}, "ev100_075") == pytest.approx(85.0)


class TestComputeCost:
    def test_breakdown(self):
        cost = compute_cost(_config_90x10())
        assert cost.cylinders == pytest.approx((278.0 + 108.0 * 1.65) * MARGINS * 2)
        assert cost.motor == pytest.approx(721.0)
        assert cost.pump == pytest.approx(425.0)
        assert cost.power_unit == pytest.approx(590.0)
        assert cost.rupture_valve == pytest.approx(96.0 * 2)
        assert cost.main_valve == pytest.approx(820.0)
        assert cost.accessories == pytest.approx(67.0 + 85.0 + 14.0 + 38.0)

    def test_total_is_exact_sum(self):
        cost = compute_cost(_config_90x10())
        assert cost.total == sum(cost.as_dict().values())
        assert set(cost.as_dict()) == set(CATEGORIES)

    def test_idempotent(self):
        config = _config_90x10()
        assert compute_cost(config) == compute_cost(config)

    def test_power_unit_hoses_added(self):
        config = _config_90x10()
        with_hoses = update_selection(config, accessories=config.accessories | {"power_unit_hoses"})
        delta = compute_cost(with_hoses).power_unit - compute_cost(config).power_unit
        assert delta == pytest.approx(hose_cost(config.hoses))

    def test_hoses_ignored_without_power_unit(self):
        config = _config_90x10()
        config = update_selection(config, power_unit=None, accessories={"power_unit_hoses"})
        assert compute_cost(config).power_unit == 0.0

    def test_no_rupture_valve(self):
        config = update_selection(_config_90x10(), rupture_valve=None)
        assert compute_cost(config).rupture_valve == 0.0

    def test_unknown_components_price_zero(self):
        config = update_selection(_config_90x10(), motor="m999", pump="kp999", main_valve="xx")
        cost = compute_cost(config)
        assert cost.motor == 0.0
        assert cost.pump == 0.0
        assert cost.main_valve == 0.0
        assert cost.total == sum(cost.as_dict().values())

    def test_unpriced_cylinder(self):
        config = replace(_config_90x10(), cylinder_type="999x9")
        assert compute_cost(config).cylinders == 0.0

    def test_default_breakdown_total(self):
        assert CostBreakdown().total == 0.0
