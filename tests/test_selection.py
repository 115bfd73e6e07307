"""Tests for the component selector."""

import pytest

from hydrolift.core.catalog import Catalog, CatalogError, HoseSize, Motor, Pump, load_catalog
from hydrolift.core.cylinder import LoadInputs, evaluate_cylinders, find_evaluation
from hydrolift.core.selection import (
    MAIN_VALVE_LARGE,
    MAIN_VALVE_SMALL,
    RUPTURE_OUT_OF_RANGE,
    SelectedConfiguration,
    cylinder_area,
    effective_speed,
    max_flow_per_cylinder,
    motor_electrical,
    motor_options,
    recommend_hose,
    required_flow,
    required_oil_volume,
    required_power,
    rupture_size,
    rupture_valve_options,
    select_components,
    select_main_valve,
    select_motor,
    select_power_unit,
    select_pump,
    select_rupture_valve,
    toggle_accessories,
    update_selection,
)
from hydrolift.utils.constants import PI


def _scenario_a() -> LoadInputs:
    return LoadInputs(1000, 800, 3000, 0.5, suspension="2:1", cylinder_count=2, buffer=300)


def _config_90x10() -> SelectedConfiguration:
    inputs = _scenario_a()
    evaluation = find_evaluation(evaluate_cylinders(inputs), "90x10")
    return select_components(evaluation, inputs)


class TestHydraulicFigures:
    def test_required_flow(self):
        area = cylinder_area(90)
        assert required_flow(0.5, area, 2, 2) == pytest.approx(0.5 * area * 60 * 2 / 2000)

    def test_effective_speed_inverts_required_flow(self):
        area = cylinder_area(100)
        q = required_flow(0.63, area, 2, 2)
        assert effective_speed(q, area, 2, 2) == pytest.approx(0.63)

    def test_required_power(self):
        assert required_power(100, 30) == pytest.approx(100 * 30 * 1.3 / 600)

    def test_max_flow_per_cylinder(self):
        area = cylinder_area(90)
        assert max_flow_per_cylinder(0.5, area, 2) == pytest.approx(0.8 * area * 60 / 2000)

    def test_oil_volume_uses_travel(self):
        assert required_oil_volume(90, 3000, 2) == pytest.approx(PI / 4 * 8100 * 3.0 * 2 / 1000 * 1.5)


class TestPumpAndMotor:
    def test_first_sufficient_pump(self):
        assert select_pump(190.9, load_catalog()).code == "kp210"

    def test_exact_pump_flow(self):
        assert select_pump(210, load_catalog()).code == "kp210"

    def test_pump_fallback_largest(self):
        assert select_pump(10_000, load_catalog()).code == "kp380"

    def test_motor_fallback_largest(self):
        """Oversized demand falls back to the largest motor, not a pump index."""
        assert select_motor(500, load_catalog()).code == "m36.8"

    def test_first_sufficient_motor(self):
        assert select_motor(13.56, load_catalog()).code == "m14.7"

    def test_fallback_uses_largest_in_unsorted_catalog(self):
        catalog = Catalog(
            pumps=(Pump("p1", "P1", 100, 1.0), Pump("p2", "P2", 300, 1.0), Pump("p3", "P3", 200, 1.0)),
            motors=(Motor("m1", "M1", 11, 1.0), Motor("m2", "M2", 22, 1.0), Motor("m3", "M3", 15, 1.0)),
        )
        assert select_motor(100.0, catalog).code == "m2"
        assert select_pump(1000.0, catalog).code == "p2"

    def test_empty_catalog_raises(self):
        with pytest.raises(CatalogError):
            select_pump(10, Catalog())
        with pytest.raises(CatalogError):
            select_motor(10, Catalog())

    def test_motor_options_flags(self):
        options = motor_options(13.56, load_catalog())
        recommended = [o for o in options if o.recommended]
        assert len(recommended) == 1
        assert recommended[0].motor.code == "m14.7"
        assert not next(o for o in options if o.motor.code == "m11.8").sufficient


class TestMainValve:
    def test_boundary_inclusive(self):
        assert select_main_valve(122) == MAIN_VALVE_SMALL
        assert select_main_valve(123) == MAIN_VALVE_LARGE

    def test_only_two_tiers(self):
        codes = {select_main_valve(q) for q in (10, 75, 76, 122, 123, 400, 401, 5000)}
        assert codes == {MAIN_VALVE_SMALL, MAIN_VALVE_LARGE}


class TestRuptureValve:
    @pytest.mark.parametrize(
        "flow, size",
        [(55, '0.5"'), (55.1, '0.75"'), (100, '0.75"'), (165, '1.0"'), (400, '1.5"'), (1200, '2.0"')],
    )
    def test_size_breakpoints(self, flow, size):
        assert rupture_size(flow) == size

    def test_out_of_range(self):
        assert rupture_size(1200.1) == RUPTURE_OUT_OF_RANGE

    def test_single_cylinder_never_dual(self):
        catalog = load_catalog()
        for size in ('0.5"', '0.75"', '1.0"', '1.5"', '2.0"'):
            valve = select_rupture_valve(size, 1, catalog)
            assert valve is not None
            assert valve.dual is False

    def test_dual_for_two_cylinders(self):
        valve = select_rupture_valve('1.0"', 2, load_catalog())
        assert valve.code == "r10_100_dk"

    def test_dual_half_inch_upgrades(self):
        valve = select_rupture_valve('0.5"', 2, load_catalog())
        assert valve.code == "r10_075_dk"

    def test_other_missing_combination_is_none(self):
        catalog = Catalog.from_dict(
            {
                "cylinder_sizes": [],
                "rupture_valves": [
                    {"code": "r1", "name": "R 1''", "size": '1.0"', "dual": False, "price": 1.0}
                ],
            }
        )
        assert select_rupture_valve('1.0"', 2, catalog) is None

    def test_out_of_range_is_none(self):
        assert select_rupture_valve(RUPTURE_OUT_OF_RANGE, 2, load_catalog()) is None

    def test_options_match_count(self):
        assert all(v.dual for v in rupture_valve_options(3, load_catalog()))
        assert not any(v.dual for v in rupture_valve_options(1, load_catalog()))


class TestPowerUnit:
    def test_smallest_suitable(self):
        assert select_power_unit(57.3, load_catalog()).code == "gu60"

    def test_none_when_too_large(self):
        assert select_power_unit(10_000, load_catalog()) is None


class TestRecommendHose:
    def test_first_hose_covering_flow(self):
        assert recommend_hose(100.0, load_catalog()).code == "1"
        assert recommend_hose(100.1, load_catalog()).code == "1-1/4"

    def test_largest_when_flow_exceeds_all(self):
        assert recommend_hose(5000.0, load_catalog()).code == "2"

    def test_largest_in_unsorted_catalog(self):
        catalog = Catalog(
            hoses=(HoseSize("a", "A", 60, 1.0), HoseSize("b", "B", 250, 1.0), HoseSize("c", "C", 100, 1.0))
        )
        assert recommend_hose(5000.0, catalog).code == "b"


class TestMotorElectrical:
    def test_nominal_current_380(self):
        motor = load_catalog().motor("m11.8")
        elec = motor_electrical(motor, "380V")
        assert elec.nominal_current == pytest.approx(1.5 * 11.8 * 1000 / (1.732 * 400 * 0.79))
        assert elec.star_current == motor.current_380.star

    def test_220_without_data(self):
        elec = motor_electrical(load_catalog().motor("m22"), "220V")
        assert elec.star_current is None
        assert elec.delta_current is None
        assert elec.nominal_current > 0

    def test_unknown_voltage(self):
        with pytest.raises(ValueError):
            motor_electrical(load_catalog().motor("m22"), "110V")


class TestSelectComponents:
    def test_scenario_a_picks(self):
        config = _config_90x10()
        assert config.cylinder_type == "90x10"
        assert config.pump == "kp210"
        assert config.motor == "m14.7"
        assert config.main_valve == MAIN_VALVE_LARGE
        assert config.rupture_valve == "r10_100_dk"
        assert config.power_unit == "gu60"

    def test_sizing_figures(self):
        s = _config_90x10().sizing
        area = PI / 4 * 90**2
        assert s.required_flow == pytest.approx(0.5 * area * 60 * 2 / 2000)
        assert s.actual_flow == 210
        assert s.rupture_size == '1.0"'
        assert s.required_oil_volume == pytest.approx(57.26, abs=0.01)
        assert s.recommended_motor == "m14.7"

    def test_hoses(self):
        hoses = _config_90x10().hoses
        assert hoses.main_diameter == "1-1/2"
        assert hoses.cylinder_diameter == "1-1/4"
        assert hoses.cylinder_count == 2

    def test_default_accessories(self):
        assert _config_90x10().accessories == load_catalog().default_accessories()

    def test_suitable_power_units(self):
        assert _config_90x10().suitable_power_units[0] == "gu60"
        assert "gu40" not in _config_90x10().suitable_power_units

    def test_no_power_unit(self):
        catalog = load_catalog()
        small = Catalog(
            cylinder_sizes=catalog.cylinder_sizes,
            pumps=catalog.pumps,
            motors=catalog.motors,
            hoses=catalog.hoses,
            power_units=catalog.power_units[:1],
        )
        inputs = _scenario_a()
        config = select_components(find_evaluation(evaluate_cylinders(inputs, small), "90x10"), inputs, small)
        assert config.power_unit is None
        assert config.suitable_power_units == ()

    def test_dict_roundtrip(self):
        config = _config_90x10()
        assert SelectedConfiguration.from_dict(config.to_dict()) == config


class TestUpdateSelection:
    def test_returns_new_object(self):
        config = _config_90x10()
        updated = update_selection(config, motor="m18.4")
        assert updated.motor == "m18.4"
        assert config.motor == "m14.7"

    def test_pump_change_resizes(self):
        config = _config_90x10()
        updated = update_selection(config, pump="kp250")
        assert updated.sizing.actual_flow == 250
        assert updated.sizing.effective_speed == pytest.approx(
            effective_speed(250, config.area, 2, 2)
        )
        assert updated.sizing.required_power == pytest.approx(250 * config.sizing.working_pressure * 1.3 / 600)
        assert updated.sizing.recommended_motor == "m18.4"
        assert updated.motor == "m14.7"

    def test_unknown_pump_kept(self):
        updated = update_selection(_config_90x10(), pump="kp999")
        assert updated.pump == "kp999"
        assert updated.sizing.actual_flow == 210

    def test_non_editable_field(self):
        with pytest.raises(TypeError):
            update_selection(_config_90x10(), cylinder_type="100x10")

    def test_accessories_frozen(self):
        updated = update_selection(_config_90x10(), accessories=["oil_cooler"])
        assert updated.accessories == frozenset({"oil_cooler"})

    def test_toggle_accessories(self):
        updated = toggle_accessories(_config_90x10(), include=["oil_cooler"], exclude=["hand_pump"])
        assert "oil_cooler" in updated.accessories
        assert "hand_pump" not in updated.accessories
