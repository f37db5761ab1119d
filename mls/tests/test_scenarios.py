"""
Tests for the scenario preset table.
"""
import math
from dataclasses import replace

import pytest

from mls.core.errors import ConfigurationError
from mls.core.vector import Vector3
from mls.lander.scenarios import SCENARIOS, get_scenario, list_scenarios, load_scenario
from mls.lander.state import ParachuteStatus


def test_table_shape():
    assert len(SCENARIOS) == 10
    assert [i for i, _ in list_scenarios()] == [0, 1, 2, 3, 4, 5, 6]
    assert all(SCENARIOS[i] is None for i in (7, 8, 9))


@pytest.mark.parametrize("index", [7, 8, 9, 10, -1])
def test_reserved_or_unknown_index_rejected(constants, index):
    with pytest.raises(ConfigurationError):
        load_scenario(index, constants)


@pytest.mark.parametrize("index", range(7))
def test_every_preset_builds_a_valid_state(constants, index):
    state = load_scenario(index, constants)
    assert state.fuel == 1.0
    assert state.throttle == 0.0
    assert state.delta_t == 0.1
    assert state.time_s == 0.0
    assert state.parachute_status is ParachuteStatus.NOT_DEPLOYED
    assert not state.autopilot_enabled


def test_circular_orbit_speed(constants):
    state = load_scenario(0, constants)
    r = state.position.abs()
    assert r == pytest.approx(1.2 * constants.planet_radius_m)
    assert state.velocity.abs() == pytest.approx(math.sqrt(constants.mu / r), rel=1e-6)
    assert state.velocity.dot(state.position) == 0.0


def test_descent_presets(constants):
    ten_km = load_scenario(1, constants)
    assert ten_km.altitude(constants.planet_radius_m) == pytest.approx(10000.0)
    assert ten_km.velocity == Vector3()
    assert ten_km.stabilized_attitude

    exosphere = load_scenario(5, constants)
    assert exosphere.altitude(constants.planet_radius_m) == pytest.approx(constants.exosphere_m)
    assert exosphere.stabilized_attitude


def test_launch_preset_sits_on_surface(constants):
    state = load_scenario(3, constants)
    assert state.altitude(constants.planet_radius_m) == pytest.approx(constants.lander_size_m / 2.0)
    assert state.descent_rate() == pytest.approx(5027.0)


def test_each_load_is_independent(constants):
    a = load_scenario(1, constants)
    a.throttle = 1.0
    a.position = Vector3(1.0, 1.0, 1.0)
    b = load_scenario(1, constants)
    assert b.throttle == 0.0
    assert b.position != a.position


def test_get_scenario_names():
    assert get_scenario(0).name == "circular orbit"
    assert get_scenario(5).name == "descent from 200km"


def test_areostationary_preset_follows_planet_day(constants):
    state = load_scenario(6, constants)
    r = state.position.abs()
    assert r == pytest.approx(20429635.87, rel=1e-4)
    assert state.velocity.abs() == pytest.approx(1448.025, rel=1e-3)
    # circular: v^2 = mu / r
    assert state.velocity.abs() == pytest.approx(math.sqrt(constants.mu / r), rel=1e-9)
    # one revolution per planet day
    period = 2.0 * math.pi * r / state.velocity.abs()
    assert period == pytest.approx(constants.planet_day_s)


def test_areostationary_preset_moves_with_day_length(constants):
    slow = replace(constants, planet_day_s=2.0 * constants.planet_day_s)
    state = load_scenario(6, slow)
    # r grows with T^(2/3)
    assert state.position.abs() == pytest.approx(
        2.0 ** (2.0 / 3.0) * constants.synchronous_radius_m
    )
