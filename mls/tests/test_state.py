"""
Tests for SimulationState / PhysicalConstants validation and JSON
persistence.
"""
import json

import pytest

from mls.core.errors import ConfigurationError
from mls.core.vector import Vector3
from mls.lander.constants import (
    PhysicalConstants,
    load_constants,
    save_constants,
)
from mls.lander.dynamics import advance
from mls.lander.environment import MarsEnvironment
from mls.lander.scenarios import load_scenario
from mls.lander.state import (
    ParachuteStatus,
    SimulationState,
    load_state,
    save_state,
)


def _valid(**overrides):
    kwargs = dict(position=Vector3(0.0, 0.0, 3.4e6), delta_t=0.1)
    kwargs.update(overrides)
    return SimulationState(**kwargs)


@pytest.mark.parametrize("overrides, fragment", [
    ({"delta_t": 0.0}, "delta_t"),
    ({"delta_t": -0.1}, "delta_t"),
    ({"fuel": 1.5}, "fuel"),
    ({"fuel": -0.01}, "fuel"),
    ({"throttle": -0.1}, "throttle"),
    ({"throttle": 1.01}, "throttle"),
    ({"position": Vector3()}, "position"),
    ({"velocity": Vector3(float("nan"), 0.0, 0.0)}, "velocity"),
])
def test_state_validation(overrides, fragment):
    with pytest.raises(ConfigurationError, match=fragment) as exc_info:
        _valid(**overrides).validate()
    assert isinstance(exc_info.value, ValueError)


def test_valid_state_passes():
    state = _valid()
    assert state.validate() is state


def test_set_throttle_clamps():
    state = _valid()
    state.set_throttle(1.7)
    assert state.throttle == 1.0
    state.set_throttle(-3.0)
    assert state.throttle == 0.0
    state.set_throttle(0.25)
    assert state.throttle == 0.25


def test_parachute_transitions_forward_only():
    state = _valid()
    assert state.advance_parachute(ParachuteStatus.DEPLOYED) is True
    assert state.advance_parachute(ParachuteStatus.DEPLOYED) is False
    with pytest.raises(ValueError):
        state.advance_parachute(ParachuteStatus.NOT_DEPLOYED)
    assert state.advance_parachute(ParachuteStatus.LOST) is True
    with pytest.raises(ValueError):
        state.advance_parachute(ParachuteStatus.DEPLOYED)
    assert state.parachute_status is ParachuteStatus.LOST


def test_descent_rate_and_ground_speed():
    state = _valid(position=Vector3(0.0, 0.0, 3.4e6), velocity=Vector3(3.0, 0.0, -4.0))
    assert state.descent_rate() == pytest.approx(-4.0)
    assert state.ground_speed() == pytest.approx(3.0)
    assert state.altitude(3.3e6) == pytest.approx(1.0e5)


def test_dict_round_trip():
    state = _valid(
        velocity=Vector3(0.1, -0.2, 0.3),
        orientation=Vector3(1.0 / 3.0, 90.0, -45.0),
        fuel=0.123456789,
        throttle=2.0 / 3.0,
        parachute_status=ParachuteStatus.DEPLOYED,
        stabilized_attitude=True,
        autopilot_enabled=True,
        time_s=12.3,
    )
    data = json.loads(json.dumps(state.to_dict()))
    assert SimulationState.from_dict(data) == state


def test_from_dict_rejects_bad_input():
    with pytest.raises(ConfigurationError, match="position"):
        SimulationState.from_dict({"delta_t": 0.1})
    with pytest.raises(ConfigurationError):
        SimulationState.from_dict({"position": [1.0, 2.0], "delta_t": 0.1})
    with pytest.raises(ConfigurationError):
        SimulationState.from_dict(
            {"position": [0.0, 0.0, 3.4e6], "delta_t": 0.1, "parachute_status": "FOLDED"}
        )
    with pytest.raises(ConfigurationError, match="delta_t"):
        SimulationState.from_dict({"position": [0.0, 0.0, 3.4e6], "delta_t": -1.0})


def test_reloaded_state_reproduces_trajectory(tmp_path, constants):
    """Saving mid-run and reloading must give a bit-identical continuation."""
    env = MarsEnvironment(constants)
    state = load_scenario(1, constants)
    state.autopilot_enabled = True
    for _ in range(250):
        advance(state, constants, env)

    path = tmp_path / "state.json"
    save_state(str(path), state)
    reloaded = load_state(str(path))
    assert reloaded == state

    for _ in range(500):
        advance(state, constants, env)
        advance(reloaded, constants, env)

    assert reloaded.to_dict() == state.to_dict()


def test_constants_validation():
    with pytest.raises(ConfigurationError, match="dry_mass_kg"):
        PhysicalConstants(dry_mass_kg=-1.0)
    with pytest.raises(ConfigurationError, match="planet_radius_m"):
        PhysicalConstants(planet_radius_m=0.0)
    with pytest.raises(ConfigurationError, match="drag_coef_chute"):
        PhysicalConstants(drag_coef_chute=-2.0)
    with pytest.raises(ConfigurationError, match="chute_area_factor"):
        PhysicalConstants(chute_area_factor=2.0)


def test_constants_round_trip(tmp_path, constants):
    path = tmp_path / "constants.json"
    save_constants(str(path), constants)
    assert load_constants(str(path)) == constants

    assert PhysicalConstants.from_dict(constants.to_dict()) == constants
    with pytest.raises(ConfigurationError, match="warp_factor"):
        PhysicalConstants.from_dict({"warp_factor": 9.0})


def test_load_constants_partial_override(tmp_path, constants):
    path = tmp_path / "heavy.json"
    path.write_text(json.dumps({"dry_mass_kg": 250.0}))
    heavy = load_constants(str(path))
    assert heavy.dry_mass_kg == 250.0
    assert heavy.planet_radius_m == constants.planet_radius_m
    assert heavy.max_thrust_N > constants.max_thrust_N

    path.write_text(json.dumps({"dry_mass_kg": -5.0}))
    with pytest.raises(ConfigurationError):
        load_constants(str(path))

    path.write_text(json.dumps({"bogus": 1.0}))
    with pytest.raises(ConfigurationError, match="bogus"):
        load_constants(str(path))


@pytest.mark.parametrize("value", ["false", 0, 1, None])
def test_from_dict_flags_must_be_booleans(value):
    data = {"position": [0.0, 0.0, 3.4e6], "delta_t": 0.1, "autopilot_enabled": value}
    with pytest.raises(ConfigurationError, match="autopilot_enabled"):
        SimulationState.from_dict(data)

    data = {"position": [0.0, 0.0, 3.4e6], "delta_t": 0.1, "stabilized_attitude": value}
    with pytest.raises(ConfigurationError, match="stabilized_attitude"):
        SimulationState.from_dict(data)


def test_load_state_rejects_broken_json(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError, match="not valid JSON"):
        load_state(str(path))


def test_constants_must_be_numbers(tmp_path):
    with pytest.raises(ConfigurationError, match="dry_mass_kg"):
        PhysicalConstants.from_dict({"dry_mass_kg": "heavy"})
    with pytest.raises(ConfigurationError, match="lander_size_m"):
        PhysicalConstants.from_dict({"lander_size_m": None})

    path = tmp_path / "constants.json"
    path.write_text("[1, 2")
    with pytest.raises(ConfigurationError, match="not valid JSON"):
        load_constants(str(path))


def test_planet_day_validated():
    with pytest.raises(ConfigurationError, match="planet_day_s"):
        PhysicalConstants(planet_day_s=0.0)
