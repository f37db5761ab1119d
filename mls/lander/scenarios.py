# mls/lander/scenarios.py
"""
Scenario Presets
================

Table of ten initial conditions (indices 0-9). Slots 7-9 are reserved
and hold `None`.

Positions depend on the planet radius / exosphere / lander size, so
each preset stores a small function of the constants for its position.
The velocity is usually a plain vector, but may also be such a function
(the areostationary preset derives both from the planet day).

    load_scenario(index, constants) -> SimulationState
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

import logging

from mls.core.errors import ConfigurationError
from mls.core.vector import Vector3
from .constants import PhysicalConstants
from .state import ParachuteStatus, SimulationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioPreset:
    """
    name                : short description shown by `--list`
    position            : constants -> initial position [m]
    velocity            : initial velocity [m/s], or constants -> velocity
    orientation         : initial xyz Euler angles [deg]
    delta_t             : time step [s]
    stabilized_attitude : start with attitude stabilization on
    autopilot_enabled   : start with the autopilot on
    """
    name: str
    position: Callable[[PhysicalConstants], Vector3]
    velocity: Union[Vector3, Callable[[PhysicalConstants], Vector3]]
    orientation: Vector3
    delta_t: float = 0.1
    parachute_status: ParachuteStatus = ParachuteStatus.NOT_DEPLOYED
    stabilized_attitude: bool = False
    autopilot_enabled: bool = False

    def build(self, constants: PhysicalConstants) -> SimulationState:
        velocity = self.velocity(constants) if callable(self.velocity) else self.velocity
        return SimulationState(
            position=self.position(constants),
            velocity=velocity,
            orientation=self.orientation,
            fuel=1.0,
            throttle=0.0,
            parachute_status=self.parachute_status,
            stabilized_attitude=self.stabilized_attitude,
            autopilot_enabled=self.autopilot_enabled,
            delta_t=self.delta_t,
        ).validate()


SCENARIOS: Tuple[Optional[ScenarioPreset], ...] = (
    # 0: circular equatorial orbit at 1.2 R
    ScenarioPreset(
        name="circular orbit",
        position=lambda c: Vector3(1.2 * c.planet_radius_m, 0.0, 0.0),
        velocity=Vector3(0.0, -3247.087385863725, 0.0),
        orientation=Vector3(0.0, 90.0, 0.0),
    ),
    # 1: drop from rest at 10 km
    ScenarioPreset(
        name="descent from 10km",
        position=lambda c: Vector3(0.0, -(c.planet_radius_m + 10000.0), 0.0),
        velocity=Vector3(0.0, 0.0, 0.0),
        orientation=Vector3(0.0, 0.0, 90.0),
        stabilized_attitude=True,
    ),
    # 2: elliptical polar orbit
    ScenarioPreset(
        name="elliptical orbit, thrust changes orbital plane",
        position=lambda c: Vector3(0.0, 0.0, 1.2 * c.planet_radius_m),
        velocity=Vector3(3500.0, 0.0, 0.0),
        orientation=Vector3(0.0, 0.0, 90.0),
    ),
    # 3: polar surface launch at escape speed
    ScenarioPreset(
        name="polar launch at escape velocity (but drag prevents escape)",
        position=lambda c: Vector3(0.0, 0.0, c.planet_radius_m + c.lander_size_m / 2.0),
        velocity=Vector3(0.0, 0.0, 5027.0),
        orientation=Vector3(0.0, 0.0, 0.0),
    ),
    # 4: periapsis inside the atmosphere, orbit decays
    ScenarioPreset(
        name="elliptical orbit that clips the atmosphere and decays",
        position=lambda c: Vector3(0.0, 0.0, c.planet_radius_m + 100000.0),
        velocity=Vector3(4000.0, 0.0, 0.0),
        orientation=Vector3(0.0, 90.0, 0.0),
    ),
    # 5: drop from rest at the edge of the exosphere
    ScenarioPreset(
        name="descent from 200km",
        position=lambda c: Vector3(0.0, -(c.planet_radius_m + c.exosphere_m), 0.0),
        velocity=Vector3(0.0, 0.0, 0.0),
        orientation=Vector3(0.0, 0.0, 90.0),
        stabilized_attitude=True,
    ),
    # 6: areostationary orbit, period of one planet day
    ScenarioPreset(
        name="areostationary orbit",
        position=lambda c: Vector3(c.synchronous_radius_m, 0.0, 0.0),
        velocity=lambda c: Vector3(0.0, c.synchronous_speed_mps, 0.0),
        orientation=Vector3(0.0, 90.0, 0.0),
    ),
    None,
    None,
    None,
)


def list_scenarios() -> List[Tuple[int, str]]:
    """(index, name) for every populated slot."""
    return [(i, s.name) for i, s in enumerate(SCENARIOS) if s is not None]


def get_scenario(index: int) -> ScenarioPreset:
    if not 0 <= index < len(SCENARIOS):
        raise ConfigurationError(
            f"scenario index must be 0-{len(SCENARIOS) - 1}, got {index}."
        )
    preset = SCENARIOS[index]
    if preset is None:
        raise ConfigurationError(f"scenario {index} is reserved and has no preset.")
    return preset


def load_scenario(index: int, constants: PhysicalConstants) -> SimulationState:
    """Fresh, validated initial state for scenario `index`."""
    preset = get_scenario(index)
    logger.debug("Loading scenario %d (%s)", index, preset.name)
    return preset.build(constants)


__all__ = [
    "ScenarioPreset",
    "SCENARIOS",
    "list_scenarios",
    "get_scenario",
    "load_scenario",
]
