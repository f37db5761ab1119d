"""
Lander Descent Kernels
======================

Rigid-body lander under gravity, body drag, parachute drag and thrust,
with a proportional descent autopilot.

- state       : SimulationState, ParachuteStatus, JSON save/load
- constants   : PhysicalConstants and the Mars preset
- environment : LanderEnvironment interface, MarsEnvironment
- dynamics    : one explicit-Euler tick (`advance`)
- autopilot   : throttle / parachute control law (`regulate`)
- scenarios   : table of preset initial conditions
- simulate    : run loop with telemetry (`simulate_lander`)
"""

from .autopilot import AutopilotGains, controller_output, throttle_command, regulate
from .constants import (
    PhysicalConstants,
    load_constants,
    save_constants,
    mars_lander_constants_default,
)
from .dynamics import AccelerationBreakdown, lander_mass, compute_acceleration, advance
from .environment import LanderEnvironment, MarsEnvironment
from .scenarios import SCENARIOS, ScenarioPreset, list_scenarios, load_scenario
from .simulate import LanderSimConfig, LanderEvent, LanderSimResult, simulate_lander
from .state import ParachuteStatus, SimulationState, save_state, load_state

__all__ = [
    "AutopilotGains",
    "controller_output",
    "throttle_command",
    "regulate",
    "PhysicalConstants",
    "load_constants",
    "save_constants",
    "mars_lander_constants_default",
    "AccelerationBreakdown",
    "lander_mass",
    "compute_acceleration",
    "advance",
    "LanderEnvironment",
    "MarsEnvironment",
    "SCENARIOS",
    "ScenarioPreset",
    "list_scenarios",
    "load_scenario",
    "LanderSimConfig",
    "LanderEvent",
    "LanderSimResult",
    "simulate_lander",
    "ParachuteStatus",
    "SimulationState",
    "save_state",
    "load_state",
]
