# mls/lander/autopilot.py
"""
Descent Autopilot
=================

Proportional throttle controller that tracks an ideal descent profile
in which the allowed descent rate shrinks linearly with altitude:

    error = -(0.5 + Kh * altitude + descent_rate)
    P     = Kp * error

`P` is mapped onto the throttle with a saturating linear map centred on
`offset` (P = 0 -> throttle = offset):

    P <= -offset       -> 0
    P <  1 - offset    -> offset + P
    otherwise          -> 1

The autopilot also:
- switches on attitude stabilization (engine pointing down), and
- deploys the parachute once below `chute_deploy_alt_m` if the
  environment says it is safe. A deployed or lost parachute is never
  touched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import PhysicalConstants
from .state import ParachuteStatus, SimulationState

if TYPE_CHECKING:  # pragma: no cover
    from .environment import LanderEnvironment


@dataclass(frozen=True)
class AutopilotGains:
    """
    Kh                 : descent-rate slope of the target profile [1/s]
    Kp                 : proportional gain
    offset             : throttle at zero controller output
    touchdown_rate_mps : target descent speed at zero altitude [m/s]
    chute_deploy_alt_m : altitude at/below which the chute may deploy [m]
    """
    Kh: float = 0.02
    Kp: float = 0.5
    offset: float = 0.5
    touchdown_rate_mps: float = 0.5
    chute_deploy_alt_m: float = 150000.0

    def __post_init__(self):
        if not (0.0 <= self.offset <= 1.0):
            raise ValueError("offset must be between 0 and 1.")


def controller_output(altitude: float, descent_rate: float,
                      gains: AutopilotGains = AutopilotGains()) -> float:
    """Raw proportional output P (unbounded)."""
    return gains.Kp * (-(gains.touchdown_rate_mps + gains.Kh * altitude + descent_rate))


def throttle_command(altitude: float, descent_rate: float,
                     gains: AutopilotGains = AutopilotGains()) -> float:
    """Throttle in [0, 1] for the given altitude [m] and descent rate [m/s]."""
    p = controller_output(altitude, descent_rate, gains)
    if p <= -gains.offset:
        return 0.0
    elif p < (1.0 - gains.offset):
        return gains.offset + p
    else:
        return 1.0


def regulate(
    state: SimulationState,
    constants: PhysicalConstants,
    environment: LanderEnvironment,
    gains: AutopilotGains = AutopilotGains(),
) -> SimulationState:
    """Update throttle, attitude mode and parachute for the next tick."""
    altitude = state.altitude(constants.planet_radius_m)
    descent_rate = state.descent_rate()

    state.throttle = throttle_command(altitude, descent_rate, gains)
    state.stabilized_attitude = True

    if (
        altitude <= gains.chute_deploy_alt_m
        and state.parachute_status is ParachuteStatus.NOT_DEPLOYED
        and environment.safe_to_deploy_parachute(state)
    ):
        state.advance_parachute(ParachuteStatus.DEPLOYED)

    return state


__all__ = [
    "AutopilotGains",
    "controller_output",
    "throttle_command",
    "regulate",
]
