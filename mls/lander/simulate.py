# mls/lander/simulate.py
"""
Lander Run Loop
===============

Drives the integrator tick by tick and records telemetry.

High-level API:
    simulate_lander(cfg: LanderSimConfig) -> LanderSimResult

which returns:
    - df     : sampled time history DataFrame
    - events : parachute deploy / loss and touchdown events
    - meta   : run summary (termination reason, constants, ...)

Besides calling `advance`, the loop itself:
- marks a deployed parachute LOST once the environment says the canopy
  is outside its safe envelope, and
- stops at touchdown (altitude below half the lander size). Impact is
  only reported, not modelled.

The specific orbital energy is recorded per row; on a drag-free, unpowered
arc it stays constant up to the Euler drift.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

import logging
import math
import numpy as np
import pandas as pd

from mls.core.errors import ConfigurationError
from .autopilot import AutopilotGains
from .constants import PhysicalConstants, mars_lander_constants_default
from .dynamics import advance, compute_acceleration, escape_speed, specific_orbital_energy
from .environment import LanderEnvironment, MarsEnvironment
from .state import ParachuteStatus, SimulationState

logger = logging.getLogger(__name__)


# ============================================================
# Dataclasses – configuration
# ============================================================

@dataclass
class LanderSimConfig:
    """
    Top-level lander run config.

    state        : initial state (copied, never mutated)
    constants    : physical constants
    environment  : collaborator implementation; MarsEnvironment if None
    gains        : autopilot gains
    t_max_s      : max simulated time [s]
    record_every : keep one telemetry row per this many ticks
    name         : label echoed into the result meta
    """
    state: SimulationState
    constants: PhysicalConstants = field(default_factory=mars_lander_constants_default)
    environment: Optional[LanderEnvironment] = None
    gains: AutopilotGains = field(default_factory=AutopilotGains)
    t_max_s: float = 1000.0
    record_every: int = 1
    name: str = ""

    def __post_init__(self):
        if not (math.isfinite(self.t_max_s) and self.t_max_s >= 0.0):
            raise ConfigurationError(f"t_max_s must be non-negative, got {self.t_max_s!r}.")
        if self.record_every < 1:
            raise ConfigurationError(f"record_every must be at least 1, got {self.record_every!r}.")


# ============================================================
# Dataclasses – results
# ============================================================

@dataclass
class LanderEvent:
    t_s: float
    label: str
    details: Dict[str, Any]


@dataclass
class LanderSimResult:
    df: pd.DataFrame
    events: List[LanderEvent]
    final_state: SimulationState
    meta: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        """Summary without full timeseries."""
        return {
            "n_rows": int(len(self.df)),
            "events": [e.__dict__ for e in self.events],
            "final_state": self.final_state.to_dict(),
            "meta": self.meta,
            "columns": list(self.df.columns),
        }


# ============================================================
# Run loop
# ============================================================

def simulate_lander(cfg: LanderSimConfig) -> LanderSimResult:
    """
    Run the lander from `cfg.state` until touchdown or `cfg.t_max_s`.

    Errors raised by the integrator (e.g. DegenerateVectorError) abort
    the run and propagate to the caller.
    """
    constants = cfg.constants
    env = cfg.environment if cfg.environment is not None else MarsEnvironment(constants)
    state = cfg.state.copy().validate()

    radius = constants.planet_radius_m
    initial_escape_mps = escape_speed(state.radius(), constants)
    touchdown_alt = constants.lander_size_m / 2.0

    n_ticks = int(round(cfg.t_max_s / state.delta_t))
    n_rows = n_ticks // cfg.record_every + 2

    # Allocate arrays
    t_arr = np.zeros(n_rows)
    pos_arr = np.zeros((n_rows, 3))
    vel_arr = np.zeros((n_rows, 3))
    alt_arr = np.zeros(n_rows)
    rate_arr = np.zeros(n_rows)
    ground_arr = np.zeros(n_rows)
    throttle_arr = np.zeros(n_rows)
    mass_arr = np.zeros(n_rows)
    acc_arr = np.zeros(n_rows)
    energy_arr = np.zeros(n_rows)
    chute_arr: List[str] = []

    events: List[LanderEvent] = []

    def record(row: int) -> None:
        acc = compute_acceleration(state, constants, env)
        t_arr[row] = state.time_s
        pos_arr[row] = state.position.to_array()
        vel_arr[row] = state.velocity.to_array()
        alt_arr[row] = state.altitude(radius)
        rate_arr[row] = state.descent_rate()
        ground_arr[row] = state.ground_speed()
        throttle_arr[row] = state.throttle
        mass_arr[row] = acc.mass_kg
        acc_arr[row] = acc.total.abs()
        energy_arr[row] = specific_orbital_energy(state, constants)
        chute_arr.append(state.parachute_status.value)

    logger.info(
        "Starting lander run %s: %d ticks of %.3f s",
        cfg.name or "(unnamed)", n_ticks, state.delta_t,
    )

    row = 0
    record(row)
    row += 1
    termination = "T_MAX"
    ticks_done = 0

    for tick in range(1, n_ticks + 1):
        chute_before = state.parachute_status
        advance(state, constants, env, cfg.gains)
        ticks_done = tick
        altitude = state.altitude(radius)

        if (chute_before is ParachuteStatus.NOT_DEPLOYED
                and state.parachute_status is ParachuteStatus.DEPLOYED):
            events.append(LanderEvent(state.time_s, "PARACHUTE_DEPLOY", {
                "altitude_m": altitude,
                "speed_mps": state.velocity.abs(),
            }))
            logger.info("Parachute deployed at t=%.1f s, h=%.0f m", state.time_s, altitude)

        if (state.parachute_status is ParachuteStatus.DEPLOYED
                and not env.safe_to_deploy_parachute(state)):
            state.advance_parachute(ParachuteStatus.LOST)
            events.append(LanderEvent(state.time_s, "PARACHUTE_LOST", {
                "altitude_m": altitude,
                "speed_mps": state.velocity.abs(),
            }))
            logger.warning("Parachute lost at t=%.1f s, h=%.0f m", state.time_s, altitude)

        if altitude < touchdown_alt:
            events.append(LanderEvent(state.time_s, "TOUCHDOWN", {
                "descent_rate_mps": state.descent_rate(),
                "ground_speed_mps": state.ground_speed(),
                "fuel": state.fuel,
            }))
            logger.info(
                "Touchdown at t=%.1f s, descent rate %.2f m/s",
                state.time_s, state.descent_rate(),
            )
            record(row)
            row += 1
            termination = "TOUCHDOWN"
            break

        if tick % cfg.record_every == 0:
            record(row)
            row += 1

    # Build DataFrame
    df = pd.DataFrame(
        {
            "t_s": t_arr[:row],
            "x_m": pos_arr[:row, 0],
            "y_m": pos_arr[:row, 1],
            "z_m": pos_arr[:row, 2],
            "vx_mps": vel_arr[:row, 0],
            "vy_mps": vel_arr[:row, 1],
            "vz_mps": vel_arr[:row, 2],
            "altitude_m": alt_arr[:row],
            "descent_rate_mps": rate_arr[:row],
            "ground_speed_mps": ground_arr[:row],
            "throttle": throttle_arr[:row],
            "mass_kg": mass_arr[:row],
            "accel_mps2": acc_arr[:row],
            "specific_energy_J_kg": energy_arr[:row],
            "parachute": chute_arr[:row],
        }
    )

    meta: Dict[str, Any] = {
        "name": cfg.name,
        "termination": termination,
        "n_ticks": ticks_done,
        "t_final_s": state.time_s,
        "initial_escape_speed_mps": initial_escape_mps,
        "bound": specific_orbital_energy(state, constants) < 0.0,
        "constants": constants.to_dict(),
    }
    logger.info("Lander run finished (%s) after %d ticks", termination, ticks_done)

    return LanderSimResult(df=df, events=events, final_state=state, meta=meta)


__all__ = [
    "LanderSimConfig",
    "LanderEvent",
    "LanderSimResult",
    "simulate_lander",
]
