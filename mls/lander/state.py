# mls/lander/state.py
"""
Simulation State
================

The mutable per-run record read and written every tick by the
integrator and the autopilot:

    position, velocity, orientation, fuel, throttle, parachute status,
    stabilized_attitude / autopilot_enabled flags, delta_t, elapsed time.

One `SimulationState` belongs to exactly one run. It is created by a
scenario preset or loaded from JSON, and can be saved back to JSON
without losing a bit (floats are written with their shortest exact
repr).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Any

import json
import math

from mls.core.errors import ConfigurationError
from mls.core.vector import Vector3, ZERO, SMALL_NUM


class ParachuteStatus(Enum):
    NOT_DEPLOYED = "NOT_DEPLOYED"
    DEPLOYED = "DEPLOYED"
    LOST = "LOST"

    @property
    def rank(self) -> int:
        return _PARACHUTE_ORDER.index(self)


_PARACHUTE_ORDER = (
    ParachuteStatus.NOT_DEPLOYED,
    ParachuteStatus.DEPLOYED,
    ParachuteStatus.LOST,
)


def clamp_throttle(value: float) -> float:
    if math.isnan(value):
        raise ValueError("throttle command is NaN.")
    return min(1.0, max(0.0, float(value)))


@dataclass
class SimulationState:
    """
    position           : planet-centred Cartesian position [m]
    velocity           : planet-centred Cartesian velocity [m/s]
    orientation        : xyz Euler angles of the lander [deg]
    fuel               : fraction of tank capacity remaining (0-1)
    throttle           : engine command (0-1)
    parachute_status   : NOT_DEPLOYED -> DEPLOYED -> LOST, never backwards
    stabilized_attitude: keep the engine pointing at the ground
    autopilot_enabled  : run the autopilot after every tick
    delta_t            : fixed time step [s]
    time_s             : simulated time elapsed [s]
    """
    position: Vector3
    velocity: Vector3 = ZERO
    orientation: Vector3 = ZERO
    fuel: float = 1.0
    throttle: float = 0.0
    parachute_status: ParachuteStatus = ParachuteStatus.NOT_DEPLOYED
    stabilized_attitude: bool = False
    autopilot_enabled: bool = False
    delta_t: float = 0.1
    time_s: float = 0.0

    # ---- derived quantities ----

    def radius(self) -> float:
        return self.position.abs()

    def altitude(self, planet_radius_m: float) -> float:
        return self.position.abs() - planet_radius_m

    def descent_rate(self) -> float:
        """Signed radial speed [m/s]; negative while descending."""
        return self.velocity.dot(self.position.norm("position"))

    def ground_speed(self) -> float:
        """Speed tangential to the planet surface [m/s]."""
        radial = self.descent_rate() * self.position.norm("position")
        return (self.velocity - radial).abs()

    # ---- guarded mutators ----

    def set_throttle(self, value: float) -> None:
        self.throttle = clamp_throttle(value)

    def advance_parachute(self, new_status: ParachuteStatus) -> bool:
        """
        Move the parachute state machine forward.

        Returns True if the status changed. Requesting an earlier status
        raises ValueError.
        """
        if new_status.rank < self.parachute_status.rank:
            raise ValueError(
                f"parachute cannot go from {self.parachute_status.value} "
                f"back to {new_status.value}."
            )
        changed = new_status is not self.parachute_status
        self.parachute_status = new_status
        return changed

    # ---- validation ----

    def validate(self) -> SimulationState:
        """Reject out-of-range initial values; returns self for chaining."""
        if not (math.isfinite(self.delta_t) and self.delta_t > 0.0):
            raise ConfigurationError(f"delta_t must be positive, got {self.delta_t!r}.")
        if not (math.isfinite(self.time_s) and self.time_s >= 0.0):
            raise ConfigurationError(f"time_s must be non-negative, got {self.time_s!r}.")
        if not (0.0 <= self.fuel <= 1.0):
            raise ConfigurationError(f"fuel must be within [0, 1], got {self.fuel!r}.")
        if not (0.0 <= self.throttle <= 1.0):
            raise ConfigurationError(f"throttle must be within [0, 1], got {self.throttle!r}.")
        for name in ("position", "velocity", "orientation"):
            if not getattr(self, name).is_finite():
                raise ConfigurationError(f"{name} has non-finite components.")
        if self.position.abs() < SMALL_NUM:
            raise ConfigurationError("position must not be the planet centre.")
        if not isinstance(self.parachute_status, ParachuteStatus):
            raise ConfigurationError(
                f"parachute_status must be a ParachuteStatus, got {self.parachute_status!r}."
            )
        return self

    def copy(self) -> SimulationState:
        # Vector3 is immutable, a shallow copy is enough
        return replace(self)

    # ---- serialization ----

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position.to_list(),
            "velocity": self.velocity.to_list(),
            "orientation": self.orientation.to_list(),
            "fuel": self.fuel,
            "throttle": self.throttle,
            "parachute_status": self.parachute_status.value,
            "stabilized_attitude": self.stabilized_attitude,
            "autopilot_enabled": self.autopilot_enabled,
            "delta_t": self.delta_t,
            "time_s": self.time_s,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SimulationState:
        try:
            state = cls(
                position=_vector(data["position"], "position"),
                velocity=_vector(data.get("velocity", ZERO), "velocity"),
                orientation=_vector(data.get("orientation", ZERO), "orientation"),
                fuel=float(data.get("fuel", 1.0)),
                throttle=float(data.get("throttle", 0.0)),
                parachute_status=ParachuteStatus(
                    data.get("parachute_status", ParachuteStatus.NOT_DEPLOYED.value)
                ),
                stabilized_attitude=_flag(data, "stabilized_attitude"),
                autopilot_enabled=_flag(data, "autopilot_enabled"),
                delta_t=float(data["delta_t"]),
                time_s=float(data.get("time_s", 0.0)),
            )
        except KeyError as e:
            raise ConfigurationError(f"state is missing required field {e.args[0]!r}.") from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"malformed state: {e}") from e
        return state.validate()


def _flag(data: Dict[str, Any], name: str) -> bool:
    value = data.get(name, False)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{name} must be true or false, got {value!r}.")
    return value


def _vector(values, name: str) -> Vector3:
    values = list(values)
    if len(values) != 3:
        raise ConfigurationError(f"{name} needs 3 components, got {len(values)}.")
    return Vector3(*map(float, values))


def save_state(path: str, state: SimulationState) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(state.to_dict(), f, indent=2)


def load_state(path: str) -> SimulationState:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"{path}: not valid JSON ({e})") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object.")
    return SimulationState.from_dict(data)


__all__ = [
    "ParachuteStatus",
    "SimulationState",
    "clamp_throttle",
    "save_state",
    "load_state",
]
