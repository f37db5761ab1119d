# mls/lander/constants.py
"""
Physical Constants
==================

Immutable parameters for a lander run: planet gravity and geometry,
lander mass / fuel properties and drag coefficients.

A `PhysicalConstants` instance is validated once on construction and is
read-only afterwards, so it can be shared between independent runs.

Presets:
    mars_lander_constants_default() -> PhysicalConstants
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Dict, Any, Optional

import json
import math

from mls.core.bodies import Planet, MARS
from mls.core.errors import ConfigurationError


@dataclass(frozen=True)
class PhysicalConstants:
    """
    Process-wide constants for a lander simulation.

    gravity_const       : universal gravitational constant [m^3/(kg*s^2)]
    planet_mass_kg      : planet mass [kg]
    planet_radius_m     : planet radius [m]
    exosphere_m         : altitude above which density is zero [m]
    planet_day_s        : sidereal rotation period [s]
    dry_mass_kg         : lander mass with empty tanks [kg]
    fuel_capacity_l     : tank capacity [l]
    fuel_density_kg_l   : propellant density [kg/l]
    drag_coef_lander    : lander body drag coefficient
    drag_coef_chute     : parachute drag coefficient
    lander_size_m       : characteristic lander radius [m]
    chute_area_factor   : canopy area in units of lander_size^2
    max_parachute_drag_N: drag above which the canopy tears [N]
    max_parachute_speed_mps: speed above which deployment is unsafe [m/s]
    """
    gravity_const: float = 6.673e-11
    planet_mass_kg: float = MARS.mass_kg
    planet_radius_m: float = MARS.radius_m
    exosphere_m: float = MARS.exosphere_m
    planet_day_s: float = MARS.day_s
    dry_mass_kg: float = 100.0
    fuel_capacity_l: float = 100.0
    fuel_density_kg_l: float = 1.0
    drag_coef_lander: float = 1.0
    drag_coef_chute: float = 2.0
    lander_size_m: float = 1.0
    chute_area_factor: float = 20.0
    max_parachute_drag_N: float = 20000.0
    max_parachute_speed_mps: float = 500.0

    def __post_init__(self):
        positive = (
            "gravity_const",
            "planet_mass_kg",
            "planet_radius_m",
            "planet_day_s",
            "dry_mass_kg",
            "fuel_capacity_l",
            "fuel_density_kg_l",
            "lander_size_m",
            "chute_area_factor",
            "max_parachute_drag_N",
            "max_parachute_speed_mps",
        )
        for name in positive:
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise ConfigurationError(f"{name} must be positive, got {value!r}.")
        for name in ("exosphere_m", "drag_coef_lander", "drag_coef_chute"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                raise ConfigurationError(f"{name} must be non-negative, got {value!r}.")
        # A canopy smaller than the lander itself makes no sense
        if self.chute_area_factor <= math.pi:
            raise ConfigurationError(
                f"chute_area_factor must exceed pi, got {self.chute_area_factor!r}."
            )

    # ---- derived quantities ----

    @property
    def mu(self) -> float:
        """Gravitational parameter G*M [m^3/s^2]."""
        return self.gravity_const * self.planet_mass_kg

    @property
    def surface_gravity(self) -> float:
        return self.mu / (self.planet_radius_m * self.planet_radius_m)

    @property
    def synchronous_radius_m(self) -> float:
        """Radius of the circular equatorial orbit whose period is one planet day [m]."""
        n = 2.0 * math.pi / self.planet_day_s
        return (self.mu / (n * n)) ** (1.0 / 3.0)

    @property
    def synchronous_speed_mps(self) -> float:
        return 2.0 * math.pi * self.synchronous_radius_m / self.planet_day_s

    @property
    def full_fuel_mass_kg(self) -> float:
        return self.fuel_capacity_l * self.fuel_density_kg_l

    @property
    def max_thrust_N(self) -> float:
        """Engine thrust at full throttle: 1.5x the fully-fuelled surface weight."""
        return 1.5 * (self.full_fuel_mass_kg + self.dry_mass_kg) * self.surface_gravity

    @property
    def lander_area_m2(self) -> float:
        return math.pi * self.lander_size_m * self.lander_size_m

    @property
    def chute_area_m2(self) -> float:
        return self.chute_area_factor * self.lander_size_m * self.lander_size_m

    # ---- serialization ----

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PhysicalConstants:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown constant(s): {', '.join(unknown)}.")
        values = {}
        for k, v in data.items():
            try:
                values[k] = float(v)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"{k} must be a number, got {v!r}.") from e
        return cls(**values)

    @classmethod
    def for_planet(cls, planet: Planet, **overrides: float) -> PhysicalConstants:
        return cls(
            planet_mass_kg=planet.mass_kg,
            planet_radius_m=planet.radius_m,
            exosphere_m=planet.exosphere_m,
            planet_day_s=planet.day_s,
            **overrides,
        )


def load_constants(path: str, base: Optional[PhysicalConstants] = None) -> PhysicalConstants:
    """
    Load constants from a JSON file.

    Keys missing from the file keep the value from `base` (default
    preset if not given).
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"{path}: not valid JSON ({e})") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object of constants.")
    merged = (base or mars_lander_constants_default()).to_dict()
    known = set(merged)
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"{path}: unknown constant(s): {', '.join(unknown)}.")
    merged.update(data)
    return PhysicalConstants.from_dict(merged)


def save_constants(path: str, constants: PhysicalConstants) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(constants.to_dict(), f, indent=2)


# ============================================================
# Presets
# ============================================================

def mars_lander_constants_default() -> PhysicalConstants:
    """
    Classic Mars lander exercise values: 100 kg dry mass, 100 l of fuel
    at 1 kg/l, 1 m lander, Cd 1.0 body / 2.0 chute.
    """
    return PhysicalConstants.for_planet(MARS)


__all__ = [
    "PhysicalConstants",
    "load_constants",
    "save_constants",
    "mars_lander_constants_default",
]
