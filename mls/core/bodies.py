# mls/core/bodies.py

from dataclasses import dataclass

@dataclass(frozen=True)
class Planet:
    name: str
    mass_kg: float          # planet mass [kg]
    radius_m: float         # mean radius [m]
    exosphere_m: float      # altitude where the atmosphere ends [m]
    day_s: float            # sidereal day [s]

# Known planets (only Mars for now)
MARS = Planet(
    name="Mars",
    mass_kg=6.42e23,
    radius_m=3386000.0,
    exosphere_m=200000.0,
    day_s=88642.65,
)

__all__ = ["Planet", "MARS"]
