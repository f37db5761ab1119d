"""
Mars Lander Simulator (MLS)
===========================

Top-level package for the MLS lander descent framework.

Subpackages:
- mls.core     : planets, 3-vectors, error types
- mls.lander   : state, constants, environment, dynamics, autopilot,
                 scenario presets and the run loop
- mls.plots    : matplotlib descent plots

Command line:
    python -m mls --scenario 5 --t-max 2000
"""

__all__ = [
    "core",
    "lander",
    "plots",
]

__version__ = "0.1.0"
