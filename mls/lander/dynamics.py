# mls/lander/dynamics.py
"""
Lander Dynamics Integrator
==========================

One fixed-step tick of the lander equations of motion.

Forces (per unit mass):
    + gravity          : -G M r_hat / |r|^2
    - lander drag      : 0.5 rho Cd_lander (pi size^2) |v|^2 v_hat / m
    - chute drag       : 0.5 rho Cd_chute (factor size^2) |v|^2 v_hat / m
                         (only while the parachute is DEPLOYED)
    + thrust           : environment thrust in world frame / m

Integration is explicit Euler, with the acceleration evaluated at the
old state:

    x' = x + dt * v
    v' = v + dt * a(x, v)

After the update the autopilot (if enabled) and attitude stabilization
(if enabled) get to revise throttle, parachute and orientation for the
next tick.

Mass is dry mass plus the fuel currently on board; fuel itself is not
consumed here.
"""

from __future__ import annotations

from dataclasses import dataclass

import math

from mls.core.vector import Vector3, ZERO, SMALL_NUM
from .autopilot import AutopilotGains, regulate
from .constants import PhysicalConstants
from .environment import LanderEnvironment
from .state import ParachuteStatus, SimulationState


@dataclass(frozen=True)
class AccelerationBreakdown:
    """
    Acceleration terms for one state [m/s^2].

    `total` is gravity - lander_drag - chute_drag + thrust.
    """
    gravity: Vector3
    lander_drag: Vector3
    chute_drag: Vector3
    thrust: Vector3
    total: Vector3
    mass_kg: float


def lander_mass(state: SimulationState, constants: PhysicalConstants) -> float:
    """Dry mass plus remaining fuel [kg]."""
    return (
        constants.dry_mass_kg
        + constants.fuel_capacity_l * constants.fuel_density_kg_l * state.fuel
    )


def gravity_acceleration(position: Vector3, constants: PhysicalConstants) -> Vector3:
    r = position.abs()
    r_hat = position.norm("position")
    return -constants.gravity_const * constants.planet_mass_kg * r_hat / (r * r)


def _quadratic_drag(rho: float, cd: float, area_m2: float, velocity: Vector3,
                    mass: float) -> Vector3:
    # Magnitude along +v_hat; callers subtract it. At rest the drag is zero.
    speed = velocity.abs()
    if speed < SMALL_NUM:
        return ZERO
    v_hat = velocity.norm("velocity")
    return 0.5 * rho * cd * area_m2 * speed * speed * v_hat / mass


def compute_acceleration(
    state: SimulationState,
    constants: PhysicalConstants,
    environment: LanderEnvironment,
) -> AccelerationBreakdown:
    mass = lander_mass(state, constants)
    rho = environment.atmospheric_density(state.position)

    gravity = gravity_acceleration(state.position, constants)
    lander_drag = _quadratic_drag(
        rho, constants.drag_coef_lander, constants.lander_area_m2, state.velocity, mass
    )
    if state.parachute_status is ParachuteStatus.DEPLOYED:
        chute_drag = _quadratic_drag(
            rho, constants.drag_coef_chute, constants.chute_area_m2, state.velocity, mass
        )
    else:
        chute_drag = ZERO
    thrust = environment.thrust_in_world_frame(state.throttle, state.orientation) / mass

    if state.parachute_status is ParachuteStatus.DEPLOYED:
        total = gravity - lander_drag - chute_drag + thrust
    else:
        total = gravity - lander_drag + thrust

    return AccelerationBreakdown(
        gravity=gravity,
        lander_drag=lander_drag,
        chute_drag=chute_drag,
        thrust=thrust,
        total=total,
        mass_kg=mass,
    )


def advance(
    state: SimulationState,
    constants: PhysicalConstants,
    environment: LanderEnvironment,
    gains: AutopilotGains = AutopilotGains(),
) -> SimulationState:
    """
    Advance `state` in place by one tick of `state.delta_t` seconds.

    Raises DegenerateVectorError if the lander sits at the planet
    centre. Returns the same (mutated) state object.
    """
    dt = state.delta_t
    acceleration = compute_acceleration(state, constants, environment).total

    # Position uses the old velocity, velocity uses the old acceleration
    old_velocity = state.velocity
    state.position = state.position + dt * old_velocity
    state.velocity = old_velocity + dt * acceleration
    state.time_s += dt

    if state.autopilot_enabled:
        regulate(state, constants, environment, gains)

    if state.stabilized_attitude:
        environment.attitude_stabilization(state)

    return state


def specific_orbital_energy(state: SimulationState, constants: PhysicalConstants) -> float:
    """v^2/2 - mu/r [J/kg]; handy for checking coast arcs."""
    r = state.position.abs()
    if r < SMALL_NUM:
        raise ValueError("specific energy undefined at the planet centre.")
    return 0.5 * state.velocity.abs2() - constants.mu / r


def escape_speed(radius_m: float, constants: PhysicalConstants) -> float:
    return math.sqrt(2.0 * constants.mu / radius_m)


__all__ = [
    "AccelerationBreakdown",
    "lander_mass",
    "gravity_acceleration",
    "compute_acceleration",
    "advance",
    "specific_orbital_energy",
    "escape_speed",
]
