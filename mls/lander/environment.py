# mls/lander/environment.py
"""
Lander Environment
==================

Everything the integrator and autopilot need from the outside world is
behind the `LanderEnvironment` interface:

    atmospheric_density(position)            -> float  [kg/m^3]
    thrust_in_world_frame(throttle, orient)  -> Vector3 [N]
    safe_to_deploy_parachute(state)          -> bool
    attitude_stabilization(state)            -> None (rewrites orientation)

`MarsEnvironment` is the default implementation:

- Exponential atmosphere (rho = 0.017 * exp(-h / 11 km)) that is cut
  off above the exosphere and below the surface.
- Engine thrust along the lander +z body axis, rotated into the world
  frame with xyz Euler angles.
- Parachute safety: canopy drag below the tear limit and speed below
  the deployment limit while inside the atmosphere.
- Attitude stabilization that points the body +z axis radially
  outwards, i.e. the engine at the ground.

Tests substitute small stub classes with the same four methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import math
import numpy as np

from mls.core.vector import Vector3, SMALL_NUM
from .constants import PhysicalConstants
from .state import SimulationState


class LanderEnvironment(Protocol):
    def atmospheric_density(self, position: Vector3) -> float: ...

    def thrust_in_world_frame(self, throttle: float, orientation: Vector3) -> Vector3: ...

    def safe_to_deploy_parachute(self, state: SimulationState) -> bool: ...

    def attitude_stabilization(self, state: SimulationState) -> None: ...


# ============================================================
# Rotation helpers (xyz Euler angles, degrees)
# ============================================================

def euler_to_matrix(orientation: Vector3) -> np.ndarray:
    """
    Rotation matrix R (body -> world) for xyz Euler angles in degrees.

    Columns of R are the body x, y, z axes expressed in world
    coordinates.
    """
    a, b, g = np.deg2rad(orientation.to_array())
    sa, sb, sg = math.sin(a), math.sin(b), math.sin(g)
    ca, cb, cg = math.cos(a), math.cos(b), math.cos(g)
    return np.array([
        [cb * cg, sa * sb * cg - ca * sg, ca * sb * cg + sa * sg],
        [cb * sg, sa * sb * sg + ca * cg, ca * sb * sg - sa * cg],
        [-sb,     sa * cb,                ca * cb],
    ])


def matrix_to_euler(m: np.ndarray) -> Vector3:
    """
    Inverse of euler_to_matrix. At gimbal lock (|pitch| = 90 deg) the
    z angle is set to zero.
    """
    m = np.asarray(m, dtype=float)
    if abs(m[2, 0]) < 1.0 - SMALL_NUM:
        b = -math.asin(m[2, 0])
        cb = math.cos(b)
        a = math.atan2(m[2, 1] / cb, m[2, 2] / cb)
        g = math.atan2(m[1, 0] / cb, m[0, 0] / cb)
    else:
        g = 0.0
        if m[2, 0] < 0.0:
            b = math.pi / 2.0
            a = math.atan2(m[0, 1], m[1, 1])
        else:
            b = -math.pi / 2.0
            a = math.atan2(-m[0, 1], m[1, 1])
    return Vector3(math.degrees(a), math.degrees(b), math.degrees(g))


def body_to_world(vec_body: Vector3, orientation: Vector3) -> Vector3:
    return Vector3.from_array(euler_to_matrix(orientation) @ vec_body.to_array())


# ============================================================
# Default Mars environment
# ============================================================

@dataclass
class MarsEnvironment:
    """
    constants   : physical constants of the run
    rho0_kg_m3  : surface density [kg/m^3]
    hscale_m    : density scale height [m]
    """
    constants: PhysicalConstants
    rho0_kg_m3: float = 0.017
    hscale_m: float = 11000.0

    def altitude(self, position: Vector3) -> float:
        return position.abs() - self.constants.planet_radius_m

    def atmospheric_density(self, position: Vector3) -> float:
        alt = self.altitude(position)
        if alt > self.constants.exosphere_m or alt < 0.0:
            return 0.0
        return self.rho0_kg_m3 * math.exp(-alt / self.hscale_m)

    def thrust_in_world_frame(self, throttle: float, orientation: Vector3) -> Vector3:
        thrust_body = Vector3(0.0, 0.0, throttle * self.constants.max_thrust_N)
        return body_to_world(thrust_body, orientation)

    def chute_drag_N(self, state: SimulationState) -> float:
        c = self.constants
        rho = self.atmospheric_density(state.position)
        return 0.5 * c.drag_coef_chute * rho * c.chute_area_m2 * state.velocity.abs2()

    def safe_to_deploy_parachute(self, state: SimulationState) -> bool:
        c = self.constants
        if self.chute_drag_N(state) > c.max_parachute_drag_N:
            return False
        inside_atmosphere = self.altitude(state.position) < c.exosphere_m
        if state.velocity.abs() > c.max_parachute_speed_mps and inside_atmosphere:
            return False
        return True

    def attitude_stabilization(self, state: SimulationState) -> None:
        up = state.position.norm("position")

        # Any vector perpendicular to up will do for the second axis
        left = Vector3(-up.y, up.x, 0.0)
        if left.abs() < SMALL_NUM:
            left = Vector3(-up.z, 0.0, up.x)
        left = left.norm("stabilization axis")
        out = left.cross(up)

        m = np.column_stack([out.to_array(), left.to_array(), up.to_array()])
        state.orientation = matrix_to_euler(m)


__all__ = [
    "LanderEnvironment",
    "MarsEnvironment",
    "euler_to_matrix",
    "matrix_to_euler",
    "body_to_world",
]
