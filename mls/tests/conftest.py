"""
Shared fixtures: a stub environment with settable density, thrust and
parachute safety, and the default Mars constants.
"""
import pytest

from mls.core.vector import Vector3, ZERO
from mls.lander.constants import mars_lander_constants_default


class StubEnvironment:
    """Fixed answers for every environment query; records calls."""

    def __init__(self, density=0.0, thrust=ZERO, safe=True):
        self.density = density
        self.thrust = thrust
        self.safe = safe
        self.stabilization_calls = 0
        self.safety_calls = 0

    def atmospheric_density(self, position):
        return self.density

    def thrust_in_world_frame(self, throttle, orientation):
        return throttle * self.thrust

    def safe_to_deploy_parachute(self, state):
        self.safety_calls += 1
        return self.safe

    def attitude_stabilization(self, state):
        self.stabilization_calls += 1
        state.orientation = Vector3(1.0, 2.0, 3.0)


@pytest.fixture
def constants():
    return mars_lander_constants_default()


@pytest.fixture
def make_env():
    return StubEnvironment
