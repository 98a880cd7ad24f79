import math

import pytest

from orbit3d.constants import G
from orbit3d.data_models import Body, SimulationParameters
from orbit3d.errors import InvalidMassError, InvalidParameterError, SimulationError


def test_body_coerces_vectors():
    body = Body("Ship", 10, [1, 2, 3], [4, 5, 6])
    assert body.position == (1.0, 2.0, 3.0)
    assert body.velocity == (4.0, 5.0, 6.0)
    assert body.acceleration == (0.0, 0.0, 0.0)
    assert body.trail.capacity == 1000
    assert len(body.trail) == 0


@pytest.mark.parametrize("mass", [0.0, -1.0, math.nan, math.inf])
def test_non_positive_mass_rejected(mass):
    with pytest.raises(InvalidMassError):
        Body("Bad", mass, (0.0, 0.0, 0.0))


def test_invalid_mass_is_a_value_error():
    with pytest.raises(ValueError):
        Body("Bad", -5.0, (0.0, 0.0, 0.0))
    assert issubclass(InvalidMassError, SimulationError)


def test_mass_is_immutable():
    body = Body("Sun", 2.0e30, (0.0, 0.0, 0.0))
    with pytest.raises(AttributeError):
        body.mass = 1.0
    assert body.mass == 2.0e30


def test_bodies_compare_by_identity():
    a = Body("A", 1.0, (0.0, 0.0, 0.0))
    b = Body("A", 1.0, (0.0, 0.0, 0.0))
    assert a != b
    assert a == a


def test_momentum():
    body = Body("Ship", 2.0, (0.0, 0.0, 0.0), (1.0, -2.0, 3.0))
    assert body.momentum == (2.0, -4.0, 6.0)


def test_parameters_defaults():
    params = SimulationParameters()
    assert params.time_scale == 1000.0
    assert params.distance_scale == 1e-8
    assert params.gravitational_constant == G
    params.validate()


def test_gravitational_constant_is_fixed():
    params = SimulationParameters()
    with pytest.raises(AttributeError):
        params.gravitational_constant = 1.0


@pytest.mark.parametrize("time_scale, distance_scale", [
    (-1.0, 1e-8),
    (math.nan, 1e-8),
    (math.inf, 1e-8),
    (1.0, 0.0),
    (1.0, -1e-8),
    (1.0, math.nan),
])
def test_invalid_parameters(time_scale, distance_scale):
    params = SimulationParameters(time_scale=time_scale, distance_scale=distance_scale)
    with pytest.raises(InvalidParameterError):
        params.validate()


def test_zero_time_scale_is_allowed():
    SimulationParameters(time_scale=0.0).validate()
