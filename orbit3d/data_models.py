#!/usr/bin/env python3
"""
Data models for Orbit3D.

This module defines the Body dataclass and the SimulationParameters passed to
every simulation step.

Units and usage
- position is in meters [m], velocity in meters per second [m/s], acceleration
  in [m/s^2], mass in kg.
- trail stores past display-space positions (position * distance_scale at the
  time of recording); it is appended to by the simulation step.
- Body holds physical state only. Colors and drawing radii live in the
  presentation layer, keyed by body name.
"""
import math
from dataclasses import dataclass, field

from .constants import DEFAULT_DISTANCE_SCALE, DEFAULT_TIME_SCALE, G
from .errors import InvalidMassError, InvalidParameterError
from .trail import TrailHistory
from .vector_utils import ZERO, Vec3, as_vec3


@dataclass(eq=False)
class Body:
    """
    Represents a point mass in the simulation.

    Fields:
    - name: Identifier for the body, unique within a Simulation
    - mass: Mass in kilograms; positive and fixed once the body exists
    - position: 3D position (x, y, z) in meters
    - velocity: 3D velocity in meters/second
    - acceleration: Acceleration accumulated by the last force pass, m/s^2
    - trail: Bounded history of display-space positions
    """
    name: str
    mass: float
    position: Vec3
    velocity: Vec3 = ZERO
    acceleration: Vec3 = ZERO
    trail: TrailHistory = field(default_factory=TrailHistory)

    def __post_init__(self):
        mass = float(self.mass)
        if not math.isfinite(mass) or mass <= 0:
            raise InvalidMassError(f"body '{self.name}' must have a positive mass, got {self.mass!r}")
        object.__setattr__(self, "mass", mass)
        self.position = as_vec3(self.position)
        self.velocity = as_vec3(self.velocity)
        self.acceleration = as_vec3(self.acceleration)

    def __setattr__(self, key, value):
        if key == "mass" and "mass" in self.__dict__:
            raise AttributeError(f"mass of body '{self.name}' is immutable")
        super().__setattr__(key, value)

    @property
    def momentum(self) -> Vec3:
        return (self.mass * self.velocity[0], self.mass * self.velocity[1], self.mass * self.velocity[2])


@dataclass
class SimulationParameters:
    """
    Tunables read at the start of every step.

    The presentation layer owns this object and may change it between ticks;
    the simulation never writes to it.
    """
    time_scale: float = DEFAULT_TIME_SCALE
    distance_scale: float = DEFAULT_DISTANCE_SCALE

    @property
    def gravitational_constant(self) -> float:
        return G

    def validate(self) -> None:
        if not math.isfinite(self.time_scale) or self.time_scale < 0:
            raise InvalidParameterError(f"time_scale must be finite and >= 0, got {self.time_scale!r}")
        if not math.isfinite(self.distance_scale) or self.distance_scale <= 0:
            raise InvalidParameterError(f"distance_scale must be finite and > 0, got {self.distance_scale!r}")
