#!/usr/bin/env python3
"""
Core Physics Engine for Orbit3D

Responsibilities
- Compute pairwise Newtonian gravitational accelerations for every body.
- Advance body states with a semi-implicit (symplectic) Euler step.
- Provide small helpers for common orbital computations (circular and escape
  velocity, period) and conservation diagnostics (momentum, energy).

Units and conventions
- World space positions are in meters [m].
- Velocities are in meters per second [m/s].
- Masses are in kilograms [kg].
- Time steps are in seconds [s].
- The gravitational constant G is expressed in SI: m^3 kg^-1 s^-2.

Numerical notes
- No softening: the force law is exact 1/r^2. Two bodies at the same position
  make the force undefined and raise DegenerateGeometryError.
- Complexity: acceleration computation is O(N^2) per step over unordered
  pairs. Fine for the handful of bodies this app shows.
- Semi-implicit Euler updates velocity first and then moves the body with the
  new velocity. It is symplectic, so energy oscillates instead of drifting.
  Steps are never clamped or subdivided; very large time scales will make
  orbits visibly unstable.

Threading
- This module is pure compute and stateless. The app serializes access to
  bodies with a lock in its controller.
"""

import logging
import math
from typing import List, Sequence

from .constants import G
from .data_models import Body
from .errors import DegenerateGeometryError
from .vector_utils import ZERO, Vec3, vec_add, vec_div, vec_len, vec_neg, vec_norm, vec_scale, vec_sub

logger = logging.getLogger(__name__)


class NBodyPhysics:
    """
    N-body gravitational physics engine.

    The gravitational force that body B exerts on body A is:
    F = G * mA * mB / r^2, directed from A toward B.
    """

    def __init__(self, gravitational_constant: float = G):
        self.gravitational_constant = gravitational_constant

    def compute_accelerations(self, bodies: Sequence[Body]) -> None:
        """
        Reset and recompute the acceleration of every body.

        Each unordered pair (A, B) is visited once; A is pulled toward B by
        f / mA and B toward A by f / mB, so the pair exchanges equal and
        opposite forces.

        Args:
            bodies: Bodies to update in place (their .acceleration is replaced).

        Raises:
            DegenerateGeometryError: two bodies share a position. Accelerations
                are left untouched in that case.
        """
        n = len(bodies)
        accelerations: List[Vec3] = [ZERO] * n
        g = self.gravitational_constant

        for i in range(n):
            body_a = bodies[i]
            for j in range(i + 1, n):
                body_b = bodies[j]

                delta = vec_sub(body_b.position, body_a.position)
                distance = vec_len(delta)
                distance_sq = distance * distance
                if distance_sq == 0:
                    logger.debug("Degenerate geometry between %s and %s at %s",
                                 body_a.name, body_b.name, body_a.position)
                    raise DegenerateGeometryError(body_a.name, body_b.name)

                force_magnitude = g * body_a.mass * body_b.mass / distance_sq
                force = vec_scale(vec_norm(delta), force_magnitude)

                accelerations[i] = vec_add(accelerations[i], vec_div(force, body_a.mass))
                accelerations[j] = vec_add(accelerations[j], vec_div(vec_neg(force), body_b.mass))

        for body, acceleration in zip(bodies, accelerations):
            body.acceleration = acceleration

    def semi_implicit_euler_step(self, bodies: Sequence[Body], timestep: float) -> None:
        """
        Advance every body by one step using its current acceleration.

        velocity += acceleration * dt, then position += velocity * dt with the
        velocity just computed.

        Args:
            bodies: Bodies to integrate (modified in place).
            timestep: Simulated seconds to advance (>= 0).
        """
        for body in bodies:
            body.velocity = vec_add(body.velocity, vec_scale(body.acceleration, timestep))
            body.position = vec_add(body.position, vec_scale(body.velocity, timestep))

    def step(self, bodies: Sequence[Body], timestep: float) -> None:
        """Force pass followed by one integration step."""
        self.compute_accelerations(bodies)
        self.semi_implicit_euler_step(bodies, timestep)


def circular_orbit_velocity(central_mass: float, orbital_radius: float) -> float:
    """
    Calculate the velocity needed for a circular orbit.

    For a circular orbit, the gravitational force provides exactly the
    centripetal force needed. This gives us:
    G * M / r = v^2 / r
    Therefore: v = sqrt(G * M / r)

    Args:
        central_mass: Mass of the central body in kg
        orbital_radius: Orbital radius in meters

    Returns:
        Orbital velocity in m/s for a circular orbit
    """
    if orbital_radius <= 0:
        return 0.0

    return math.sqrt(G * central_mass / orbital_radius)


def escape_velocity(total_mass: float, separation: float) -> float:
    """
    Calculate the escape velocity at a given separation.

    v_escape = sqrt(2 * G * M / r)
    """
    if separation <= 0 or total_mass <= 0:
        return 0.0

    return math.sqrt(2.0 * G * total_mass / separation)


def orbital_period(central_mass: float, orbital_radius: float) -> float:
    """Period of a circular orbit in seconds: 2 * pi * sqrt(r^3 / (G * M))."""
    if orbital_radius <= 0 or central_mass <= 0:
        return 0.0
    return 2.0 * math.pi * math.sqrt(orbital_radius ** 3 / (G * central_mass))


def total_momentum(bodies: Sequence[Body]) -> Vec3:
    p = ZERO
    for body in bodies:
        p = vec_add(p, body.momentum)
    return p


def kinetic_energy(bodies: Sequence[Body]) -> float:
    return sum(0.5 * body.mass * (vec_len(body.velocity) ** 2) for body in bodies)


def potential_energy(bodies: Sequence[Body], gravitational_constant: float = G) -> float:
    """Sum of -G * mA * mB / r over unordered pairs."""
    energy = 0.0
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            distance = vec_len(vec_sub(bodies[j].position, bodies[i].position))
            if distance == 0:
                raise DegenerateGeometryError(bodies[i].name, bodies[j].name)
            energy -= gravitational_constant * bodies[i].mass * bodies[j].mass / distance
    return energy
