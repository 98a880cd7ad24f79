#!/usr/bin/env python3
"""
Simulation: the body registry and the per-frame step driven by the viewport.

The caller supplies the elapsed wall-clock time of each frame; the simulation
multiplies it by the time scale, runs one force pass and one integration step,
and records every body's display-space position in its trail.

Pausing is the caller not calling step(). The simulation is not thread-safe;
the app wraps it in a lock-guarded controller.
"""
import logging
import math
from typing import Dict, Iterable, List, Optional

from .data_models import Body, SimulationParameters
from .errors import DuplicateBodyError, InvalidTimeStepError
from .physics import NBodyPhysics, kinetic_energy, potential_energy, total_momentum
from .vector_utils import Vec3, vec_scale

logger = logging.getLogger(__name__)


class Simulation:
    """
    Owns a fixed, ordered set of bodies and advances them tick by tick.
    """

    def __init__(self, bodies: Iterable[Body] = (), params: Optional[SimulationParameters] = None):
        self.params = params if params is not None else SimulationParameters()
        self.physics = NBodyPhysics(self.params.gravitational_constant)
        self.elapsed = 0.0  # simulated seconds
        self.tick_count = 0

        self._bodies: List[Body] = []
        self._by_name: Dict[str, Body] = {}
        for body in bodies:
            if body.name in self._by_name:
                raise DuplicateBodyError(f"duplicate body name '{body.name}'")
            self._bodies.append(body)
            self._by_name[body.name] = body
        logger.debug("Registered %d bodies: %s", len(self._bodies), ", ".join(self._by_name))

    def bodies(self) -> List[Body]:
        """Bodies in registration order; the same objects on every call."""
        return list(self._bodies)

    def get_body(self, name: str) -> Body:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"no body named '{name}'") from None

    def display_position(self, body: Body, params: Optional[SimulationParameters] = None) -> Vec3:
        params = params if params is not None else self.params
        return vec_scale(body.position, params.distance_scale)

    def step(self, dt_real_seconds: float, params: Optional[SimulationParameters] = None) -> None:
        """
        Advance all bodies by dt_real_seconds * time_scale simulated seconds.

        Args:
            dt_real_seconds: Wall-clock time since the previous tick (>= 0).
            params: Parameters for this tick; defaults to self.params. Read once
                at the start of the call and never modified.

        Raises:
            InvalidTimeStepError: dt_real_seconds is negative or non-finite.
            InvalidParameterError: params are out of range.
            DegenerateGeometryError: two bodies coincide. No body is moved.
        """
        try:
            dt = float(dt_real_seconds)
        except (TypeError, ValueError):
            raise InvalidTimeStepError(f"time step must be a number, got {dt_real_seconds!r}") from None
        if not math.isfinite(dt) or dt < 0:
            raise InvalidTimeStepError(f"time step must be finite and >= 0, got {dt_real_seconds!r}")

        params = params if params is not None else self.params
        params.validate()
        time_scale = params.time_scale
        distance_scale = params.distance_scale
        effective_dt = dt * time_scale

        self.physics.step(self._bodies, effective_dt)

        for body in self._bodies:
            body.trail.record(vec_scale(body.position, distance_scale))

        self.elapsed += effective_dt
        self.tick_count += 1

    def clear_trails(self) -> None:
        for body in self._bodies:
            body.trail.clear()

    def total_momentum(self) -> Vec3:
        return total_momentum(self._bodies)

    def total_energy(self) -> float:
        return kinetic_energy(self._bodies) + potential_energy(self._bodies, self.physics.gravitational_constant)
