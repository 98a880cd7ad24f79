#!/usr/bin/env python3
"""
Exception types raised by the Orbit3D core.

Every error derives from SimulationError so the viewport can catch a failed
tick in one place. Input validation errors are also ValueErrors.
"""


class SimulationError(Exception):
    """Base class for all simulation failures."""


class DegenerateGeometryError(SimulationError):
    """Two bodies occupy the same position; the force between them is undefined."""

    def __init__(self, first: str, second: str):
        super().__init__(f"bodies '{first}' and '{second}' occupy the same position")
        self.first = first
        self.second = second


class InvalidMassError(SimulationError, ValueError):
    """A body was given a non-positive or non-finite mass."""


class InvalidTimeStepError(SimulationError, ValueError):
    """The wall-clock delta passed to a step is negative or non-finite."""


class InvalidParameterError(SimulationError, ValueError):
    """Simulation parameters are out of range."""


class DuplicateBodyError(SimulationError, ValueError):
    """Two bodies in one registry share a name."""
