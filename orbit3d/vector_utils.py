#!/usr/bin/env python3
"""
Vector helper functions for 3D operations.

These are small, fast functions for vector math used throughout the app.
Vectors are plain (x, y, z) tuples; every function returns a new tuple and
never mutates its inputs.
"""
import math
from typing import Sequence, Tuple

Vec3 = Tuple[float, float, float]

ZERO: Vec3 = (0.0, 0.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def as_vec3(v: Sequence[float]) -> Vec3:
    """Coerce a 3-length sequence to a float tuple."""
    if len(v) != 3:
        raise ValueError(f"expected 3 components, got {len(v)}")
    return (float(v[0]), float(v[1]), float(v[2]))


def vec_add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vec_sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vec_scale(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def vec_div(a: Vec3, s: float) -> Vec3:
    if s == 0:
        raise ZeroDivisionError("vector division by zero")
    return (a[0] / s, a[1] / s, a[2] / s)


def vec_neg(a: Vec3) -> Vec3:
    return (-a[0], -a[1], -a[2])


def vec_dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def vec_cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def vec_len(a: Vec3) -> float:
    return math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def vec_norm(a: Vec3) -> Vec3:
    """Unit vector in the direction of a; a must be non-zero."""
    l = vec_len(a)
    if l == 0:
        raise ZeroDivisionError("cannot normalize a zero-length vector")
    return (a[0] / l, a[1] / l, a[2] / l)