#!/usr/bin/env python3
"""
Orbit camera for 3D display-space to screen transforms.
"""
import math
from typing import Optional, Tuple

from .constants import (
    CAMERA_DEFAULT_DISTANCE,
    CAMERA_DEFAULT_PITCH_DEG,
    CAMERA_DEFAULT_YAW_DEG,
    CAMERA_FOV_DEG,
    CAMERA_MAX_DISTANCE,
    CAMERA_MAX_PITCH_DEG,
    CAMERA_MIN_DISTANCE,
    CAMERA_MIN_PITCH_DEG,
    CAMERA_NEAR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .vector_utils import Vec3, as_vec3, clamp, vec_add, vec_cross, vec_dot, vec_norm, vec_scale, vec_sub

WORLD_UP: Vec3 = (0.0, 1.0, 0.0)


class OrbitCamera:
    """
    Perspective camera circling a target point.

    Positions are display-space units (simulation meters times distance_scale).
    yaw rotates around the world y axis, pitch lifts the eye above the x-z
    plane; with both at zero the camera sits on +z looking toward -z.
    """

    def __init__(self, target=(0.0, 0.0, 0.0), distance=CAMERA_DEFAULT_DISTANCE,
                 yaw_deg=CAMERA_DEFAULT_YAW_DEG, pitch_deg=CAMERA_DEFAULT_PITCH_DEG,
                 fov_deg=CAMERA_FOV_DEG):
        self.target: Vec3 = as_vec3(target)
        self.distance = clamp(distance, CAMERA_MIN_DISTANCE, CAMERA_MAX_DISTANCE)
        self.yaw_deg = yaw_deg
        self.pitch_deg = clamp(pitch_deg, CAMERA_MIN_PITCH_DEG, CAMERA_MAX_PITCH_DEG)
        self.fov_deg = fov_deg
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (max(1, w), max(1, h))

    @property
    def aspect(self) -> float:
        return self.viewport_size[0] / self.viewport_size[1]

    def set_target(self, target: Vec3) -> None:
        self.target = as_vec3(target)

    def eye_position(self) -> Vec3:
        yaw = math.radians(self.yaw_deg)
        pitch = math.radians(self.pitch_deg)
        offset = (
            math.cos(pitch) * math.sin(yaw),
            math.sin(pitch),
            math.cos(pitch) * math.cos(yaw),
        )
        return vec_add(self.target, vec_scale(offset, self.distance))

    def basis(self) -> Tuple[Vec3, Vec3, Vec3]:
        """(right, up, forward) unit vectors of the view."""
        forward = vec_norm(vec_sub(self.target, self.eye_position()))
        right = vec_norm(vec_cross(forward, WORLD_UP))
        up = vec_cross(right, forward)
        return right, up, forward

    def focal_length_px(self) -> float:
        return (self.viewport_size[1] / 2) / math.tan(math.radians(self.fov_deg) / 2)

    def world_to_screen(self, point: Vec3) -> Optional[Tuple[float, float, float]]:
        """
        Project a display-space point to (x, y, depth) in pixels.

        Returns None for points at or behind the near plane.
        """
        right, up, forward = self.basis()
        rel = vec_sub(point, self.eye_position())
        depth = vec_dot(rel, forward)
        if depth <= CAMERA_NEAR:
            return None
        f = self.focal_length_px()
        w, h = self.viewport_size
        sx = w / 2 + vec_dot(rel, right) * f / depth
        sy = h / 2 - vec_dot(rel, up) * f / depth
        return (sx, sy, depth)

    def projected_radius(self, radius: float, depth: float) -> float:
        if depth <= 0:
            return 0.0
        return radius * self.focal_length_px() / depth

    def orbit(self, dyaw_deg: float, dpitch_deg: float) -> None:
        self.yaw_deg = (self.yaw_deg + dyaw_deg) % 360.0
        self.pitch_deg = clamp(self.pitch_deg + dpitch_deg, CAMERA_MIN_PITCH_DEG, CAMERA_MAX_PITCH_DEG)

    def zoom(self, factor: float) -> None:
        factor = clamp(factor, 0.05, 20.0)
        self.distance = clamp(self.distance / factor, CAMERA_MIN_DISTANCE, CAMERA_MAX_DISTANCE)
