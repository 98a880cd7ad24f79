#!/usr/bin/env python3
"""
Shared constants for Orbit3D (SI units unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Physical constants
G = 6.67430e-11  # m^3 kg^-1 s^-2
SUN_MASS = 1.989e30  # kg
EARTH_MASS = 5.972e24  # kg
MOON_MASS = 7.348e22  # kg

# Default scene: Earth at roughly half an AU, Moon offset by the Earth-Moon distance
EARTH_POSITION = (7.5e10, 0.0, 0.0)  # m
MOON_POSITION = (7.5e10 + 3.84e9, 0.0, 1e7)  # m
EARTH_VELOCITY = (0.0, 0.0, 23824.0)  # m/s
MOON_VELOCITY = (0.0, 1022.0, 23824.0)  # m/s

# Simulation parameters
DEFAULT_TIME_SCALE = 1000.0  # simulated seconds per real second
DEFAULT_DISTANCE_SCALE = 1e-8  # display units per meter
MIN_TIME_SCALE = 0.1
MAX_TIME_SCALE = 1e7
MIN_DISTANCE_SCALE = 1e-10
MAX_DISTANCE_SCALE = 1e-6

# Trails
DEFAULT_TRAIL_CAPACITY = 1000  # recorded display-space points per body

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
GRID_COLOR = (136, 136, 136)
GRID_CENTER_COLOR = (68, 68, 68)
GRID_Y = -0.5  # display units
GRID_HALF_EXTENT = 200.0  # display units
GRID_SPACING = 10.0  # display units
HUD_COLOR = (200, 200, 200)
DEFAULT_BODY_COLOR = (200, 200, 255)
DEFAULT_BODY_RADIUS = 1.0  # display units

# Camera
CAMERA_FOV_DEG = 75.0
CAMERA_NEAR = 0.1
CAMERA_DEFAULT_DISTANCE = 67.08  # |(0, 30, 60)|
CAMERA_DEFAULT_YAW_DEG = 0.0
CAMERA_DEFAULT_PITCH_DEG = 26.57  # atan(30 / 60)
CAMERA_MIN_DISTANCE = 1.0
CAMERA_MAX_DISTANCE = 5000.0
CAMERA_MIN_PITCH_DEG = -89.0
CAMERA_MAX_PITCH_DEG = 89.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
