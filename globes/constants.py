#!/usr/bin/env python3
"""
Shared constants for Globes (unscaled catalog units unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""
import math

# Catalog radii (unscaled visual units)
SUN_RADIUS = 2000.0
EARTH_RADIUS = 18.33
MOON_RADIUS = 5.0
JUPITER_RADIUS = 201.0
SATURN_RADIUS = 167.0
URANUS_RADIUS = 72.9
NEPTUNE_RADIUS = 70.5

# Period units (seconds of simulated time)
DAY = 86400.0
HOUR = 3600.0

# Orbital model
CENTRAL_RADIUS_FLOOR = 0.51  # px; the central body always stays a bit more prominent
SATELLITE_RADIUS_FLOOR = 0.5  # px
QUARTER_TURN = math.pi / 2

# Simulation controls
DEFAULT_VIEWING_ANGLE = -0.3  # radians; tilt of the orbital plane towards the viewer
DEFAULT_TIME_STEP = 9e5  # seconds of simulated time per frame

# Rendering (RGBA, 0..255)
DEFAULT_FILL = "#fff"
DEFAULT_STROKE = "#000"
DEFAULT_RING = "rgba(220,220,220,0.8)"
BACKGROUND_COLOR = (0, 0, 0, 0)
OUTLINE_WIDTH = 1
MIN_RING_WIDTH = 1.0
ARC_SEGMENTS = 96

# Window
VIEW_WIDTH = 1000
VIEW_HEIGHT = 1000
TARGET_FPS = 60
WINDOW_CAPTION = "Globes"

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
