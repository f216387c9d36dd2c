#!/usr/bin/env python3
"""
Shared constants for Flyby Simulator (screen units: one world unit is one pixel).

Keeping constants in one place helps ensure values are consistent across the
codebase. SimulationSettings takes its defaults from here.
"""

# Physical constants (scaled for a pixel-sized world)
G = 1.0
SOFTENING = 1e-6  # added to r^2 in the force law so r == 0 never divides by zero

# Dominant body
SUN_MASS = 1e4
SUN_RADIUS = 50.0  # visual radius of the central disk
SAFE_GAP_MARGIN = 20.0  # safe-approach radius = SUN_RADIUS + SAFE_GAP_MARGIN

# Integration
DT = 1.0  # one step per frame

# Trails
TRAIL_LENGTH = 120

# Respawn of loop-on-exit bodies
RESPAWN_MARGIN = 300.0
REENTRY_OFFSET = (1100.0, -600.0)  # relative to the viewport center
REENTRY_VELOCITY = (-2.4, 0.25)

# Rendering (viewport)
VIEW_WIDTH = 1600
VIEW_HEIGHT = 900
FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
FADE_ALPHA = 64  # 0.25 opacity overlay per frame leaves fading ghosts
SUN_COLOR = (255, 204, 0)
LABEL_COLOR = (255, 204, 204)
LABEL_OFFSET = (10.0, -10.0)
LABEL_FONT_SIZE = 14
HUD_COLOR = (200, 200, 200)

# Named colors used by the default scene
WHITE = (255, 255, 255)
LIGHT_BLUE = (173, 216, 230)
RED = (255, 0, 0)

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
