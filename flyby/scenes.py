#!/usr/bin/env python3
"""
Built-in scenes.

Positions are screen coordinates, so every scene is laid out around the viewport center.
Planets are placed on circular orbits around the sun; on screen (y pointing down) both
planets turn counter-clockwise.
"""
from collections import deque
from typing import List, Optional

from .constants import LIGHT_BLUE, RED, SUN_MASS, WHITE
from .data_models import Body
from .physics import circular_orbit_velocity
from .settings import SimulationSettings

FLYBY_LABEL = "ʻOumuamua"


def _with_trail(body: Body, settings: SimulationSettings) -> Body:
    body.trail = deque(maxlen=settings.trail_length)
    return body


def template_planets(width: float, height: float,
                     settings: Optional[SimulationSettings] = None) -> List[Body]:
    """Fixed sun at the center plus two planets at radii 200 and 300."""
    settings = settings or SimulationSettings()
    cx, cy = width / 2, height / 2

    sun = Body(mass=SUN_MASS, position=(cx, cy), is_fixed=True)

    r1 = 200.0
    v1 = circular_orbit_velocity(settings.G * sun.mass, r1)
    planet1 = Body(mass=10.0, position=(cx + r1, cy), velocity=(0.0, v1), color=WHITE)

    r2 = 300.0
    v2 = circular_orbit_velocity(settings.G * sun.mass, r2)
    planet2 = Body(mass=5.0, position=(cx - r2, cy), velocity=(0.0, -v2), color=LIGHT_BLUE)

    return [_with_trail(b, settings) for b in (sun, planet1, planet2)]


def template_default(width: float, height: float,
                     settings: Optional[SimulationSettings] = None) -> List[Body]:
    """
    Sun, two planets and a fast flyby body that loops back in whenever it leaves the scene.
    The flyby starts at its own re-entry state.
    """
    settings = settings or SimulationSettings()
    bodies = template_planets(width, height, settings)

    ox, oy = settings.reentry_offset
    flyby = Body(
        mass=2.0,
        position=(width / 2 + ox, height / 2 + oy),
        velocity=settings.reentry_velocity,
        color=RED,
        label=FLYBY_LABEL,
        loops_on_exit=True,
    )
    bodies.append(_with_trail(flyby, settings))
    return bodies


TEMPLATES = {
    "Sun, planets and flyby": template_default,
    "Sun and planets": template_planets,
}
