#!/usr/bin/env python3
"""
Data models for Flyby Simulator.

This module defines the Body dataclass shared between physics, the simulation step and
rendering, plus the per-body snapshot handed to the renderer.

Units and usage
- position and velocity are in screen units (pixels, pixels per step); mass is dimensionless.
- trail stores recent positions to render motion paths; it is only written by the simulation
  step and never read by the force law.
- A fixed body never moves and never records a trail.
"""
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Tuple

from .constants import TRAIL_LENGTH

Color = Tuple[int, int, int]


@dataclass
class Body:
    """
    Represents one point mass in the simulation.

    Fields:
    - mass: Mass, must be positive
    - position: 2D position (x, y)
    - velocity: 2D velocity (vx, vy) per unit step
    - color: RGB tuple used for rendering, None for bodies that are not drawn as dots
    - label: Optional display name
    - is_fixed: The body anchors the field and is never moved
    - loops_on_exit: The body is reset to the re-entry state when it leaves the scene
    - trail: Deque of recent positions for drawing motion trails (oldest first)
    """
    mass: float
    position: Tuple[float, float]
    velocity: Tuple[float, float] = (0.0, 0.0)
    color: Optional[Color] = None
    label: Optional[str] = None
    is_fixed: bool = False
    loops_on_exit: bool = False
    trail: Deque[Tuple[float, float]] = field(default_factory=lambda: deque(maxlen=TRAIL_LENGTH))

    def __post_init__(self):
        if not self.mass > 0:
            raise ValueError(f"Body mass must be positive, got {self.mass!r}")
        self.position = (float(self.position[0]), float(self.position[1]))
        self.velocity = (float(self.velocity[0]), float(self.velocity[1]))

    def add_trail_point(self) -> None:
        """Append the current position to the trail, evicting the oldest point when full."""
        self.trail.append(self.position)

    def clear_trail(self) -> None:
        self.trail.clear()

    def size_hint(self) -> float:
        """Drawn radius: log of the mass, never below 3 pixels."""
        return max(3.0, math.log(self.mass))


@dataclass(frozen=True)
class BodyRenderState:
    """Snapshot of what the renderer needs to draw one moving body."""
    trail: Tuple[Tuple[float, float], ...]
    position: Tuple[float, float]
    size: float
    color: Optional[Color]
    label: Optional[str] = None
    label_position: Optional[Tuple[float, float]] = None
