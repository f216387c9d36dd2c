#!/usr/bin/env python3
"""
Simulation settings for Flyby Simulator.

All tunables of the physics core live on one object so a scene can be built with
non-default values (tests use this heavily). Defaults come from constants.py.
"""
from typing import Tuple

from .constants import (
    DT,
    G,
    REENTRY_OFFSET,
    REENTRY_VELOCITY,
    RESPAWN_MARGIN,
    SAFE_GAP_MARGIN,
    SOFTENING,
    SUN_RADIUS,
    TRAIL_LENGTH,
)


class SimulationSettings:
    """Container for physics, trail and respawn settings."""

    def __init__(
        self,
        G: float = G,
        softening: float = SOFTENING,
        dominant_radius: float = SUN_RADIUS,
        safe_gap_margin: float = SAFE_GAP_MARGIN,
        trail_length: int = TRAIL_LENGTH,
        respawn_margin: float = RESPAWN_MARGIN,
        reentry_offset: Tuple[float, float] = REENTRY_OFFSET,
        reentry_velocity: Tuple[float, float] = REENTRY_VELOCITY,
        dt: float = DT,
    ):
        if G <= 0:
            raise ValueError(f"G must be positive, got {G!r}")
        if softening <= 0:
            raise ValueError(f"softening must be positive, got {softening!r}")
        if dominant_radius < 0 or safe_gap_margin < 0:
            raise ValueError("dominant_radius and safe_gap_margin must be non-negative")
        if int(trail_length) < 1:
            raise ValueError(f"trail_length must be at least 1, got {trail_length!r}")
        if respawn_margin < 0:
            raise ValueError(f"respawn_margin must be non-negative, got {respawn_margin!r}")
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt!r}")

        self.G = float(G)
        self.softening = float(softening)
        self.dominant_radius = float(dominant_radius)
        self.safe_gap_margin = float(safe_gap_margin)
        self.trail_length = int(trail_length)
        self.respawn_margin = float(respawn_margin)
        self.reentry_offset = (float(reentry_offset[0]), float(reentry_offset[1]))
        self.reentry_velocity = (float(reentry_velocity[0]), float(reentry_velocity[1]))
        self.dt = float(dt)

    @property
    def safe_gap(self) -> float:
        """Minimum distance used for interactions with a fixed (dominant) body."""
        return self.dominant_radius + self.safe_gap_margin
