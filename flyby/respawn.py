#!/usr/bin/env python3
"""
Respawn handling for loop-on-exit bodies.

A loop-on-exit body that leaves the viewport expanded by a margin on all four sides is put
back at a fixed re-entry state, so a one-pass flyby repeats forever.
"""
import logging
from typing import Tuple

from .data_models import Body
from .settings import SimulationSettings

logger = logging.getLogger(__name__)


class RespawnRule:
    """Bounding-box test and reset for bodies flagged loops_on_exit."""

    def __init__(self, settings: SimulationSettings):
        self.settings = settings

    def is_outside(self, position: Tuple[float, float], viewport: Tuple[float, float]) -> bool:
        m = self.settings.respawn_margin
        w, h = viewport
        x, y = position
        return x < -m or x > w + m or y < -m or y > h + m

    def reentry_state(self, viewport: Tuple[float, float]) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """(position, velocity) a body is reset to, relative to the viewport center."""
        cx, cy = viewport[0] / 2, viewport[1] / 2
        ox, oy = self.settings.reentry_offset
        return (cx + ox, cy + oy), self.settings.reentry_velocity

    def apply(self, body: Body, viewport: Tuple[float, float]) -> bool:
        """
        Reset body if it is eligible and outside the extended bounds.

        Returns True if the body was reset.
        """
        if body.is_fixed or not body.loops_on_exit:
            return False
        if not self.is_outside(body.position, viewport):
            return False

        exit_pos = body.position
        body.position, body.velocity = self.reentry_state(viewport)
        body.clear_trail()
        logger.debug("Respawned %s at %s (left at %s)", body.label or "body", body.position, exit_pos)
        return True
