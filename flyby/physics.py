#!/usr/bin/env python3
"""
Core Physics Engine for Flyby Simulator

Responsibilities
- Compute pairwise gravitational accelerations with a softening term and a safe-approach
  clamp near fixed (dominant) bodies.
- Advance a single body with a semi-implicit (symplectic) Euler step.
- Provide the circular orbit velocity helper used when building scenes.

Units and conventions
- World space is screen space: positions in pixels, velocities in pixels per step.
- The time step is one frame (dt = 1 by default).
- G is a scaled constant (1 by default), not the SI value.

Numerical notes
- Softening: a small epsilon is added to r^2 so a zero separation never divides by zero.
- Safe gap: distances to a fixed body are clamped to dominant_radius + margin. Without it a
  body grazing the center picks up an enormous kick and is ejected at absurd speed.
- The clamped distance is used for both the magnitude and the direction of the force, so the
  pull inside the safe gap fades smoothly to zero at the center.
- Semi-implicit Euler updates velocity from the current positions, then position from the new
  velocity. It is symplectic: orbits oscillate around the true radius instead of drifting.

Phase separation
- compute_accelerations reads positions only and mutates nothing. All accelerations of a frame
  are taken from the same snapshot before any body moves.
"""

import math
from typing import List, Sequence, Tuple

from .data_models import Body
from .settings import SimulationSettings
from .vector_utils import vec_add, vec_len, vec_scale, vec_sub


class GravityField:
    """
    Pairwise Newtonian gravity between the bodies of a scene.

    The force on body t from body o is:
    F = G * m_t * m_o / (r^2 + eps) along (o - t) / r

    where r is clamped to the safe gap when o is fixed.
    """

    def __init__(self, settings: SimulationSettings):
        self.settings = settings

    def compute_acceleration(self, target: Body, bodies: Sequence[Body]) -> Tuple[float, float]:
        """
        Net acceleration of target due to every other body.

        Args:
            target: Body to evaluate. Fixed bodies never accumulate force.
            bodies: The full body set (target included; it is skipped).

        Returns:
            (ax, ay) acceleration per unit step squared.
        """
        if target.is_fixed:
            return (0.0, 0.0)

        G = self.settings.G
        eps = self.settings.softening
        safe_gap = self.settings.safe_gap

        fx, fy = 0.0, 0.0
        for other in bodies:
            if other is target:
                continue

            dx, dy = vec_sub(other.position, target.position)
            r = vec_len((dx, dy))

            if other.is_fixed and r < safe_gap:
                r = safe_gap
            if r == 0:
                # Coincident bodies: no direction to pull along
                continue

            f = G * target.mass * other.mass / (r * r + eps)
            fx += f * dx / r
            fy += f * dy / r

        return (fx / target.mass, fy / target.mass)

    def compute_accelerations(self, bodies: Sequence[Body]) -> List[Tuple[float, float]]:
        """Accelerations for all bodies from one unmutated position snapshot, same order as inputs."""
        return [self.compute_acceleration(body, bodies) for body in bodies]


def semi_implicit_euler_step(body: Body, acceleration: Tuple[float, float], dt: float = 1.0) -> None:
    """
    Advance one body by one step: velocity first, then position with the new velocity.

    Fixed bodies are left untouched.
    """
    if body.is_fixed:
        return
    body.velocity = vec_add(body.velocity, vec_scale(acceleration, dt))
    body.position = vec_add(body.position, vec_scale(body.velocity, dt))


def circular_orbit_velocity(GM: float, orbital_radius: float) -> float:
    """
    Calculate the speed needed for a circular orbit.

    Gravity provides exactly the centripetal force: G * M / r^2 = v^2 / r,
    therefore v = sqrt(G * M / r).

    Returns 0 for a non-positive radius.
    """
    if orbital_radius <= 0:
        return 0.0
    return math.sqrt(GM / orbital_radius)
