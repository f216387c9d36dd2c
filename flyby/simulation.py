#!/usr/bin/env python3
"""
Simulation state and the per-frame step for Flyby Simulator.

Simulation owns the body set, the settings and the current viewport size. The host calls
step() once per frame; it is the only entry point the rest of the program needs.

Each step runs in two phases over the body set in stable order:
- Phase A (read-only): accelerations of all bodies from the pre-step positions.
- Phase B (mutating): for each body, integrate, record a trail point, then apply the respawn
  rule, which must see the post-integration position.

The core is single-threaded and holds no locks; callers that share a Simulation between
threads guard it themselves.
"""
import logging
from collections import deque
from typing import Callable, List, Optional, Sequence, Tuple

from .constants import LABEL_OFFSET
from .data_models import Body, BodyRenderState
from .physics import GravityField, semi_implicit_euler_step
from .respawn import RespawnRule
from .scenes import template_default
from .settings import SimulationSettings
from .vector_utils import vec_add, vec_scale

logger = logging.getLogger(__name__)

SceneTemplate = Callable[[float, float, SimulationSettings], List[Body]]


class Simulation:
    """
    Owns one run of the simulation.

    Attributes:
        settings: SimulationSettings shared by the physics, trails and respawn rule.
        viewport: (width, height) of the drawing surface, in world units.
        bodies: Tuple of bodies; its length never changes during a run.
        step_count: Steps taken since the scene was (re)built.
        respawn_count: Number of times a loop-on-exit body was reset.
    """

    def __init__(self, width: float, height: float,
                 settings: Optional[SimulationSettings] = None,
                 template: SceneTemplate = template_default):
        self.settings = settings or SimulationSettings()
        self.viewport: Tuple[float, float] = (float(width), float(height))
        self.template = template
        self.physics = GravityField(self.settings)
        self.respawn = RespawnRule(self.settings)
        self.bodies: Tuple[Body, ...] = ()
        self.step_count = 0
        self.respawn_count = 0
        self.reset()

    def set_viewport(self, width: float, height: float) -> None:
        """Resize the scene bounds. Bodies are not moved."""
        self.viewport = (float(width), float(height))

    def reset(self) -> None:
        """Rebuild the scene from the template, centered on the current viewport."""
        w, h = self.viewport
        self.replace_bodies(self.template(w, h, self.settings))
        logger.info("Scene reset: %d bodies in %gx%g viewport", len(self.bodies), w, h)

    def replace_bodies(self, new_bodies: Sequence[Body]) -> None:
        """Start a new run with the given bodies; trails are resized to the configured length."""
        for b in new_bodies:
            b.trail = deque(b.trail, maxlen=self.settings.trail_length)
        self.bodies = tuple(new_bodies)
        self.step_count = 0
        self.respawn_count = 0

    def step(self) -> None:
        """Advance every body by one time step."""
        bodies = self.bodies
        dt = self.settings.dt

        # Phase A: read-only
        accelerations = self.physics.compute_accelerations(bodies)

        # Phase B: mutating
        for body, acc in zip(bodies, accelerations):
            if body.is_fixed:
                continue
            semi_implicit_euler_step(body, acc, dt)
            body.add_trail_point()
            if self.respawn.apply(body, self.viewport):
                self.respawn_count += 1

        self.step_count += 1

    def reverse_time(self) -> None:
        """
        Reverse the direction of motion of every moving body.

        Negating the velocity alone does not retrace a semi-implicit Euler trajectory, because
        the last kick was applied before the last drift. Removing that kick as well,
        v = -v - a(x) * dt, makes the next N steps visit the previous N positions in reverse.
        """
        dt = self.settings.dt
        accelerations = self.physics.compute_accelerations(self.bodies)
        for body, acc in zip(self.bodies, accelerations):
            if body.is_fixed:
                continue
            body.velocity = vec_add(vec_scale(body.velocity, -1.0), vec_scale(acc, -dt))
        logger.info("Time reversed at step %d", self.step_count)

    def dominant_bodies(self) -> List[Tuple[float, float]]:
        """Positions of the fixed bodies."""
        return [b.position for b in self.bodies if b.is_fixed]

    def render_state(self) -> List[BodyRenderState]:
        """Per-body snapshot of everything the renderer draws, for non-fixed bodies only."""
        states = []
        for b in self.bodies:
            if b.is_fixed:
                continue
            label_pos = None
            if b.label:
                label_pos = vec_add(b.position, LABEL_OFFSET)
            states.append(BodyRenderState(
                trail=tuple(b.trail),
                position=b.position,
                size=b.size_hint(),
                color=b.color,
                label=b.label,
                label_position=label_pos,
            ))
        return states
