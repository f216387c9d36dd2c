#!/usr/bin/env python3
"""
Flyby Simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared SimulationController that owns the flyby.simulation.Simulation;
  all access is guarded by a re-entrant lock for thread-safety.
- The viewport steps the simulation once per frame and draws the sun, trails, bodies and labels.
  The controls window pauses, steps, resets and reverses the run.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (quit/resize),
  stepping physics, and drawing. It locks the SimulationController around short critical
  sections to read/update shared state.
- The UI class runs in the main thread via Dear PyGui. It updates its status text on a periodic
  frame callback and invokes SimulationController methods as needed; these are lock-protected.

Units and conventions
- World units are screen pixels; the scene is laid out around the viewport center.
- Colors are RGB tuples in 0..255.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python flyby_sim.py`
"""

import logging
import threading
from typing import List, Optional, Tuple

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from flyby.constants import (
    BACKGROUND_COLOR,
    FADE_ALPHA,
    FPS,
    HUD_COLOR,
    LABEL_COLOR,
    LABEL_FONT_SIZE,
    SAFE_COORD_LIMIT,
    SUN_COLOR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from flyby.data_models import BodyRenderState
from flyby.scenes import TEMPLATES
from flyby.simulation import Simulation

logger = logging.getLogger("flyby")

# ============================================================
# Simulation Controller (Shared State)
# ============================================================

class SimulationController:
    """
    Shared state between UI thread (DearPyGui) and rendering thread (Pygame).
    Includes thread-safe operations guarded by a lock.
    """
    def __init__(self, width: int = VIEW_WIDTH, height: int = VIEW_HEIGHT):
        self.lock = threading.RLock()
        self.sim = Simulation(width, height)
        self.running = True  # app running
        self.playing = True  # simulation running
        self.show_trails = True

    def step_physics(self):
        with self.lock:
            self.sim.step()

    def set_viewport_size(self, w: int, h: int):
        with self.lock:
            self.sim.set_viewport(w, h)

    def load_template(self, name: str):
        with self.lock:
            self.sim.template = TEMPLATES[name]
            self.sim.reset()

    def reset(self):
        with self.lock:
            self.sim.reset()

    def reverse_time(self):
        with self.lock:
            self.sim.reverse_time()

    def snapshot(self) -> Tuple[List[BodyRenderState], List[Tuple[float, float]], float]:
        """Render states, sun positions and sun radius, copied under the lock."""
        with self.lock:
            return (self.sim.render_state(), self.sim.dominant_bodies(),
                    self.sim.settings.dominant_radius)

    def status(self) -> Tuple[int, int, bool]:
        with self.lock:
            return self.sim.step_count, self.sim.respawn_count, self.playing

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: fades the previous frame, draws sun, trails, bodies and labels.
    Handles quit and resize.
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.surface = None
        self.fade = None
        self.clock = None
        self.running = True

    def _make_fade(self, w, h):
        self.fade = pygame.Surface((w, h), pygame.SRCALPHA)
        self.fade.fill((*BACKGROUND_COLOR, FADE_ALPHA))

    def run(self):
        pygame.init()
        pygame.display.set_caption("Flyby Simulator - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.surface.fill(BACKGROUND_COLOR)
        self._make_fade(VIEW_WIDTH, VIEW_HEIGHT)
        self.sim.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.sim.reset()
        self.clock = pygame.time.Clock()

        while self.running and self.sim.running:
            self.handle_events()

            with self.sim.lock:
                playing = self.sim.playing
            if playing:
                self.sim.step_physics()

            self.draw()

            # Fixed step per frame, so the frame rate is the simulation rate
            self.clock.tick(FPS)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.surface.fill(BACKGROUND_COLOR)
                self._make_fade(event.w, event.h)
                self.sim.set_viewport_size(event.w, event.h)

    def draw(self):
        surf = self.surface
        surf.blit(self.fade, (0, 0))

        states, suns, sun_radius = self.sim.snapshot()
        with self.sim.lock:
            show_trails = self.sim.show_trails

        for pos in suns:
            p = _safe_point(pos)
            if p:
                try:
                    gfxdraw.filled_circle(surf, p[0], p[1], int(sun_radius), SUN_COLOR)
                    gfxdraw.aacircle(surf, p[0], p[1], int(sun_radius), SUN_COLOR)
                except (OverflowError, TypeError):
                    pass

        for s in states:
            color = s.color or HUD_COLOR

            if show_trails and len(s.trail) > 1:
                pts = [p for p in (_safe_point(t) for t in s.trail) if p]
                if len(pts) > 1:
                    try:
                        pygame.draw.aalines(surf, color, False, pts)
                    except (ValueError, TypeError):
                        pass

            p = _safe_point(s.position)
            if p:
                r = int(round(s.size))
                try:
                    gfxdraw.filled_circle(surf, p[0], p[1], r, color)
                    gfxdraw.aacircle(surf, p[0], p[1], r, color)
                except (OverflowError, TypeError):
                    pass

            if s.label and s.label_position:
                lp = _safe_point(s.label_position)
                if lp:
                    # Text baseline sits at the anchor, like a canvas fillText
                    draw_text(surf, s.label, lp[0], lp[1] - LABEL_FONT_SIZE, LABEL_COLOR)

        pygame.display.flip()

_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("sans", LABEL_FONT_SIZE)
        except (OSError, RuntimeError):
            _cached_font = pygame.font.Font(None, LABEL_FONT_SIZE)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))

def _safe_point(pt) -> Optional[Tuple[int, int]]:
    try:
        x, y = int(pt[0]), int(pt[1])
    except (OverflowError, ValueError, TypeError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: scene selection, play/pause, single step, reset, time reversal,
    trail toggle and a status readout.
    """
    def __init__(self, sim: SimulationController):
        self.sim = sim
        self.status_id = None
        self.play_button_id = None
        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Flyby Simulator - Controls', width=380, height=260)

        with dpg.window(label="Controls", width=360, height=240, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Scene:")
                names = list(TEMPLATES.keys())
                dpg.add_combo(names, default_value=names[0], width=220,
                              callback=lambda s, a, u: self.sim.load_template(a),
                              tag="scene_combo")

            dpg.add_separator()

            with dpg.group(horizontal=True):
                self.play_button_id = dpg.add_button(label="Pause", callback=self._toggle_play)
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_button(label="Reset", callback=self.sim.reset)
                dpg.add_button(label="Reverse time", callback=self.sim.reverse_time)

            dpg.add_checkbox(label="Show trails", default_value=True, callback=self._set_show_trails)

            dpg.add_separator()
            self.status_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    def _toggle_play(self):
        with self.sim.lock:
            self.sim.playing = not self.sim.playing
            playing = self.sim.playing
        dpg.configure_item(self.play_button_id, label="Pause" if playing else "Play")

    def _step_once(self):
        with self.sim.lock:
            if self.sim.playing:
                return
        self.sim.step_physics()

    def _set_show_trails(self, sender, app_data):
        with self.sim.lock:
            self.sim.show_trails = bool(app_data)

    def _sync_ui_with_sim(self):
        if not self.sim.running:
            dpg.stop_dearpygui()
            return
        steps, passes, playing = self.sim.status()
        dpg.set_value(self.status_id,
                      f"Step: {steps}   Flyby passes: {passes}   [{'Playing' if playing else 'Paused'}]")
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    sim = SimulationController()
    renderer = PygameRenderer(sim)

    # Start Pygame renderer thread
    renderer.start()

    ui = UI(sim)

    # Keyboard shortcut in UI window to toggle play/pause (Space)
    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        # Stop simulation and renderer
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()

if __name__ == "__main__":
    main()
