#!/usr/bin/env python3
"""
Orbit3D application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (3D viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared ViewerController that owns the Simulation, its parameters and the
  drawing styles; all access is guarded by a re-entrant lock for thread-safety.
- Provides scene presets (built-in and templates/*.json), an orbit camera with optional
  focus on a body, a ground grid, trails, and controls for time and distance scale.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the viewport),
  one simulation tick per frame while playing, and drawing. It holds the controller lock for
  the whole tick, so the UI can never change parameters halfway through a step.
- The UI class runs in the main thread via Dear PyGui. It updates readouts on a periodic
  frame callback and invokes ViewerController methods as needed; these are lock-protected.

Units and conventions
- The simulation works in SI units: meters [m], kilograms [kg], seconds [s].
- Everything drawn is in display space: simulation meters times distance_scale.
- Colors are RGB tuples in 0..255.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python orbit3d_app.py` (set ORBIT3D_LOG_LEVEL=DEBUG for verbose logs)

Windows/OS notes
- Two windows will open: the viewport (Pygame) and the controls (Dear PyGui). Closing either
  will shut down the application cleanly.
"""

import logging
import os
import threading
import time
from typing import Dict, List, Optional

import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from orbit3d.camera import OrbitCamera
from orbit3d.constants import (
    BACKGROUND_COLOR,
    GRID_CENTER_COLOR,
    GRID_COLOR,
    GRID_HALF_EXTENT,
    GRID_SPACING,
    GRID_Y,
    HUD_COLOR,
    MAX_DISTANCE_SCALE,
    MAX_TIME_SCALE,
    MIN_DISTANCE_SCALE,
    MIN_TIME_SCALE,
    SAFE_COORD_LIMIT,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from orbit3d.data_models import SimulationParameters
from orbit3d.errors import SimulationError
from orbit3d.presets_loader import (
    BUILTIN_SCENES,
    DEFAULT_SCENE_NAME,
    BodyStyle,
    SceneTemplate,
    list_templates,
    load_template,
)
from orbit3d.simulation import Simulation
from orbit3d.vector_utils import clamp

logger = logging.getLogger("orbit3d.app")

NO_FOCUS = "None"

# ============================================================
# Viewer Controller (Shared State)
# ============================================================

class ViewerController:
    """
    Shared state between UI thread (DearPyGui) and rendering thread (Pygame).
    Includes thread-safe operations guarded by a lock.
    """
    def __init__(self):
        self.lock = threading.RLock()
        self.running = True  # app running
        self.playing = False  # simulation running
        self.params = SimulationParameters()
        self.simulation = Simulation([], self.params)
        self.styles: Dict[str, BodyStyle] = {}
        self.scene_name = ""
        self.focus_body = NO_FOCUS
        self.show_trails = True
        self.show_grid = True
        self.grid_opacity = 1.0
        self.last_error: Optional[str] = None

    def load_scene(self, template: SceneTemplate):
        with self.lock:
            if template.time_scale is not None:
                self.params.time_scale = clamp(template.time_scale, 0.0, MAX_TIME_SCALE)
            if template.distance_scale is not None:
                self.params.distance_scale = clamp(template.distance_scale, MIN_DISTANCE_SCALE, MAX_DISTANCE_SCALE)
            self.simulation = Simulation(template.bodies, self.params)
            self.styles = dict(template.styles)
            self.scene_name = template.name
            if self.focus_body not in self.body_names():
                self.focus_body = NO_FOCUS
            self.last_error = None
        logger.info("Loaded scene '%s' with %d bodies", template.name, len(template.bodies))

    def body_names(self) -> List[str]:
        with self.lock:
            return [b.name for b in self.simulation.bodies()]

    def set_time_scale(self, s: float):
        with self.lock:
            self.params.time_scale = clamp(float(s), 0.0, MAX_TIME_SCALE)

    def set_distance_scale(self, s: float):
        with self.lock:
            self.params.distance_scale = clamp(float(s), MIN_DISTANCE_SCALE, MAX_DISTANCE_SCALE)

    def set_focus(self, name: str):
        with self.lock:
            self.focus_body = name if name in self.body_names() else NO_FOCUS

    def toggle_play(self) -> bool:
        with self.lock:
            self.playing = not self.playing
            playing = self.playing
        logger.info("Simulation %s", "playing" if playing else "paused")
        return playing

    def clear_trails(self):
        with self.lock:
            self.simulation.clear_trails()

    def tick(self, dt_real_seconds: float) -> bool:
        """
        Advance one frame. A failing tick pauses playback and is remembered in
        last_error for the UI to show.
        """
        with self.lock:
            try:
                self.simulation.step(dt_real_seconds, self.params)
            except SimulationError as exc:
                self.playing = False
                self.last_error = str(exc)
                logger.error("Simulation tick failed, pausing: %s", exc)
                return False
            return True

    def focus_target(self):
        """Display-space point the camera should look at."""
        with self.lock:
            if self.focus_body == NO_FOCUS:
                return (0.0, 0.0, 0.0)
            body = self.simulation.get_body(self.focus_body)
            return self.simulation.display_position(body, self.params)

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: draws bodies, trails and the ground grid in perspective.
    Handles camera orbiting and zoom.
    """
    def __init__(self, viewer: ViewerController):
        super().__init__(daemon=True)
        self.viewer = viewer
        self.camera = OrbitCamera()
        self.surface = None
        self.clock = None
        self.dragging = False
        self.drag_start_screen = (0, 0)
        self.orbit_speed_keys = 90.0  # degrees per second
        self.drag_sensitivity = 0.3  # degrees per pixel
        self.running = True

    def reset_camera(self):
        size = self.camera.viewport_size
        self.camera = OrbitCamera()
        self.camera.set_viewport_size(*size)

    def run(self):
        pygame.init()
        pygame.display.set_caption("Orbit3D - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()

        last_time = time.perf_counter()
        while self.running and self.viewer.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            # Input handling
            self.handle_events(real_dt)

            # Physics step
            with self.viewer.lock:
                playing = self.viewer.playing
            if playing:
                self.viewer.tick(real_dt)

            # Follow focused body
            self.camera.set_target(self.viewer.focus_target())

            # Draw
            self.draw()

            # Limit FPS
            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def handle_events(self, real_dt):
        keys = pygame.key.get_pressed()
        step = self.orbit_speed_keys * real_dt
        if keys[pygame.K_LEFT]:
            self.camera.orbit(-step, 0)
        if keys[pygame.K_RIGHT]:
            self.camera.orbit(step, 0)
        if keys[pygame.K_UP]:
            self.camera.orbit(0, step)
        if keys[pygame.K_DOWN]:
            self.camera.orbit(0, -step)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.viewer.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0/1.1
                self.camera.zoom(factor)

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                self.viewer.toggle_play()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
                self.dragging = True
                self.drag_start_screen = event.pos

            elif event.type == pygame.MOUSEBUTTONUP and event.button in (1, 3):
                self.dragging = False

            elif event.type == pygame.MOUSEMOTION and self.dragging:
                dx = event.pos[0] - self.drag_start_screen[0]
                dy = event.pos[1] - self.drag_start_screen[1]
                self.camera.orbit(-dx * self.drag_sensitivity, dy * self.drag_sensitivity)
                self.drag_start_screen = event.pos

    def draw_grid(self, surf, opacity):
        color = _blend(BACKGROUND_COLOR, GRID_COLOR, opacity)
        center_color = _blend(BACKGROUND_COLOR, GRID_CENTER_COLOR, opacity)
        n = int(GRID_HALF_EXTENT / GRID_SPACING)
        for i in range(-n, n + 1):
            c = i * GRID_SPACING
            line_color = center_color if i == 0 else color
            self._draw_segment(surf, (c, GRID_Y, -GRID_HALF_EXTENT), (c, GRID_Y, GRID_HALF_EXTENT), line_color)
            self._draw_segment(surf, (-GRID_HALF_EXTENT, GRID_Y, c), (GRID_HALF_EXTENT, GRID_Y, c), line_color)

    def _draw_segment(self, surf, a, b, color):
        pa = self.camera.world_to_screen(a)
        pb = self.camera.world_to_screen(b)
        if pa is None or pb is None:
            return
        sa = _safe_point(pa)
        sb = _safe_point(pb)
        if sa and sb:
            pygame.draw.line(surf, color, sa, sb, 1)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        # Copy a snapshot for consistency during draw
        with self.viewer.lock:
            sim = self.viewer.simulation
            params = self.viewer.params
            bodies = [
                (b.name, sim.display_position(b, params), b.trail.positions())
                for b in sim.bodies()
            ]
            styles = dict(self.viewer.styles)
            show_trails = self.viewer.show_trails
            show_grid = self.viewer.show_grid
            grid_opacity = self.viewer.grid_opacity
            elapsed = sim.elapsed
            time_scale = params.time_scale
            playing = self.viewer.playing
            focus = self.viewer.focus_body
            error = self.viewer.last_error

        if show_grid and grid_opacity > 0:
            self.draw_grid(surf, grid_opacity)

        # Draw trails
        if show_trails:
            for name, _, trail in bodies:
                if len(trail) < 2:
                    continue
                color = styles.get(name, BodyStyle()).color
                pts = []
                for p in trail:
                    projected = self.camera.world_to_screen(p)
                    sp = _safe_point(projected) if projected else None
                    if sp:
                        pts.append(sp)
                if len(pts) > 1:
                    pygame.draw.aalines(surf, color, False, pts)

        # Draw bodies, farthest first
        projected_bodies = []
        for name, pos, _ in bodies:
            projected = self.camera.world_to_screen(pos)
            if projected is not None:
                projected_bodies.append((projected, styles.get(name, BodyStyle())))
        projected_bodies.sort(key=lambda item: item[0][2], reverse=True)
        for (sx, sy, depth), style in projected_bodies:
            sp = _safe_point((sx, sy))
            if not sp:
                continue
            vis_r = int(clamp(self.camera.projected_radius(style.radius, depth), 2, 200))
            gfxdraw.filled_circle(surf, sp[0], sp[1], vis_r, style.color)
            gfxdraw.aacircle(surf, sp[0], sp[1], vis_r, style.color)

        # HUD text
        draw_text(surf, "Drag: orbit camera | Wheel: zoom | Arrows: orbit | Space: Play/Pause", 10, 10, HUD_COLOR)
        days = elapsed / 86400.0
        draw_text(surf, f"Elapsed: {days:.2f} d  Speed: {time_scale:.1f}x  Focus: {focus}  "
                        f"[{'Playing' if playing else 'Paused'}]", 10, 30, HUD_COLOR)
        if error:
            draw_text(surf, f"Error: {error}", 10, 50, (255, 120, 120))

        pygame.display.flip()

_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 16)
        except (pygame.error, OSError):
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))

def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

def _blend(bg, fg, alpha):
    alpha = clamp(alpha, 0.0, 1.0)
    return tuple(int(b + (f - b) * alpha) for b, f in zip(bg, fg))

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: presets, simulation controls, camera focus, grid and readouts.
    """
    def __init__(self, viewer: ViewerController, renderer: PygameRenderer):
        self.viewer = viewer
        self.renderer = renderer

        self.status_msg_id = None
        self.focus_combo_id = None
        self.energy_id = None
        self.momentum_id = None
        self.play_button_id = None
        self._last_error_shown = None

        self._template_map: Dict[str, str] = {}
        self._build_ui()

        dpg.set_frame_callback(1, self._post_setup)
        self._schedule_sync()

    def _post_setup(self):
        self.load_scene(DEFAULT_SCENE_NAME)

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        current = dpg.get_frame_count()
        dpg.set_frame_callback(current + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Orbit3D - Controls', width=520, height=460)

        with dpg.window(label="Controls", width=500, height=440, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Preset:")
                for fn, display in list_templates():
                    self._template_map[display] = fn
                preset_items = list(BUILTIN_SCENES) + list(self._template_map)
                dpg.add_combo(preset_items,
                              default_value=DEFAULT_SCENE_NAME,
                              width=260,
                              tag="preset_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_scene(dpg.get_value("preset_combo")))

            dpg.add_separator()

            dpg.add_text("Simulation Controls")
            with dpg.group(horizontal=True):
                self.play_button_id = dpg.add_button(label="Play", callback=self._toggle_play)
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_button(label="Reset", callback=lambda: self.load_scene(self.viewer.scene_name))
                dpg.add_checkbox(label="Trails", default_value=True, callback=self._toggle_trails)
            with dpg.group(horizontal=True):
                dpg.add_text("Time scale (x):")
                dpg.add_slider_float(min_value=MIN_TIME_SCALE, max_value=MAX_TIME_SCALE,
                                     default_value=self.viewer.params.time_scale, width=300,
                                     format="%.1f", clamped=True,
                                     callback=lambda s, a, u: self.viewer.set_time_scale(a),
                                     tag="time_scale_slider")
            with dpg.group(horizontal=True):
                dpg.add_text("Distance scale:")
                dpg.add_slider_float(min_value=MIN_DISTANCE_SCALE, max_value=MAX_DISTANCE_SCALE,
                                     default_value=self.viewer.params.distance_scale, width=300,
                                     format="%.2e", clamped=True,
                                     callback=lambda s, a, u: self.viewer.set_distance_scale(a),
                                     tag="distance_scale_slider")

            dpg.add_separator()

            dpg.add_text("Camera")
            with dpg.group(horizontal=True):
                dpg.add_text("Focus on:")
                self.focus_combo_id = dpg.add_combo([NO_FOCUS], default_value=NO_FOCUS, width=200,
                                                    callback=lambda s, a, u: self.viewer.set_focus(a))
                dpg.add_button(label="Reset Camera", callback=self.renderer.reset_camera)

            dpg.add_text("Grid")
            with dpg.group(horizontal=True):
                dpg.add_checkbox(label="Show", default_value=True, callback=lambda s, a, u: self._set_grid_visible(a))
                dpg.add_slider_float(label="Opacity", min_value=0.0, max_value=1.0, default_value=1.0, width=200,
                                     callback=lambda s, a, u: self._set_grid_opacity(a))

            dpg.add_separator()

            dpg.add_text("Diagnostics")
            self.energy_id = dpg.add_text("Total energy: -")
            self.momentum_id = dpg.add_text("Total momentum: -")
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _toggle_play(self):
        playing = self.viewer.toggle_play()
        dpg.configure_item(self.play_button_id, label="Pause" if playing else "Play")
        self._set_status(f"Simulation {'Playing' if playing else 'Paused'}.")

    def _step_once(self):
        # Advance by 1/60 real second scaled by time_scale
        if self.viewer.tick(1 / 60.0):
            self._set_status("Stepped one frame.")

    def _toggle_trails(self, sender, value, user_data=None):
        with self.viewer.lock:
            self.viewer.show_trails = bool(value)
        if not value:
            self.viewer.clear_trails()
        self._set_status(f"Trails {'ON' if value else 'OFF'}.")

    def _set_grid_visible(self, value):
        with self.viewer.lock:
            self.viewer.show_grid = bool(value)

    def _set_grid_opacity(self, value):
        with self.viewer.lock:
            self.viewer.grid_opacity = clamp(float(value), 0.0, 1.0)

    def load_scene(self, name: str):
        name = name.strip()
        if name in BUILTIN_SCENES:
            template = BUILTIN_SCENES[name]()
        elif name in self._template_map:
            template = load_template(self._template_map[name])
        else:
            self._set_error(f"Unknown preset '{name}'.")
            logger.warning("Unknown preset '%s'", name)
            return
        if not template.bodies:
            self._set_error(f"Preset '{name}' has no usable bodies.")
            return

        self.viewer.load_scene(template)
        with self.viewer.lock:
            time_scale = self.viewer.params.time_scale
            distance_scale = self.viewer.params.distance_scale
            focus = self.viewer.focus_body
        dpg.set_value("time_scale_slider", time_scale)
        dpg.set_value("distance_scale_slider", distance_scale)
        dpg.configure_item(self.focus_combo_id, items=[NO_FOCUS] + self.viewer.body_names())
        dpg.set_value(self.focus_combo_id, focus)
        self._set_status(f"Loaded preset: {template.name}")

    def _sync_ui_with_sim(self):
        """
        Periodic UI update for diagnostics, play state and tick failures.
        """
        with self.viewer.lock:
            sim = self.viewer.simulation
            playing = self.viewer.playing
            error = self.viewer.last_error
            try:
                energy = sim.total_energy()
            except SimulationError:
                energy = None
            momentum = sim.total_momentum()

        dpg.set_value(self.energy_id, "Total energy: -" if energy is None else f"Total energy: {energy:.6e} J")
        dpg.set_value(self.momentum_id,
                      "Total momentum: ({:.3e}, {:.3e}, {:.3e}) kg m/s".format(*momentum))
        dpg.configure_item(self.play_button_id, label="Pause" if playing else "Play")
        if error and error != self._last_error_shown:
            self._set_error(f"Paused: {error}")
        self._last_error_shown = error

        # Reschedule next sync
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def main():
    logging.basicConfig(
        level=os.environ.get("ORBIT3D_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    viewer = ViewerController()

    # Ensure a working default scene is present before any UI callbacks
    viewer.load_scene(BUILTIN_SCENES[DEFAULT_SCENE_NAME]())

    renderer = PygameRenderer(viewer)

    # Start Pygame renderer thread
    renderer.start()

    ui = UI(viewer, renderer)

    # Keyboard shortcut in UI window to toggle play/pause (Space)
    with dpg.handler_registry():
        def key_press(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_press)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        viewer.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()

if __name__ == "__main__":
    main()
