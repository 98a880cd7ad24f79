import pytest

pytest.importorskip("pygame")
pytest.importorskip("dearpygui")

import orbit3d_app
from orbit3d.data_models import Body
from orbit3d.presets_loader import SceneTemplate, default_scene


@pytest.fixture
def viewer():
    v = orbit3d_app.ViewerController()
    v.load_scene(default_scene())
    return v


def test_load_scene_applies_template_parameters(viewer):
    assert viewer.body_names() == ["Sun", "Earth", "Moon"]
    assert viewer.params.time_scale == 1000.0
    assert viewer.params.distance_scale == 1e-8
    assert viewer.simulation.params is viewer.params


def test_tick_advances_bodies(viewer):
    earth = viewer.simulation.get_body("Earth")
    start = earth.position
    assert viewer.tick(1 / 60.0)
    assert earth.position != start
    assert len(earth.trail) == 1


def test_failed_tick_pauses_and_reports(viewer):
    viewer.load_scene(SceneTemplate(
        name="Overlap",
        bodies=[Body("A", 1.0, (0.0, 0.0, 0.0)), Body("B", 1.0, (0.0, 0.0, 0.0))],
    ))
    viewer.playing = True
    assert not viewer.tick(0.1)
    assert viewer.playing is False
    assert "same position" in viewer.last_error


def test_focus_follows_body(viewer):
    assert viewer.focus_target() == (0.0, 0.0, 0.0)
    viewer.set_focus("Earth")
    assert viewer.focus_target() == pytest.approx((750.0, 0.0, 0.0))
    viewer.set_focus("Pluto")
    assert viewer.focus_body == orbit3d_app.NO_FOCUS


def test_scale_setters_clamp(viewer):
    viewer.set_time_scale(-10.0)
    assert viewer.params.time_scale == 0.0
    viewer.set_distance_scale(1.0)
    assert viewer.params.distance_scale == 1e-6


def test_toggle_play(viewer):
    assert viewer.toggle_play() is True
    assert viewer.toggle_play() is False


def test_blend():
    assert orbit3d_app._blend((0, 0, 0), (200, 100, 50), 0.5) == (100, 50, 25)
    assert orbit3d_app._blend((0, 0, 0), (200, 100, 50), 2.0) == (200, 100, 50)


@pytest.mark.parametrize("distance_scale, expected", [(1e300, 1e-6), (1e-300, 1e-10), (-1.0, 1e-10)])
def test_template_distance_scale_is_clamped(viewer, distance_scale, expected):
    viewer.load_scene(SceneTemplate(
        name="Scaled",
        bodies=[Body("Sun", 1.0e30, (1.0e11, 0.0, 0.0))],
        distance_scale=distance_scale,
    ))
    assert viewer.params.distance_scale == expected
    viewer.set_focus("Sun")
    target = viewer.focus_target()
    assert all(abs(c) < float("inf") for c in target)


def test_safe_point_rejects_non_finite_coordinates():
    assert orbit3d_app._safe_point((float("nan"), 10.0)) is None
    assert orbit3d_app._safe_point((float("inf"), 10.0)) is None
    assert orbit3d_app._safe_point((12.7, -3.2)) == (12, -3)
    assert orbit3d_app._safe_point((1e9, 0.0)) is None


def test_draw_text_falls_back_to_default_font(monkeypatch):
    import pygame

    rendered = []

    class FakeFont:
        def render(self, text, antialias, color):
            rendered.append(text)
            return "image"

    class FakeSurface:
        def __init__(self):
            self.blits = []

        def blit(self, image, pos):
            self.blits.append((image, pos))

    def missing_font(name, size):
        raise pygame.error("font not found")

    monkeypatch.setattr(orbit3d_app, "_cached_font", None)
    monkeypatch.setattr(pygame.font, "get_init", lambda: True)
    monkeypatch.setattr(pygame.font, "SysFont", missing_font)
    monkeypatch.setattr(pygame.font, "Font", lambda name, size: FakeFont())

    surface = FakeSurface()
    orbit3d_app.draw_text(surface, "hello", 3, 4, (255, 255, 255))
    assert rendered == ["hello"]
    assert surface.blits == [("image", (3, 4))]
