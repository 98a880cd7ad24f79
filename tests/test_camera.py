import pytest

from orbit3d.camera import OrbitCamera
from orbit3d.constants import CAMERA_MAX_PITCH_DEG, CAMERA_MIN_DISTANCE


def test_default_eye_matches_initial_view():
    camera = OrbitCamera()
    assert camera.eye_position() == pytest.approx((0.0, 30.0, 60.0), abs=0.05)


def test_target_projects_to_viewport_center():
    camera = OrbitCamera(target=(5.0, -2.0, 7.0))
    camera.set_viewport_size(800, 600)
    sx, sy, depth = camera.world_to_screen((5.0, -2.0, 7.0))
    assert sx == pytest.approx(400.0)
    assert sy == pytest.approx(300.0)
    assert depth == pytest.approx(camera.distance)


def test_screen_axes():
    camera = OrbitCamera(pitch_deg=0.0)
    camera.set_viewport_size(800, 600)
    right = camera.world_to_screen((1.0, 0.0, 0.0))
    above = camera.world_to_screen((0.0, 1.0, 0.0))
    assert right[0] > 400.0
    assert above[1] < 300.0


def test_points_behind_the_camera_are_culled():
    camera = OrbitCamera(pitch_deg=0.0)
    eye = camera.eye_position()
    assert camera.world_to_screen((eye[0], eye[1], eye[2] + 10.0)) is None


def test_projected_radius_shrinks_with_depth():
    camera = OrbitCamera()
    near = camera.projected_radius(1.0, 10.0)
    far = camera.projected_radius(1.0, 100.0)
    assert near == pytest.approx(10.0 * far)
    assert camera.projected_radius(1.0, 0.0) == 0.0


def test_orbit_and_zoom_are_clamped():
    camera = OrbitCamera()
    camera.orbit(370.0, 500.0)
    assert camera.yaw_deg == pytest.approx(10.0)
    assert camera.pitch_deg == CAMERA_MAX_PITCH_DEG
    for _ in range(200):
        camera.zoom(2.0)
    assert camera.distance == CAMERA_MIN_DISTANCE


def test_resize_updates_aspect():
    camera = OrbitCamera()
    camera.set_viewport_size(1600, 800)
    assert camera.aspect == 2.0
    camera.set_viewport_size(0, 0)
    assert camera.viewport_size == (1, 1)
