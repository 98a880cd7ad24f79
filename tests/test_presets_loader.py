import json
import logging

import pytest

from orbit3d.constants import DEFAULT_BODY_COLOR, DEFAULT_BODY_RADIUS, EARTH_MASS, SUN_MASS
from orbit3d.presets_loader import (
    BUILTIN_SCENES,
    DEFAULT_SCENE_NAME,
    TEMPLATES_DIR,
    default_scene,
    figure_eight_scene,
    list_templates,
    load_template,
)
from orbit3d.simulation import Simulation


def write_template(directory, file_name, data):
    path = directory / file_name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_default_scene_matches_sun_earth_moon():
    scene = default_scene()
    assert scene.name == DEFAULT_SCENE_NAME
    assert [b.name for b in scene.bodies] == ["Sun", "Earth", "Moon"]
    sun, earth, moon = scene.bodies
    assert sun.mass == SUN_MASS
    assert sun.position == (0.0, 0.0, 0.0)
    assert earth.mass == EARTH_MASS
    assert earth.position == (7.5e10, 0.0, 0.0)
    assert earth.velocity == (0.0, 0.0, 23824.0)
    assert moon.position == (7.5e10 + 3.84e9, 0.0, 1e7)
    assert moon.velocity == (0.0, 1022.0, 23824.0)
    assert scene.time_scale == 1000.0
    assert scene.distance_scale == 1e-8
    assert set(scene.styles) == {"Sun", "Earth", "Moon"}


def test_builtin_scenes_are_fresh_each_call():
    assert default_scene().bodies[0] is not default_scene().bodies[0]
    for factory in BUILTIN_SCENES.values():
        Simulation(factory().bodies).step(1.0)


def test_figure_eight_has_zero_total_momentum():
    sim = Simulation(figure_eight_scene().bodies)
    px, py, pz = sim.total_momentum()
    scale = sim.bodies()[0].mass * 20.0
    assert abs(px) < 1e-6 * scale
    assert py == 0.0
    assert abs(pz) < 1e-6 * scale


def test_load_template(tmp_path):
    write_template(tmp_path, "pair.json", {
        "name": "A pair",
        "description": "two bodies",
        "time_scale": 50.0,
        "distance_scale": 1e-7,
        "bodies": [
            {"name": "Big", "mass": 1e30, "position": [0, 0, 0], "velocity": [0, 0, 0],
             "radius": 3, "color": [300, -5, 10]},
            {"name": "Small", "mass": 1e24, "position": [1e11, 0, 0], "velocity": [0, 0, 3e4]},
        ],
    })
    template = load_template("pair.json", directory=str(tmp_path))
    assert template.name == "A pair"
    assert template.description == "two bodies"
    assert template.time_scale == 50.0
    assert template.distance_scale == 1e-7
    assert [b.name for b in template.bodies] == ["Big", "Small"]
    assert template.bodies[1].velocity == (0.0, 0.0, 3e4)
    assert template.styles["Big"].color == (255, 0, 10)
    assert template.styles["Big"].radius == 3.0
    assert template.styles["Small"].color == DEFAULT_BODY_COLOR
    assert template.styles["Small"].radius == DEFAULT_BODY_RADIUS


def test_invalid_bodies_are_skipped(tmp_path, caplog):
    write_template(tmp_path, "broken.json", {
        "bodies": [
            {"name": "NoMass", "position": [0, 0, 0]},
            {"name": "Negative", "mass": -1, "position": [0, 0, 0]},
            {"name": "Flat", "mass": 1, "position": [0, 0]},
            "not a body",
            {"name": "Good", "mass": 1, "position": [1, 2, 3]},
            {"name": "Good", "mass": 2, "position": [4, 5, 6]},
        ],
    })
    with caplog.at_level(logging.WARNING, logger="orbit3d.presets_loader"):
        template = load_template("broken.json", directory=str(tmp_path))
    assert template.name == "broken"
    assert template.time_scale is None
    assert [b.name for b in template.bodies] == ["Good"]
    assert template.bodies[0].mass == 1.0
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 5


def test_unreadable_template_is_empty(tmp_path, caplog):
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="orbit3d.presets_loader"):
        template = load_template("bad.json", directory=str(tmp_path))
    assert template.bodies == []
    assert template.name == "bad"
    assert any("Could not read template" in r.getMessage() for r in caplog.records)


def test_missing_template_is_empty(tmp_path):
    assert load_template("nope.json", directory=str(tmp_path)).bodies == []


def test_list_templates(tmp_path):
    write_template(tmp_path, "b.json", {"name": "Second"})
    write_template(tmp_path, "a.json", {})
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    assert list_templates(str(tmp_path)) == [("a.json", "a"), ("b.json", "Second")]
    assert list_templates(str(tmp_path / "missing")) == []


@pytest.mark.parametrize("file_name", [fn for fn, _ in list_templates()])
def test_shipped_templates_load(file_name):
    template = load_template(file_name, directory=TEMPLATES_DIR)
    assert template.bodies
    Simulation(template.bodies).step(1.0)


@pytest.mark.parametrize("bodies", [None, 5, "Sun", {"name": "Sun"}])
def test_bodies_that_are_not_a_list_give_an_empty_template(tmp_path, caplog, bodies):
    write_template(tmp_path, "odd.json", {"name": "Odd", "bodies": bodies})
    with caplog.at_level(logging.WARNING, logger="orbit3d.presets_loader"):
        template = load_template("odd.json", directory=str(tmp_path))
    assert template.name == "Odd"
    assert template.bodies == []
    if bodies is not None:
        assert any("not a list" in r.getMessage() for r in caplog.records)


def test_non_finite_scales_are_ignored(tmp_path):
    (tmp_path / "huge.json").write_text(
        '{"name": "Huge", "time_scale": 1e999, "distance_scale": -1e999, "bodies": []}',
        encoding="utf-8",
    )
    template = load_template("huge.json", directory=str(tmp_path))
    assert template.time_scale is None
    assert template.distance_scale is None
