#!/usr/bin/env python3
"""
Scene template loading: built-in presets and JSON files.

Schemas
=======
Template JSON (templates/*.json):
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "time_scale": 1000.0,              # optional, default None
  "distance_scale": 1e-8,            # optional, default None
  "bodies": [
    {
      "name": "Sun",
      "mass": 1.989e30,
      "position": [0.0, 0.0, 0.0],
      "velocity": [0.0, 0.0, 0.0],
      "radius": 5.0,                 # display units, drawing only
      "color": [255, 255, 0]         # drawing only
    }
  ]
}

Users can add their own JSON files into the templates folder and they'll be
picked up by the loader. Bodies that fail validation are skipped with a
warning rather than aborting the whole template.
"""
import json
import logging
import math
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .constants import (
  DEFAULT_BODY_COLOR,
  DEFAULT_BODY_RADIUS,
  DEFAULT_DISTANCE_SCALE,
  DEFAULT_TIME_SCALE,
  EARTH_MASS,
  EARTH_POSITION,
  EARTH_VELOCITY,
  G,
  MOON_MASS,
  MOON_POSITION,
  MOON_VELOCITY,
  SUN_MASS,
)
from .data_models import Body
from .errors import SimulationError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

DEFAULT_SCENE_NAME = "Sun, Earth and Moon"
FIGURE_EIGHT_NAME = "Classic 3-body (Figure-eight)"


@dataclass
class BodyStyle:
  """How the viewport draws a body. Kept apart from the physical Body."""
  color: Tuple[int, int, int] = DEFAULT_BODY_COLOR
  radius: float = DEFAULT_BODY_RADIUS


@dataclass
class SceneTemplate:
  name: str
  bodies: List[Body] = field(default_factory=list)
  styles: Dict[str, BodyStyle] = field(default_factory=dict)
  description: str = ""
  time_scale: Optional[float] = None
  distance_scale: Optional[float] = None


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as exc:
    logger.warning("Could not read template %s: %s", path, exc)
    return None
  if not isinstance(data, dict):
    logger.warning("Template %s is not a JSON object", path)
    return None
  return data


def _coerce_color(c) -> Tuple[int, int, int]:
  try:
    r, g, b = int(c[0]), int(c[1]), int(c[2])
  except (TypeError, ValueError, IndexError):
    return DEFAULT_BODY_COLOR
  r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
  return (r, g, b)


def _coerce_radius(r) -> float:
  try:
    radius = float(r)
  except (TypeError, ValueError):
    return DEFAULT_BODY_RADIUS
  if not math.isfinite(radius) or radius <= 0:
    return DEFAULT_BODY_RADIUS
  return radius


def _optional_float(value) -> Optional[float]:
  if value is None:
    return None
  try:
    number = float(value)
  except (TypeError, ValueError):
    return None
  if not math.isfinite(number):
    return None
  return number


def list_templates(directory: str = TEMPLATES_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available templates."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(directory):
    return items
  for fn in sorted(os.listdir(directory)):
    if not fn.lower().endswith(".json"):
      continue
    path = os.path.join(directory, fn)
    data = _read_json(path) or {}
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def load_template(file_name: str, directory: str = TEMPLATES_DIR) -> SceneTemplate:
  """
  Load a template JSON by file name.

  An unreadable file gives an empty template named after the file.
  """
  path = os.path.join(directory, file_name)
  data = _read_json(path) or {}
  template = SceneTemplate(
    name=data.get("name") or os.path.splitext(file_name)[0],
    description=data.get("description", ""),
    time_scale=_optional_float(data.get("time_scale")),
    distance_scale=_optional_float(data.get("distance_scale")),
  )
  entries = data.get("bodies") or []
  if not isinstance(entries, list):
    logger.warning("Template %s: 'bodies' is not a list, ignoring it", file_name)
    entries = []
  for index, b in enumerate(entries):
    try:
      body = Body(
        name=str(b.get("name", f"Body {index + 1}")),
        mass=b["mass"],
        position=b["position"],
        velocity=b.get("velocity", (0.0, 0.0, 0.0)),
      )
    except (AttributeError, KeyError, TypeError, ValueError, SimulationError) as exc:
      logger.warning("Skipping body #%d in %s: %s", index, file_name, exc)
      continue
    if body.name in template.styles:
      logger.warning("Skipping body #%d in %s: duplicate name '%s'", index, file_name, body.name)
      continue
    template.bodies.append(body)
    template.styles[body.name] = BodyStyle(
      color=_coerce_color(b.get("color", DEFAULT_BODY_COLOR)),
      radius=_coerce_radius(b.get("radius", DEFAULT_BODY_RADIUS)),
    )
  logger.debug("Loaded template '%s' with %d bodies", template.name, len(template.bodies))
  return template


def default_scene() -> SceneTemplate:
  """Sun at rest with Earth at about half an AU and the Moon beside it."""
  return SceneTemplate(
    name=DEFAULT_SCENE_NAME,
    bodies=[
      Body("Sun", SUN_MASS, (0.0, 0.0, 0.0)),
      Body("Earth", EARTH_MASS, EARTH_POSITION, EARTH_VELOCITY),
      Body("Moon", MOON_MASS, MOON_POSITION, MOON_VELOCITY),
    ],
    styles={
      "Sun": BodyStyle((255, 255, 0), 5.0),
      "Earth": BodyStyle((0, 0, 255), 1.5),
      "Moon": BodyStyle((136, 136, 136), 0.4),
    },
    time_scale=DEFAULT_TIME_SCALE,
    distance_scale=DEFAULT_DISTANCE_SCALE,
  )


def figure_eight_scene() -> SceneTemplate:
  """Classic equal-mass figure-eight periodic solution (Chenciner-Montgomery), scaled to SI.
  Dimensionless initial conditions (G=1, m=1), laid out in the x-z plane:
  r1=(-0.97000436, 0.24308753), r2=(0.97000436,-0.24308753), r3=(0,0)
  v1=(0.4662036850, 0.4323657300), v2=(0.4662036850, 0.4323657300), v3=(-0.93240737,-0.86473146)
  We scale by choosing mass m_si and length L, then velocity V = sqrt(G*m_si/L).
  """
  m_si = 5e24
  L = 1.0e9  # meters
  V = math.sqrt(G * m_si / L)

  r1 = (-0.97000436, 0.24308753)
  r2 = (0.97000436, -0.24308753)
  r3 = (0.0, 0.0)
  v1 = (0.4662036850, 0.4323657300)
  v2 = (0.4662036850, 0.4323657300)
  v3 = (-0.93240737, -0.86473146)

  bodies = [
    Body("A", m_si, (r1[0]*L, 0.0, r1[1]*L), (v1[0]*V, 0.0, v1[1]*V)),
    Body("B", m_si, (r2[0]*L, 0.0, r2[1]*L), (v2[0]*V, 0.0, v2[1]*V)),
    Body("C", m_si, (r3[0]*L, 0.0, r3[1]*L), (v3[0]*V, 0.0, v3[1]*V)),
  ]
  return SceneTemplate(
    name=FIGURE_EIGHT_NAME,
    bodies=bodies,
    styles={
      "A": BodyStyle((255, 120, 120), 1.0),
      "B": BodyStyle((120, 255, 120), 1.0),
      "C": BodyStyle((120, 120, 255), 1.0),
    },
    time_scale=1e7,
    distance_scale=DEFAULT_DISTANCE_SCALE,
  )


BUILTIN_SCENES = {
  DEFAULT_SCENE_NAME: default_scene,
  FIGURE_EIGHT_NAME: figure_eight_scene,
}
