#!/usr/bin/env python3
"""
Preset JSON loading utilities.

This module defines a simple JSON schema and loader for scene templates
(templates/*.json): a catalog of bodies plus optional view settings.

Schema
======
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "time_step": 900000.0,             # optional, simulated seconds per frame
  "viewing_angle": -0.3,             # optional, radians
  "bodies": [
    {"name": "Sun", "radius": 2000, "distance": 0, "period": 1},
    {"name": "Saturn", "radius": 167, "distance": 3500, "period": 929318400,
     "parent": "Sun", "ring": [267, 367]}
  ]
}

Bodies name their parent instead of pointing at a list position, so entries may
appear in any order. Exactly one body has no parent.

Users can add their own JSON files into the templates folder and they'll be picked up
by the loader.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .catalog import Catalog, CatalogError
from .data_models import CelestialBody
from .utils import try_float

log = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")


@dataclass(frozen=True)
class Preset:
  name: str
  catalog: Catalog
  time_step: Optional[float] = None
  viewing_angle: Optional[float] = None
  description: str = ""


def _read_json(path: str) -> dict:
  with open(path, "r", encoding="utf-8") as f:
    data = json.load(f)
  if not isinstance(data, dict):
    raise CatalogError(f"{path}: expected a JSON object at top level")
  return data


def _number(entry: dict, key: str, name: str, default: Optional[float] = None) -> float:
  raw = entry.get(key, default)
  val = try_float(raw)
  if val is None:
    raise CatalogError(f"{name}: '{key}' must be a number, got {raw!r}")
  return val


def _optional_number(data: dict, key: str) -> Optional[float]:
  if data.get(key) is None:
    return None
  return _number(data, key, "preset")


def _ring(entry: dict, name: str) -> Optional[Tuple[float, float]]:
  raw = entry.get("ring")
  if raw is None:
    return None
  if not isinstance(raw, (list, tuple)) or len(raw) != 2:
    raise CatalogError(f"{name}: 'ring' must be [inner, outer]")
  inner, outer = try_float(raw[0]), try_float(raw[1])
  if inner is None or outer is None:
    raise CatalogError(f"{name}: 'ring' must contain numbers")
  return (inner, outer)


def catalog_from_entries(entries: List[dict]) -> Catalog:
  """Build a Catalog from body dicts that reference their parent by name."""
  names: Dict[str, int] = {}
  for i, entry in enumerate(entries):
    if not isinstance(entry, dict):
      raise CatalogError(f"Body #{i} must be an object")
    name = str(entry.get("name") or f"Body {i}")
    if name in names:
      raise CatalogError(f"Duplicate body name: {name}")
    names[name] = i

  bodies: List[CelestialBody] = []
  for i, entry in enumerate(entries):
    name = str(entry.get("name") or f"Body {i}")
    parent = entry.get("parent")
    if parent is not None and parent not in names:
      raise CatalogError(f"{name}: unknown parent {parent!r}")
    bodies.append(CelestialBody(
      name=name,
      base_radius=_number(entry, "radius", name),
      orbit_distance=_number(entry, "distance", name, 0.0),
      period=_number(entry, "period", name),
      parent_index=None if parent is None else names[parent],
      ring_span=_ring(entry, name),
    ))
  return Catalog(bodies)


def list_templates() -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available templates."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(TEMPLATES_DIR):
    return items
  for fn in sorted(os.listdir(TEMPLATES_DIR)):
    if not fn.lower().endswith(".json"):
      continue
    path = os.path.join(TEMPLATES_DIR, fn)
    try:
      data = _read_json(path)
    except (OSError, ValueError) as e:
      log.warning("Skipping unreadable template %s: %s", fn, e)
      continue
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def load_template(file_name: str, templates_dir: str = TEMPLATES_DIR) -> Preset:
  """
  Load a template JSON by file name (or absolute path).
  Raises CatalogError if the file does not describe a valid catalog.
  """
  path = file_name if os.path.isabs(file_name) else os.path.join(templates_dir, file_name)
  try:
    data = _read_json(path)
  except json.JSONDecodeError as e:
    raise CatalogError(f"{path}: invalid JSON: {e}") from e
  entries = data.get("bodies")
  if not isinstance(entries, list) or not entries:
    raise CatalogError(f"{path}: 'bodies' must be a non-empty list")

  catalog = catalog_from_entries(entries)
  preset = Preset(
    name=data.get("name") or os.path.splitext(os.path.basename(file_name))[0],
    catalog=catalog,
    time_step=_optional_number(data, "time_step"),
    viewing_angle=_optional_number(data, "viewing_angle"),
    description=data.get("description", ""),
  )
  log.info("Loaded template %s: %d bodies", preset.name, len(catalog))
  return preset
