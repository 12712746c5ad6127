# MIT License (see LICENSE)
"""
JSON presets for lab configuration, and snapshot export.

A preset stores the *configuration* of a lab (global parameters plus the
objects and their motion parameters), never the state of a run. Loading a
preset produces an IDLE controller.

JSON Schema Overview:
---------------------
{
  "track_length": float,           # Default: 300.0 (m), range [10, 1000]
  "time_scale": float,             # Default: 1.0, range [0.1, 5]
  "objects": [                     # Required, at least one
    {
      "id": string,                # Required, unique
      "name": string,              # Optional
      "color": string,             # Optional, hex color
      "force": float,              # N, default: 75
      "mass": float,               # kg, default: 5
      "friction_coeff": float,     # μ, default: 0.1
      "drag_coeff": float,         # k, default: 0.015
      "initial_velocity": float    # m/s, default: 0
    }
  ]
}
Missing motion fields fall back to DEFAULT_MOTION_CONFIG.
"""
from __future__ import annotations
import json
import logging
from typing import Any

from ..config import (
    DEFAULT_GLOBAL_CONFIG,
    DEFAULT_MOTION_CONFIG,
    validate_global_config,
    validate_motion_config,
)
from ..controller import SimulationController, Snapshot
from ..errors import ConfigError
from ..types import GlobalConfig, MotionConfig, ObjectSpec, ObjectState

logger = logging.getLogger(__name__)

_MOTION_FIELDS = ("force", "mass", "friction_coeff", "drag_coeff", "initial_velocity")


def load_config_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a preset file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def global_config_from_json(d: dict[str, Any]) -> GlobalConfig:
    """Parse and validate the global section of a preset."""
    config = GlobalConfig(
        track_length=_number(d, "track_length", DEFAULT_GLOBAL_CONFIG.track_length),
        time_scale=_number(d, "time_scale", DEFAULT_GLOBAL_CONFIG.time_scale),
    )
    return validate_global_config(config)


def object_from_json(d: dict[str, Any]) -> ObjectSpec:
    """
    Parse a single object definition.

    Raises:
        ConfigError: If 'id' is missing or a motion field is invalid.
    """
    if "id" not in d:
        raise ConfigError("Object definition missing required 'id' field.")
    config = MotionConfig(**{
        name: _number(d, name, getattr(DEFAULT_MOTION_CONFIG, name)) for name in _MOTION_FIELDS
    })
    return ObjectSpec(
        id=str(d["id"]),
        config=validate_motion_config(config),
        name=str(d.get("name", d["id"])),
        color=str(d.get("color", "#ffffff")),
    )


def object_to_json(spec: ObjectSpec) -> dict[str, Any]:
    """Serialize an ObjectSpec (round-trip compatible with object_from_json)."""
    result: dict[str, Any] = {"id": spec.id}
    if spec.name:
        result["name"] = spec.name
    result["color"] = spec.color
    for name in _MOTION_FIELDS:
        result[name] = getattr(spec.config, name)
    return result


def load_controller(path: str, **kwargs: Any) -> SimulationController:
    """
    Load a preset and construct an IDLE SimulationController.

    Args:
        path: Path to the JSON preset.
        **kwargs: Forwarded to SimulationController (tick_source, profiler, ...).

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ConfigError: If any value is missing or out of range.
    """
    data = load_config_raw(path)
    objects = data.get("objects")
    if not objects:
        raise ConfigError("Preset must define at least one object.")

    controller = SimulationController(
        specs=[object_from_json(o) for o in objects],
        global_config=global_config_from_json(data),
        **kwargs,
    )
    logger.info("loaded preset %s with %d objects", path, len(controller.specs))
    return controller


def controller_to_json(controller: SimulationController) -> dict[str, Any]:
    """Serialize a controller's configuration (not its run state) as a preset."""
    return {
        "track_length": controller.global_config.track_length,
        "time_scale": controller.global_config.time_scale,
        "objects": [object_to_json(s) for s in controller.specs],
    }


def save_controller(controller: SimulationController, path: str, indent: int = 2) -> None:
    """Save a controller's configuration to a JSON preset on disk."""
    data = controller_to_json(controller)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)


def state_to_json(state: ObjectState) -> dict[str, Any]:
    """Serialize an ObjectState for export; trails become [position, opacity] pairs."""
    return {
        "id": state.id,
        "position": state.position,
        "velocity": state.velocity,
        "acceleration": state.acceleration,
        "finished": state.finished,
        "status": state.status.value,
        "trail": [[p.position, p.opacity] for p in state.trail],
    }


def snapshot_to_json(snap: Snapshot) -> dict[str, Any]:
    """Serialize a Snapshot to a JSON-compatible dict."""
    return {
        "status": snap.status.value,
        "elapsed": snap.elapsed,
        "tick": snap.tick,
        "track_length": snap.track_length,
        "objects": [state_to_json(s) for s in snap.objects],
    }


def _number(d: dict[str, Any], key: str, default: float) -> float:
    """Helper: read a numeric field, rejecting non-numeric values."""
    value = d.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    return float(value)
