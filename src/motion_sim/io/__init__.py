# MIT License (see LICENSE)
"""
Input/Output utilities for lab presets.

This subpackage provides:
    - JSON presets: Save and load lab configuration (global + objects).
    - Snapshot export: Convert snapshots to JSON-compatible dicts.

Typical usage:
    from motion_sim.io import load_controller, save_controller

    controller = load_controller("race.json")
    save_controller(controller, "race_copy.json")
"""
from .json_io import (
    load_config_raw,
    load_controller,
    save_controller,
    controller_to_json,
    global_config_from_json,
    object_from_json,
    object_to_json,
    snapshot_to_json,
    state_to_json,
)

__all__ = [
    # Loading
    "load_config_raw",
    "load_controller",
    "global_config_from_json",
    "object_from_json",
    # Saving
    "save_controller",
    "controller_to_json",
    "object_to_json",
    # Export
    "snapshot_to_json",
    "state_to_json",
]
