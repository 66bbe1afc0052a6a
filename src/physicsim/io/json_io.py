# MIT License (see LICENSE)
"""
JSON serialization and deserialization of simulation configs.

This module saves and loads the parameters a simulation starts from. The
format is human-readable and meant to be edited by hand.

JSON Schema Overview:
---------------------
{
  "simulation": string,            # Registry name, e.g. "collisions"
  "params": {                      # Optional; omitted keys use defaults
    "<field>": number | bool | string | null | [x, y, z]
  }
}

Example:
{
  "simulation": "projectile",
  "params": {"velocity": [5.0, 0.0, 10.0], "restitution": 0.8}
}

Vectors are written as 3-element lists and read back as tuples. Unknown
simulation names and unknown parameter names are rejected with ValueError.
"""
from __future__ import annotations
import json
from dataclasses import fields, MISSING
from typing import Any

import numpy as np

from ..simulations import Simulation, get_simulation


def load_config_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a config file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.

    Returns:
        Dictionary containing the raw JSON data.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def config_from_json(data: dict[str, Any]) -> tuple[str, Any]:
    """
    Build a config dataclass from a parsed document.

    Args:
        data: Dictionary with "simulation" and optional "params".

    Returns:
        Tuple (simulation name, config instance).

    Raises:
        ValueError: If the simulation name is missing or unknown, or a
                    parameter is not a field of that simulation's config.
    """
    if "simulation" not in data:
        raise ValueError("Config document missing required 'simulation' field.")
    name = data["simulation"]
    config_class = get_simulation(name).config_class

    params = data.get("params", {}) or {}
    known = {f.name for f in fields(config_class)}
    unknown = sorted(set(params) - known)
    if unknown:
        raise ValueError(f"Unknown parameter(s) for {name!r}: {', '.join(unknown)}")

    kwargs = {k: tuple(v) if isinstance(v, list) else v for k, v in params.items()}
    return name, config_class(**kwargs)


def load_config(path: str) -> tuple[str, Any]:
    """
    Load a config file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: For unknown simulations or parameters.
    """
    return config_from_json(load_config_raw(path))


def load_simulation(path: str) -> Simulation:
    """Load a config file and construct the simulation it describes."""
    name, config = load_config(path)
    return get_simulation(name)(config)


def config_to_json(name: str, config: Any) -> dict[str, Any]:
    """
    Serialize a config to a dictionary (round-trip compatible).

    Only fields that differ from the dataclass defaults are included, to
    keep files short.
    """
    params = {}
    for f in fields(config):
        value = getattr(config, f.name)
        if f.default is not MISSING and _same(value, f.default):
            continue
        params[f.name] = _plain(value)
    return {"simulation": name, "params": params}


def save_config(name: str, config: Any, path: str, indent: int = 2) -> None:
    """Save a config to a JSON file on disk."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config_to_json(name, config), f, indent=indent)


def save_simulation_config(simulation: Simulation, path: str, indent: int = 2) -> None:
    """Save the current config of a running simulation."""
    save_config(simulation.name, simulation.config, path, indent=indent)


def _same(a: Any, b: Any) -> bool:
    if isinstance(a, (tuple, list, np.ndarray)) or isinstance(b, (tuple, list, np.ndarray)):
        return _plain(a) == _plain(b)
    return a == b


def _plain(value: Any) -> Any:
    """Helper: numpy arrays and tuples become lists of floats."""
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    if isinstance(value, np.generic):
        return value.item()
    return value
