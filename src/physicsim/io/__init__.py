# MIT License (see LICENSE)
"""
Input/Output utilities.

This subpackage provides:
    - JSON configs: save and load the parameters a simulation starts from.
    - CSV export: write event logs (collisions, ray interactions, ...).

Typical usage:
    from physicsim.io import load_simulation, export_records

    sim = load_simulation("collisions.json")
    for _ in range(300):
        sim.step(1 / 30)
    export_records(sim, "collisions.csv")
"""
from .json_io import (
    load_config,
    load_config_raw,
    load_simulation,
    config_from_json,
    config_to_json,
    save_config,
    save_simulation_config,
)
from .csv_export import write_csv, export_records

__all__ = [
    # Loading
    "load_config",
    "load_config_raw",
    "load_simulation",
    "config_from_json",
    # Saving
    "config_to_json",
    "save_config",
    "save_simulation_config",
    # CSV
    "write_csv",
    "export_records",
]
