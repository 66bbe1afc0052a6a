# MIT License (see LICENSE)
"""
CSV export of simulation event logs.

Collision momenta, ray interactions, bounces and decay samples are all
fixed-width rows with a documented header, so one writer covers them all.
Blank cells (for example an undefined critical angle) are written as empty
fields.
"""
from __future__ import annotations
import csv
import logging
from typing import Any, Iterable, Sequence

from ..simulations import Simulation

logger = logging.getLogger(__name__)


def write_csv(path: str, header: Sequence[str], rows: Iterable[Sequence[Any]]) -> int:
    """
    Write a header line followed by rows.

    Returns:
        Number of data rows written.

    Raises:
        ValueError: If a row's width differs from the header's.
    """
    count = 0
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for row in rows:
            if len(row) != len(header):
                raise ValueError(f"Row {count} has {len(row)} fields, header has {len(header)}")
            writer.writerow(row)
            count += 1
    logger.info("Wrote %d rows to %s", count, path)
    return count


def export_records(simulation: Simulation, path: str) -> int:
    """
    Export a simulation's event log using its CSV_HEADER.

    Raises:
        ValueError: If the simulation has no exportable log.
    """
    if not simulation.CSV_HEADER:
        raise ValueError(f"{type(simulation).__name__} has no exportable records")
    return write_csv(path, simulation.CSV_HEADER, simulation.records())
