"""
Data import/export utilities for reactor run history.
"""

from __future__ import annotations

import csv
from dataclasses import asdict, fields
from pathlib import Path
from typing import List, Union

from .data_classes import ReactorSnapshot, TickRecord

_INT_FIELDS = {f.name for f in fields(TickRecord) if f.type in ("int", int)}
_STR_FIELDS = {"scram_status"}


def export_history_to_csv(records: List[TickRecord], filename: str = "reactor_history.csv"):
    """Export tick records to a CSV file.

    Parameters
    ----------
    records : List[TickRecord]
        Records returned by :func:`run_simulation`.
    filename : str
        Output CSV filename.
    """
    if not records:
        print("[warning] No tick records to export.")
        return

    output_path = Path(filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    headers = [f.name for f in fields(TickRecord)]

    with open(filename, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=headers)
        writer.writeheader()
        for record in records:
            writer.writerow(asdict(record))

    print(f"[info] Reactor history exported to {filename}")
    print(f"[info] Total ticks: {len(records)}")


def load_history_from_csv(csv_file: Union[str, Path]) -> List[TickRecord]:
    """Load tick records written by :func:`export_history_to_csv`.

    Example
    -------
    >>> records = load_history_from_csv('Data/reactor_history.csv')
    >>> print(f"Loaded {len(records)} ticks")
    """
    csv_path = Path(csv_file)
    if not csv_path.is_file():
        raise FileNotFoundError(f"History file '{csv_file}' does not exist")

    records = []
    with open(csv_path, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for row in reader:
            values = {}
            for name, raw in row.items():
                if name in _STR_FIELDS:
                    values[name] = raw
                elif name in _INT_FIELDS:
                    values[name] = int(raw)
                else:
                    values[name] = float(raw)
            records.append(TickRecord(**values))
    return records


def export_core_snapshot_to_csv(snapshot: ReactorSnapshot, filename: str = "core_snapshot.csv"):
    """Export the per-cell state of a snapshot, one row per cell."""
    output_path = Path(filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    headers = ['col', 'row', 'kind', 'fuel_state', 'temperature', 'boil_intensity']

    with open(filename, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(headers)
        for cell in snapshot.cells:
            col, row = cell.position
            writer.writerow([
                col,
                row,
                cell.kind.name,
                cell.fuel_state.name if cell.fuel_state is not None else "",
                cell.temperature,
                cell.boil_intensity,
            ])

    print(f"[info] Core snapshot (tick {snapshot.tick}) exported to {filename}")
