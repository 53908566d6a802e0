# mars_cleanup/ui/csv_writer.py
from __future__ import annotations
import csv
import os
import uuid
from typing import Dict, Optional

from ..sim.metrics import summarize_run
from ..sim.models import RunRecord


class RunCsvLogger:
    """
    Append one row per finished run to a CSV file (default runs/runs.csv).
    Each logger instance gets its own session_id so several invocations can
    share a file and still be told apart by analyze_runs.py.

    Usage:
        logger = RunCsvLogger()
        record = simulate_run(params)
        logger.append_run(record, route_length=...)
    """
    HEADER = [
        "session_id", "timestamp",
        "point_count", "speed_factor", "seed",
        "collected", "total_distance", "steps", "time_s", "energy",
        "mean_leg", "route_length", "notes",
    ]

    def __init__(self, path: str = "runs/runs.csv", session_id: Optional[str] = None):
        self.path = path
        self.session_id = session_id or uuid.uuid4().hex[:8]

        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        if not os.path.exists(self.path):
            with open(self.path, "w", newline="") as f:
                csv.DictWriter(f, fieldnames=self.HEADER).writeheader()

    def _row(self, record: RunRecord, route_length: Optional[float], notes: Optional[str]) -> Dict:
        row = dict(session_id=self.session_id, timestamp=record.iso_timestamp())
        row.update(summarize_run(record))
        row["route_length"] = "" if route_length is None else route_length
        row["notes"] = notes or ""
        return row

    def append_run(self, record: RunRecord, route_length: Optional[float] = None,
                   notes: Optional[str] = None) -> Dict:
        row = self._row(record, route_length, notes)
        with open(self.path, "a", newline="") as f:
            csv.DictWriter(f, fieldnames=self.HEADER).writerow(row)
        return row
