# mars_cleanup/ui/export.py
from __future__ import annotations
from typing import Optional
import json
import os

from ..sim.models import RunRecord


def record_to_dict(record: RunRecord) -> dict:
    return record.to_dict()


def record_to_json(record: RunRecord) -> str:
    return json.dumps(record_to_dict(record), indent=2)


def export_filename(record: RunRecord) -> str:
    stamp_ms = int(record.timestamp.timestamp() * 1000)
    return f"mars-cleanup-run-{stamp_ms}.json"


def export_json(record: RunRecord, outdir: str = "runs", filename: Optional[str] = None) -> str:
    """Write the record as indented JSON under `outdir`; returns the path."""
    os.makedirs(outdir, exist_ok=True)
    path = os.path.join(outdir, filename or export_filename(record))
    with open(path, "w") as f:
        f.write(record_to_json(record))
        f.write("\n")
    return path
