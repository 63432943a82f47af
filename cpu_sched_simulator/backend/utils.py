from __future__ import annotations

from typing import List, Dict, Any
import os
import json
import csv


EVENT_FIELDS = ["time", "pid", "event"]
SLICE_FIELDS = ["start", "end", "pid", "policy"]


def ensure_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


class EventLogger:
    """Trace of one scheduling run.

    ``timeline`` holds one slice per dispatch, in dispatch order.
    ``process_events`` holds a ``start`` event for each process's first slice
    and a ``complete`` event when its remaining time reaches 0.
    """

    def __init__(self, policy: str = "") -> None:
        self.policy = policy
        self.process_events: List[Dict[str, Any]] = []
        self.timeline: List[Dict[str, Any]] = []

    def clear(self) -> None:
        self.process_events = []
        self.timeline = []

    def log_event(self, time: int, pid: int, event: str) -> None:
        self.process_events.append({"time": time, "pid": pid, "event": event})

    def log_slice(self, start: int, end: int, pid: int) -> None:
        self.timeline.append({"start": start, "end": end, "pid": pid, "policy": self.policy})

    def slices_for(self, pid: int) -> List[Dict[str, Any]]:
        return [seg for seg in self.timeline if seg["pid"] == pid]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "policy": self.policy,
            "process_events": self.process_events,
            "timeline": self.timeline,
        }

    def export_json(self, path: str) -> None:
        ensure_dir(path)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    def export_csv(self, base_path_no_ext: str) -> List[str]:
        """Write ``<base>_events.csv`` and ``<base>_timeline.csv``; returns both paths."""
        ensure_dir(base_path_no_ext)
        written = []
        for suffix, fields, rows in (
            ("events", EVENT_FIELDS, self.process_events),
            ("timeline", SLICE_FIELDS, self.timeline),
        ):
            path = f"{base_path_no_ext}_{suffix}.csv"
            with open(path, "w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=fields)
                writer.writeheader()
                writer.writerows(rows)
            written.append(path)
        return written

    def export(self, path: str) -> List[str]:
        """Export by extension: ``.csv`` writes the CSV pair, anything else JSON."""
        root, ext = os.path.splitext(path)
        if ext.lower() == ".csv":
            return self.export_csv(root)
        self.export_json(path)
        return [path]


def compute_avg(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0
