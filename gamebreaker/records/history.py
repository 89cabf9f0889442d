"""Flat, append-only game log."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .stats import LOG_FIELDS, LogRecord


class GameLog:
    """File-based storage for episode records.

    One comma-separated line per record, columns in ``LOG_FIELDS`` order, no
    header. The file is only ever appended to.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: LogRecord) -> None:
        with open(self.path, "a", newline="", encoding="utf-8") as f:
            csv.writer(f, lineterminator="\n").writerow(record.to_row())

    __call__ = append

    def read(self) -> list[LogRecord]:
        if not self.path.exists():
            return []
        with open(self.path, newline="", encoding="utf-8") as f:
            return [LogRecord.from_row(row) for row in csv.reader(f) if row]

    def list_recent(self, limit: int = 50) -> list[LogRecord]:
        """Most recent records first."""
        records = self.read()
        records.reverse()
        return records[:limit]


def summarize(records: Iterable[LogRecord]) -> dict[str, Any]:
    """Aggregate a record stream for quick analysis."""
    records = list(records)
    if not records:
        return {
            "records": 0,
            "episodes": 0,
            "best_reward": None,
            "mean_reward": 0.0,
            "mean_steps": 0.0,
            "discovery_rates": {name: 0.0 for name in LOG_FIELDS[4:]},
        }

    n = len(records)
    return {
        "records": n,
        "episodes": len({r.episode_index for r in records}),
        "best_reward": max(r.cumulative_reward for r in records),
        "mean_reward": sum(r.cumulative_reward for r in records) / n,
        "mean_steps": sum(r.step_count for r in records) / n,
        "discovery_rates": {
            "sticky_found_1": sum(r.sticky_found_1 for r in records) / n,
            "sticky_found_2": sum(r.sticky_found_2 for r in records) / n,
            "secret_wall_1": sum(r.secret_wall_1 for r in records) / n,
            "secret_wall_2": sum(r.secret_wall_2 for r in records) / n,
        },
    }
