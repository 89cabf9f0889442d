"""Episode record data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Column order of the flat game log. Downstream analysis depends on it.
LOG_FIELDS: tuple[str, ...] = (
    "timestamp",
    "episode_index",
    "step_count",
    "cumulative_reward",
    "sticky_found_1",
    "sticky_found_2",
    "secret_wall_1",
    "secret_wall_2",
)


def _parse_bool(value: str) -> bool:
    if value == "True":
        return True
    if value == "False":
        return False
    raise ValueError(f"Expected 'True' or 'False', got {value!r}")


@dataclass(frozen=True)
class LogRecord:
    """One emitted episode event (goal contact or timeout)."""

    timestamp: str
    episode_index: int
    step_count: int
    cumulative_reward: float
    sticky_found_1: bool
    sticky_found_2: bool
    secret_wall_1: bool
    secret_wall_2: bool
    # Not part of the persisted row.
    reason: str = ""  # "goal" | "timeout"

    def to_row(self) -> list[str]:
        """Serialize to the persisted column order."""
        return [
            self.timestamp,
            str(self.episode_index),
            str(self.step_count),
            repr(float(self.cumulative_reward)),
            str(self.sticky_found_1),
            str(self.sticky_found_2),
            str(self.secret_wall_1),
            str(self.secret_wall_2),
        ]

    def to_line(self) -> str:
        return ",".join(self.to_row())

    @classmethod
    def from_row(cls, row: list[str]) -> LogRecord:
        if len(row) != len(LOG_FIELDS):
            raise ValueError(f"Expected {len(LOG_FIELDS)} fields, got {len(row)}: {row!r}")
        return cls(
            timestamp=row[0],
            episode_index=int(row[1]),
            step_count=int(row[2]),
            cumulative_reward=float(row[3]),
            sticky_found_1=_parse_bool(row[4]),
            sticky_found_2=_parse_bool(row[5]),
            secret_wall_1=_parse_bool(row[6]),
            secret_wall_2=_parse_bool(row[7]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "episode_index": self.episode_index,
            "step_count": self.step_count,
            "cumulative_reward": self.cumulative_reward,
            "sticky_found_1": self.sticky_found_1,
            "sticky_found_2": self.sticky_found_2,
            "secret_wall_1": self.secret_wall_1,
            "secret_wall_2": self.secret_wall_2,
            "reason": self.reason,
        }


@dataclass
class BestRecord:
    """Lifetime bookkeeping for one agent."""

    high_score: float = 0.0
    best_episode_index: int = 0
    total_steps: int = 0  # Completed episodes only

    def to_dict(self) -> dict[str, Any]:
        return {
            "high_score": self.high_score,
            "best_episode_index": self.best_episode_index,
            "total_steps": self.total_steps,
        }
