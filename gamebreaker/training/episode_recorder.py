"""Best-episode and lifetime step bookkeeping.

The recorder is fed by the reward policy: it builds a ``LogRecord`` for every
goal contact and timeout, forwards it to an optional sink (e.g. ``GameLog``),
and keeps the high score and total step count that the HUD polls each frame.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from gamebreaker.env.episode import DiscoveryFlags
from gamebreaker.records.stats import BestRecord, LogRecord

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class EpisodeRecorder:
    def __init__(
        self,
        sink: Callable[[LogRecord], None] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.best = BestRecord()
        self.sink = sink
        self.clock = clock
        self.last_record: LogRecord | None = None
        self.records_emitted = 0

    def record_episode_end(
        self,
        episode_index: int,
        step_count: int,
        cumulative_reward: float,
        discovery: DiscoveryFlags,
        *,
        reason: str = "goal",
        final: bool = True,
    ) -> LogRecord:
        """Emit a record for the current episode.

        With ``final`` the episode's steps are folded into the lifetime total.
        Timeout records pass ``final=False``: the episode keeps running and is
        folded when it actually ends.
        """
        record = LogRecord(
            timestamp=self.clock().strftime(TIMESTAMP_FORMAT),
            episode_index=int(episode_index),
            step_count=int(step_count),
            cumulative_reward=float(cumulative_reward),
            sticky_found_1=discovery.sticky_found_1,
            sticky_found_2=discovery.sticky_found_2,
            secret_wall_1=discovery.secret_wall_1,
            secret_wall_2=discovery.secret_wall_2,
            reason=reason,
        )
        if final:
            self.close_episode(step_count)
        self.last_record = record
        self.records_emitted += 1
        if self.sink is not None:
            self.sink(record)
        logger.info(
            f"episode {record.episode_index} {reason}: steps={record.step_count} "
            f"reward={record.cumulative_reward:.3f}"
        )
        return record

    def close_episode(self, step_count: int) -> None:
        """Fold a finished episode's steps into the lifetime total."""
        self.best.total_steps += int(step_count)

    def update_best(self, cumulative_reward: float, episode_index: int) -> bool:
        """Raise the high score if ``cumulative_reward`` beats it."""
        if cumulative_reward > self.best.high_score:
            self.best.high_score = float(cumulative_reward)
            self.best.best_episode_index = int(episode_index)
            return True
        return False

    def get_high_score(self) -> float:
        return self.best.high_score

    def get_best_episode_index(self) -> int:
        return self.best.best_episode_index

    def get_total_steps(self, in_flight_steps: int = 0) -> int:
        return self.best.total_steps + int(in_flight_steps)
