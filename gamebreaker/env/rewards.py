"""Reward and termination rules for the goal-seeking agent.

Design:
- Transition: what one event did to the episode (reward delta, terminal, record)
- RewardPolicy: applies tick/contact/trigger events to an EpisodeState
- trail_active: pure gating predicate for the HUD trail

Per-frame order is fixed: the tick is applied first, then collision/trigger
callbacks in delivery order. A goal contact on the timeout frame therefore
still terminates the episode after the timeout record has been written.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..config import DISCOVERY_FLAG_FOR, GOAL_ID, AgentConfig, LevelConfig
from ..records.stats import LogRecord
from ..training.episode_recorder import EpisodeRecorder
from .episode import EpisodeState

logger = logging.getLogger(__name__)


@dataclass
class Transition:
    """Effect of a single event on the episode."""

    reward: float = 0.0
    terminal: bool = False  # Episode must end and the area reset
    timeout: bool = False  # Step budget hit on this tick (logged, not terminal)
    motion_disabled: bool = False
    discovered: str | None = None  # Discovery flag newly set by this event
    record: LogRecord | None = None


def step_penalty(max_steps: int) -> float:
    """Per-tick penalty; zero when the step budget is disabled."""
    if max_steps <= 0:
        return 0.0
    return -1.0 / max_steps


def trail_active(
    step_count: int,
    max_steps: int,
    goal_distance: float,
    distractor_distances: Iterable[float] = (),
    clearance: float = 2.0,
) -> bool:
    """Whether the HUD trail should emit this frame.

    Off near both ends of the step budget and whenever the agent is within
    ``clearance`` of the goal or any distractor.
    """
    if not (1 < step_count < max_steps - 1):
        return False
    if goal_distance <= clearance:
        return False
    return all(d > clearance for d in distractor_distances)


class RewardPolicy:
    def __init__(self, config: AgentConfig, level: LevelConfig, recorder: EpisodeRecorder):
        self.config = config
        self.level = level
        self.recorder = recorder

    @property
    def penalty(self) -> float:
        return step_penalty(self.config.max_steps)

    def on_tick(self, state: EpisodeState) -> Transition:
        t = Transition()
        if self.config.max_steps > 0:
            t.reward = self.penalty
            state.add_reward(t.reward)
        state.step_count += 1

        if self.config.max_steps > 0 and state.step_count == self.config.max_steps:
            t.timeout = True
            t.record = self.recorder.record_episode_end(
                state.episode_index,
                state.step_count,
                state.cumulative_reward,
                state.discovery,
                reason="timeout",
                final=False,
            )
        return t

    def on_collision(self, state: EpisodeState, other: str) -> Transition:
        if other == GOAL_ID:
            return self.on_goal_contact(state)
        if other in self.level.distractors:
            return self.on_distractor_contact(state, other)
        # Walls, floor and other scenery carry no reward.
        return Transition()

    def on_goal_contact(self, state: EpisodeState) -> Transition:
        t = Transition(reward=self.config.goal_reward, terminal=True, motion_disabled=True)
        state.add_reward(t.reward)
        if self.recorder.update_best(state.cumulative_reward, state.episode_index):
            logger.info(f"new high score {state.cumulative_reward:.3f} in episode {state.episode_index}")
        state.motion_enabled = False
        t.record = self.recorder.record_episode_end(
            state.episode_index,
            state.step_count,
            state.cumulative_reward,
            state.discovery,
            reason="goal",
        )
        return t

    def on_distractor_contact(self, state: EpisodeState, other: str) -> Transition:
        flag = DISCOVERY_FLAG_FOR[other]
        state.motion_enabled = False
        t = Transition(motion_disabled=True)
        if state.discovery.mark(flag):
            t.discovered = flag
            logger.debug(f"episode {state.episode_index}: {other} found at step {state.step_count}")
        return t

    def on_trigger_enter(self, state: EpisodeState, other: str) -> Transition:
        if other not in self.level.triggers:
            return Transition()
        flag = DISCOVERY_FLAG_FOR[other]
        t = Transition()
        if state.discovery.mark(flag):
            t.discovered = flag
            logger.debug(f"episode {state.episode_index}: {other} found at step {state.step_count}")
        return t
