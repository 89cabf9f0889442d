"""The goal-seeking agent: lifecycle callbacks over the episode core.

The host (engine bridge or ``GoalAreaEnv``) owns the loop and calls, per frame:
``collect_observations`` -> ``on_action_received`` -> zero or more
``on_collision_enter`` / ``on_trigger_enter``. A goal contact ends the episode
inside the callback; the area is re-placed before the callback returns.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np

from ..actions import decode_action
from ..config import AGENT_SPAWN, GOAL_ID, GOAL_SPAWN, AgentConfig, SpawnRegion, get_level
from ..sim.body import KinematicBody
from ..training.episode_recorder import EpisodeRecorder
from .area import AreaController
from .episode import EpisodeState
from .observations import ObservationBuilder
from .rewards import RewardPolicy, Transition, trail_active

logger = logging.getLogger(__name__)


class MissingObjectError(KeyError):
    """A level object the agent matches events against was not supplied."""

    def __init__(self, level: str, missing: Sequence[str]):
        self.level = level
        self.missing = tuple(missing)
        super().__init__(f"Level {level!r} is missing required objects: {', '.join(self.missing)}")


class EpisodeAgent:
    def __init__(
        self,
        config: AgentConfig | None = None,
        rng: np.random.Generator | None = None,
        recorder: EpisodeRecorder | None = None,
        *,
        area_origin: tuple[float, float, float] = (0.0, 0.0, 0.0),
        agent_spawn: SpawnRegion = AGENT_SPAWN,
        goal_spawn: SpawnRegion = GOAL_SPAWN,
        dt: float = 0.02,
    ):
        self.config = config or AgentConfig()
        self.level = get_level(self.config.level)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.recorder = recorder or EpisodeRecorder()
        self.area_origin = area_origin
        self.agent_spawn = agent_spawn
        self.goal_spawn = goal_spawn
        self.dt = float(dt)

        self.state = EpisodeState()
        self.policy = RewardPolicy(self.config, self.level, self.recorder)
        self.observations = ObservationBuilder(self.config.observation_mode, np.asarray(area_origin))

        self.body: KinematicBody | None = None
        self.goal: KinematicBody | None = None
        self.distractors: dict[str, KinematicBody] = {}
        self.area: AreaController | None = None
        self.last_final_observation: np.ndarray | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, body: KinematicBody, objects: Mapping[str, KinematicBody]) -> None:
        """Bind resolved object handles. Fails fast on anything the level needs."""
        missing = [name for name in self.level.required_objects if name not in objects]
        if missing:
            raise MissingObjectError(self.level.name, missing)

        self.body = body
        self.goal = objects[GOAL_ID]
        self.distractors = {name: objects[name] for name in self.level.distractors}
        self.area = AreaController(
            body,
            self.goal,
            self.rng,
            set_motion_enabled=self.set_motion_enabled,
            origin=self.area_origin,
            agent_spawn=self.agent_spawn,
            goal_spawn=self.goal_spawn,
        )

    def on_episode_begin(self) -> None:
        self.state.begin_episode()
        self._require_area().reset_area()

    def collect_observations(self) -> np.ndarray:
        body, goal = self._require_bodies()
        return self.observations.build(body.pos, body.forward, goal.pos)

    def on_action_received(self, action: Sequence[int]) -> Transition:
        """Apply one decision: move (if allowed), then the per-step tick."""
        body, _ = self._require_bodies()
        forward, turn = decode_action(action)
        if self.state.motion_enabled:
            body.move(forward, turn, self.dt, self.config.move_speed, self.config.turn_speed)
        return self.policy.on_tick(self.state)

    def on_collision_enter(self, other: str) -> Transition:
        t = self.policy.on_collision(self.state, other)
        if t.terminal:
            self.last_final_observation = self.collect_observations()
            self.end_episode()
        return t

    def on_trigger_enter(self, other: str) -> Transition:
        return self.policy.on_trigger_enter(self.state, other)

    def end_episode(self) -> None:
        """Terminal end (goal contact). Steps were folded when the record was emitted."""
        finished = self.state.complete_episode()
        logger.debug(f"episode {finished} ended at step {self.state.step_count}")
        self.on_episode_begin()

    def interrupt_episode(self) -> None:
        """External end (episode-length cap or host reset). No record is emitted."""
        self.recorder.close_episode(self.state.step_count)
        finished = self.state.complete_episode()
        logger.debug(f"episode {finished} interrupted at step {self.state.step_count}")
        self.on_episode_begin()

    # ------------------------------------------------------------------
    # Queries and overrides
    # ------------------------------------------------------------------

    def set_motion_enabled(self, enabled: bool) -> None:
        self.state.motion_enabled = bool(enabled)

    def get_high_score(self) -> float:
        return self.recorder.get_high_score()

    def get_best_episode_index(self) -> int:
        return self.recorder.get_best_episode_index()

    def get_total_steps(self) -> int:
        return self.recorder.get_total_steps(self.state.step_count)

    def distance_to(self, name: str) -> float:
        body, goal = self._require_bodies()
        other = goal if name == GOAL_ID else self.distractors[name]
        return body.distance_to(other)

    def trail_active(self) -> bool:
        return trail_active(
            self.state.step_count,
            self.config.max_steps,
            self.distance_to(GOAL_ID),
            [self.distance_to(name) for name in self.distractors],
            clearance=self.config.trail_clearance,
        )

    def telemetry(self) -> dict[str, Any]:
        """HUD fields, polled every frame."""
        return {
            "episode_index": self.state.episode_index,
            "cumulative_reward": self.state.cumulative_reward,
            "best_episode_index": self.get_best_episode_index(),
            "high_score": self.get_high_score(),
            "total_steps": self.get_total_steps(),
        }

    def _require_area(self) -> AreaController:
        if self.area is None:
            raise RuntimeError("EpisodeAgent.initialize() must be called first")
        return self.area

    def _require_bodies(self) -> tuple[KinematicBody, KinematicBody]:
        if self.body is None or self.goal is None:
            raise RuntimeError("EpisodeAgent.initialize() must be called first")
        return self.body, self.goal
