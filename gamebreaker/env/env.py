from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np

from ..actions import ACTION_BRANCHES
from ..config import GOAL_ID, EnvConfig
from ..records.stats import LogRecord
from ..sim.body import KinematicBody
from ..sim.contacts import ContactDetector
from ..training.episode_recorder import EpisodeRecorder
from .agent import EpisodeAgent
from .observations import OBS_DIM

logger = logging.getLogger(__name__)


class GoalAreaEnv:
    """
    Single-agent reference host around ``EpisodeAgent``.

    Stands in for the engine: owns the bodies, integrates motion, and turns
    proximity into collision/trigger events. ``step`` may also be handed
    explicit events, which are then used instead of the detector's.

    Frame order:
    - apply the action and the per-step tick
    - deliver collision/trigger events in order; anything after a goal
      contact in the same frame is dropped
    - enforce the optional external episode-length cap
    """

    ACTION_BRANCHES = ACTION_BRANCHES
    OBS_DIM = OBS_DIM

    def __init__(self, config: EnvConfig | None = None, recorder: EpisodeRecorder | None = None):
        self.config = config or EnvConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.recorder = recorder or EpisodeRecorder()

        origin = np.asarray(self.config.area_origin, dtype=np.float32)
        self.agent_body = KinematicBody(name="agent", pos=origin.copy())
        self.objects: dict[str, KinematicBody] = {GOAL_ID: KinematicBody(name=GOAL_ID, pos=origin.copy())}
        for name, offset in self.config.object_layout.items():
            self.objects[name] = KinematicBody(name=name, pos=origin + np.asarray(offset, dtype=np.float32))

        self.agent = self._make_agent()
        self.detector = self._make_detector()
        self._started = False

    def _make_agent(self) -> EpisodeAgent:
        agent = EpisodeAgent(
            self.config.agent,
            self.rng,
            self.recorder,
            area_origin=self.config.area_origin,
            agent_spawn=self.config.agent_spawn,
            goal_spawn=self.config.goal_spawn,
            dt=self.config.dt,
        )
        agent.initialize(self.agent_body, self.objects)
        return agent

    def _make_detector(self) -> ContactDetector:
        level = self.agent.level
        return ContactDetector(
            agent=self.agent_body,
            colliders={name: self.objects[name] for name in (GOAL_ID, *level.distractors)},
            triggers={name: self.objects[name] for name in level.triggers},
            contact_radius=self.config.contact_radius,
            trigger_radius=self.config.trigger_radius,
        )

    def reset(self, seed: int | None = None) -> tuple[np.ndarray, dict[str, Any]]:
        """Start a fresh episode.

        Lifetime statistics survive. An episode with steps in flight counts as
        interrupted; a freshly placed one is simply re-placed.
        """
        if seed is not None:
            self.rng = np.random.default_rng(seed)
            self.agent.rng = self.rng
            self.agent.area.rng = self.rng

        if self._started and self.agent.state.step_count > 0:
            self.agent.interrupt_episode()
        else:
            self.agent.on_episode_begin()
        self._started = True
        self.detector.reset()
        return self.agent.collect_observations(), self._info([], None)

    def step(
        self,
        action: Sequence[int],
        events: Sequence[dict[str, Any]] | None = None,
    ) -> tuple[np.ndarray, float, bool, bool, dict[str, Any]]:
        if not self._started:
            raise RuntimeError("GoalAreaEnv.reset() must be called before step()")

        agent = self.agent
        t = agent.on_action_received(action)
        reward = t.reward
        records: list[LogRecord] = [t.record] if t.record is not None else []
        # Trail gating reflects the frame before any contact resolves.
        trail = agent.trail_active()

        if events is None:
            events = self.detector.poll()

        delivered: list[dict[str, Any]] = []
        terminated = False
        episode: dict[str, Any] | None = None
        for event in events:
            # NOTE: direct key access, malformed events should fail loudly.
            etype = event["type"]
            other = event["other"]
            if etype == "collision":
                et = agent.on_collision_enter(other)
            elif etype == "trigger":
                et = agent.on_trigger_enter(other)
            else:
                raise ValueError(f"Unknown event type: {etype!r}")
            delivered.append(event)
            reward += et.reward
            if et.record is not None:
                records.append(et.record)
            if et.terminal:
                terminated = True
                episode = et.record.to_dict() if et.record is not None else None
                break

        truncated = False
        cap = self.config.episode_step_cap
        if not terminated and cap is not None and cap > 0 and agent.state.step_count >= cap:
            truncated = True
            episode = {
                "episode_index": agent.state.episode_index,
                "step_count": agent.state.step_count,
                "cumulative_reward": agent.state.cumulative_reward,
                **agent.state.discovery.to_dict(),
                "reason": "interrupted",
            }
            agent.last_final_observation = agent.collect_observations()
            logger.info(f"episode {agent.state.episode_index} truncated at step cap {cap}")
            agent.interrupt_episode()

        if terminated or truncated:
            self.detector.reset()

        info = self._info(delivered, episode)
        info["trail_active"] = trail
        info["records"] = records
        if terminated or truncated:
            info["final_observation"] = agent.last_final_observation
        return agent.collect_observations(), float(reward), terminated, truncated, info

    def _info(self, events: list[dict[str, Any]], episode: dict[str, Any] | None) -> dict[str, Any]:
        info: dict[str, Any] = {
            "events": events,
            "episode_index": self.agent.state.episode_index,
            "discovery": self.agent.state.discovery.to_dict(),
            "motion_enabled": self.agent.state.motion_enabled,
            "telemetry": self.agent.telemetry(),
        }
        if episode is not None:
            info["episode"] = episode
        return info
