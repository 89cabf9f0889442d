from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from ..config import AGENT_SPAWN, GOAL_SPAWN, GOAL_YAW_DEG, SpawnRegion
from ..sim.body import UP, KinematicBody
from .spawn import sample_position, sample_yaw

logger = logging.getLogger(__name__)


class AreaController:
    """Places the agent and goal for a new episode.

    Owns no reward or episode bookkeeping. ``set_motion_enabled`` is the
    agent's override hook, called last so a reset always leaves the agent
    free to move.
    """

    def __init__(
        self,
        agent_body: KinematicBody,
        goal_body: KinematicBody,
        rng: np.random.Generator,
        *,
        set_motion_enabled: Callable[[bool], None],
        origin: tuple[float, float, float] = (0.0, 0.0, 0.0),
        agent_spawn: SpawnRegion = AGENT_SPAWN,
        goal_spawn: SpawnRegion = GOAL_SPAWN,
    ):
        self.agent_body = agent_body
        self.goal_body = goal_body
        self.rng = rng
        self.set_motion_enabled = set_motion_enabled
        self.origin = np.asarray(origin, dtype=np.float32)
        self.agent_spawn = agent_spawn
        self.goal_spawn = goal_spawn
        self.resets = 0

    def reset_area(self) -> None:
        self.place_agent()
        self.place_goal()
        self.set_motion_enabled(True)
        self.resets += 1
        logger.debug(
            f"area reset {self.resets}: agent={self.agent_body.pos.tolist()} goal={self.goal_body.pos.tolist()}"
        )

    def place_agent(self) -> None:
        body = self.agent_body
        body.clear_velocity()
        pos = self.origin + sample_position(self.agent_spawn, self.rng) + UP * self.agent_spawn.height
        body.place(pos, sample_yaw(self.rng))

    def place_goal(self) -> None:
        body = self.goal_body
        body.clear_velocity()
        pos = self.origin + sample_position(self.goal_spawn, self.rng) + UP * self.goal_spawn.height
        body.place(pos, GOAL_YAW_DEG)
