from datetime import datetime

import numpy as np
import pytest

from gamebreaker.config import AgentConfig, get_level
from gamebreaker.env.agent import EpisodeAgent
from gamebreaker.sim.body import KinematicBody
from gamebreaker.training.episode_recorder import EpisodeRecorder


def fixed_clock() -> datetime:
    return datetime(2024, 1, 2, 3, 4, 5)


@pytest.fixture
def make_objects():
    def _make(level: str = "level_2") -> dict[str, KinematicBody]:
        names = get_level(level).required_objects
        # Park everything far from the spawn wedges; tests move bodies as needed.
        return {
            name: KinematicBody(name=name, pos=np.array([100.0 + 10.0 * i, 0.5, 100.0], dtype=np.float32))
            for i, name in enumerate(names)
        }

    return _make


@pytest.fixture
def make_agent(make_objects):
    def _make(level: str = "level_2", sink=None, **config_kwargs) -> EpisodeAgent:
        cfg = AgentConfig(level=level, **config_kwargs)
        recorder = EpisodeRecorder(sink=sink, clock=fixed_clock)
        agent = EpisodeAgent(cfg, np.random.default_rng(0), recorder)
        objects = make_objects(level)
        agent.initialize(KinematicBody(name="agent", pos=np.zeros(3, dtype=np.float32)), objects)
        agent.on_episode_begin()
        return agent

    return _make


@pytest.fixture
def agent(make_agent) -> EpisodeAgent:
    return make_agent()
