"""Stateful property tests for the episode core.

Random interleavings of ticks, contacts, triggers, interruptions and motion
overrides must never break the bookkeeping invariants.
"""

import numpy as np
from hypothesis import settings
from hypothesis import strategies as st
from hypothesis.stateful import RuleBasedStateMachine, initialize, invariant, rule

from gamebreaker.config import FAKE_BARRIER_1, FAKE_BARRIER_2, GOAL_ID, STICKY_1, STICKY_2, AgentConfig, get_level
from gamebreaker.env.agent import EpisodeAgent
from gamebreaker.sim.body import KinematicBody

actions = st.tuples(st.integers(min_value=0, max_value=1), st.integers(min_value=0, max_value=2))


class EpisodeStateMachine(RuleBasedStateMachine):
    def __init__(self):
        super().__init__()
        self.agent: EpisodeAgent | None = None
        self.max_steps = 1
        # Shadow model
        self.completed_steps = 0
        self.ticks_this_episode = 0
        self.episodes = 0
        self.terminal_rewards: dict[int, float] = {}
        self.last_high_score = 0.0
        self.frozen = False

    @initialize(max_steps=st.integers(min_value=-2, max_value=40), seed=st.integers(min_value=0, max_value=1000))
    def setup(self, max_steps, seed):
        self.max_steps = max_steps
        level = get_level("level_2")
        objects = {
            name: KinematicBody(name=name, pos=np.array([200.0, 0.0, 200.0 + i], dtype=np.float32))
            for i, name in enumerate(level.required_objects)
        }
        self.agent = EpisodeAgent(AgentConfig(max_steps=max_steps), np.random.default_rng(seed))
        self.agent.initialize(KinematicBody(name="agent", pos=np.zeros(3, dtype=np.float32)), objects)
        self.agent.on_episode_begin()

    @rule(action=actions)
    def tick(self, action):
        before = self.agent.state.cumulative_reward
        index = self.agent.state.episode_index
        pos = self.agent.body.pos.copy()
        self.agent.on_action_received(action)
        self.ticks_this_episode += 1

        expected = -1.0 / self.max_steps if self.max_steps > 0 else 0.0
        assert abs(self.agent.state.cumulative_reward - (before + expected)) < 1e-9
        assert self.agent.state.episode_index == index
        if self.frozen:
            np.testing.assert_array_equal(self.agent.body.pos, pos)

    @rule(other=st.sampled_from([STICKY_1, STICKY_2]))
    def hit_distractor(self, other):
        before = self.agent.state.cumulative_reward
        index = self.agent.state.episode_index
        self.agent.on_collision_enter(other)
        self.frozen = True
        assert self.agent.state.cumulative_reward == before
        assert self.agent.state.episode_index == index
        assert self.agent.state.motion_enabled is False

    @rule(other=st.sampled_from([FAKE_BARRIER_1, FAKE_BARRIER_2]))
    def enter_trigger(self, other):
        motion = self.agent.state.motion_enabled
        before = self.agent.state.cumulative_reward
        self.agent.on_trigger_enter(other)
        assert self.agent.state.motion_enabled == motion
        assert self.agent.state.cumulative_reward == before

    @rule()
    def reach_goal(self):
        state = self.agent.state
        index = state.episode_index
        final_reward = state.cumulative_reward + 1.0
        self.completed_steps += state.step_count
        self.terminal_rewards[index] = final_reward

        t = self.agent.on_collision_enter(GOAL_ID)

        assert t.terminal
        assert t.record is not None and t.record.episode_index == index
        assert self.agent.state.episode_index == index + 1
        self.episodes += 1
        self.frozen = False
        self.ticks_this_episode = 0

    @rule()
    def interrupt(self):
        self.completed_steps += self.agent.state.step_count
        self.agent.interrupt_episode()
        self.episodes += 1
        self.frozen = False
        self.ticks_this_episode = 0

    @rule(enabled=st.booleans())
    def override_motion(self, enabled):
        self.agent.set_motion_enabled(enabled)
        self.frozen = not enabled

    @invariant()
    def total_steps_match(self):
        if self.agent is None:
            return
        assert self.agent.get_total_steps() == self.completed_steps + self.agent.state.step_count

    @invariant()
    def episode_index_counts_completed_episodes(self):
        if self.agent is None:
            return
        assert self.agent.state.episode_index == self.episodes

    @invariant()
    def high_score_monotonic_and_attributed(self):
        if self.agent is None:
            return
        high = self.agent.get_high_score()
        assert high >= self.last_high_score
        self.last_high_score = high
        if high > 0.0:
            best = self.agent.get_best_episode_index()
            assert abs(self.terminal_rewards[best] - high) < 1e-9

    @invariant()
    def step_count_matches_ticks_since_boundary(self):
        if self.agent is None:
            return
        assert self.agent.state.step_count == self.ticks_this_episode


EpisodeStateMachine.TestCase.settings = settings(max_examples=50, stateful_step_count=60, deadline=None)
TestEpisodeStateMachine = EpisodeStateMachine.TestCase
