"""Tests for best-episode and lifetime step bookkeeping."""

from datetime import datetime

from gamebreaker.config import GOAL_ID
from gamebreaker.env.episode import DiscoveryFlags
from gamebreaker.training.episode_recorder import EpisodeRecorder


def test_recorder_starts_empty():
    recorder = EpisodeRecorder()
    assert recorder.get_high_score() == 0.0
    assert recorder.get_best_episode_index() == 0
    assert recorder.get_total_steps() == 0
    assert recorder.last_record is None


def test_record_fields_and_timestamp():
    recorder = EpisodeRecorder(clock=lambda: datetime(2024, 5, 6, 7, 8, 9))
    flags = DiscoveryFlags(sticky_found_2=True, secret_wall_1=True)

    record = recorder.record_episode_end(3, 42, 0.58, flags)

    assert record.timestamp == "2024-05-06 07:08:09"
    assert record.episode_index == 3
    assert record.step_count == 42
    assert record.cumulative_reward == 0.58
    assert (record.sticky_found_1, record.sticky_found_2, record.secret_wall_1, record.secret_wall_2) == (
        False,
        True,
        True,
        False,
    )
    assert recorder.last_record is record


def test_final_record_folds_steps():
    recorder = EpisodeRecorder()
    recorder.record_episode_end(0, 30, 0.7, DiscoveryFlags())
    recorder.record_episode_end(1, 12, 0.88, DiscoveryFlags())
    assert recorder.get_total_steps() == 42
    assert recorder.get_total_steps(in_flight_steps=5) == 47


def test_non_final_record_does_not_fold():
    recorder = EpisodeRecorder()
    recorder.record_episode_end(0, 1000, -1.0, DiscoveryFlags(), reason="timeout", final=False)
    assert recorder.get_total_steps() == 0


def test_sink_receives_every_record():
    seen = []
    recorder = EpisodeRecorder(sink=seen.append)
    recorder.record_episode_end(0, 10, -0.01, DiscoveryFlags(), reason="timeout", final=False)
    recorder.record_episode_end(0, 11, 0.989, DiscoveryFlags())
    assert [r.reason for r in seen] == ["timeout", "goal"]
    assert recorder.records_emitted == 2


def test_high_score_never_decreases():
    recorder = EpisodeRecorder()
    history = []
    for idx, score in enumerate([0.2, 0.9, 0.5, 0.95, -0.3, 0.95]):
        recorder.update_best(score, idx)
        history.append(recorder.get_high_score())
    assert history == sorted(history)
    assert recorder.get_high_score() == 0.95
    # Ties keep the earlier episode
    assert recorder.get_best_episode_index() == 3


class TestLifetimeSteps:
    def test_three_episodes_sum_to_135(self, agent):
        """Episodes of 50 and 73 ticks ended externally, then 12 ticks ending at the goal."""
        for length in (50, 73):
            for _ in range(length):
                agent.on_action_received((0, 0))
            agent.interrupt_episode()

        for _ in range(12):
            agent.on_action_received((0, 0))
        t = agent.on_collision_enter(GOAL_ID)

        assert t.terminal
        assert agent.state.step_count == 0
        assert agent.get_total_steps() == 135
        assert agent.state.episode_index == 3

    def test_in_flight_steps_are_counted(self, agent):
        for _ in range(7):
            agent.on_action_received((1, 0))
        assert agent.get_total_steps() == 7
        agent.interrupt_episode()
        for _ in range(3):
            agent.on_action_received((1, 0))
        assert agent.get_total_steps() == 10

    def test_timeout_then_goal_counts_once(self, make_agent):
        agent = make_agent(max_steps=5)
        for _ in range(8):
            agent.on_action_received((0, 0))
        agent.on_collision_enter(GOAL_ID)
        assert agent.get_total_steps() == 8
        assert agent.recorder.records_emitted == 2
        assert agent.get_high_score() == 0.0
