"""Action decoding and baseline controller tests."""

import numpy as np
import pytest

from gamebreaker.actions import ACTION_BRANCHES, decode_action
from gamebreaker.agents.heuristic import RandomHeuristicPolicy


@pytest.mark.parametrize(
    ("action", "expected"),
    [
        ((0, 0), (0.0, 0.0)),
        ((1, 0), (1.0, 0.0)),
        ((0, 1), (0.0, -1.0)),
        ((1, 1), (1.0, -1.0)),
        ((0, 2), (0.0, 1.0)),
        ((1, 2), (1.0, 1.0)),
    ],
)
def test_decode_all_combinations(action, expected):
    assert decode_action(action) == expected


def test_decode_accepts_numpy_arrays():
    assert decode_action(np.array([1, 2], dtype=np.int64)) == (1.0, 1.0)


@pytest.mark.parametrize("action", [(2, 0), (0, 3), (-1, 0), (0, -1)])
def test_decode_rejects_out_of_range(action):
    with pytest.raises(ValueError):
        decode_action(action)


@pytest.mark.parametrize("action", [(), (1,), (1, 0, 0)])
def test_decode_rejects_wrong_branch_count(action):
    with pytest.raises(ValueError, match="action branches"):
        decode_action(action)


class TestRandomHeuristic:
    def test_actions_are_valid(self):
        policy = RandomHeuristicPolicy(np.random.default_rng(0))
        for _ in range(200):
            action = policy.act()
            assert action.shape == (len(ACTION_BRANCHES),)
            assert action.dtype == np.int64
            decode_action(action)

    def test_covers_every_branch_value(self):
        policy = RandomHeuristicPolicy(np.random.default_rng(1))
        seen = {tuple(int(v) for v in policy.act()) for _ in range(500)}
        assert seen == {(f, t) for f in range(2) for t in range(3)}

    def test_seeded_policies_agree(self):
        a = RandomHeuristicPolicy(np.random.default_rng(7))
        b = RandomHeuristicPolicy(np.random.default_rng(7))
        for _ in range(50):
            np.testing.assert_array_equal(a.act(), b.act())
