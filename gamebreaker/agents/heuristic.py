from __future__ import annotations

import numpy as np

from ..actions import ActionIndex


class RandomHeuristicPolicy:
    """
    Baseline controller that ignores the observation.

    Behavior:
    - Move forward on half of the decisions.
    - Turn left, right, or not at all with equal probability.
    """

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def act(self, obs: np.ndarray | None = None) -> np.ndarray:
        action = np.zeros(len(ActionIndex), dtype=np.int64)
        if int(self.rng.integers(0, 2)) == 0:
            action[ActionIndex.FORWARD] = 1
        action[ActionIndex.TURN] = int(self.rng.integers(0, 3))
        return action
