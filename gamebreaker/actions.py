from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

# Discrete branch sizes: forward in {0, 1}, turn in {0, 1, 2}.
ACTION_BRANCHES = (2, 3)


class ActionIndex(IntEnum):
    FORWARD = 0
    TURN = 1


class Turn(IntEnum):
    NONE = 0
    LEFT = 1  # -1 turn amount
    RIGHT = 2  # +1 turn amount


def decode_action(action: Sequence[int]) -> tuple[float, float]:
    """Map a discrete action pair to (forward_amount, turn_amount)."""
    if len(action) != len(ACTION_BRANCHES):
        raise ValueError(f"Expected {len(ACTION_BRANCHES)} action branches, got {len(action)}")
    forward, turn = int(action[ActionIndex.FORWARD]), int(action[ActionIndex.TURN])
    if forward not in (0, 1):
        raise ValueError(f"Invalid forward action: {forward!r}")
    if turn == Turn.NONE:
        return float(forward), 0.0
    if turn == Turn.LEFT:
        return float(forward), -1.0
    if turn == Turn.RIGHT:
        return float(forward), 1.0
    raise ValueError(f"Invalid turn action: {turn!r}")
