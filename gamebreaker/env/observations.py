"""Observation construction for the goal-seeking agent.

Two layouts are supported, both 7 floats wide:

- ``relative``: [distance, direction to goal (3), agent heading (3)]
- ``local``:    [distance, normalized goal local position (3),
                 normalized agent local position (3)]

Local positions are measured from the area origin.
"""

from __future__ import annotations

import numpy as np

from ..config import ObservationMode

OBS_DIM = 7

OBSERVATION_MODES: tuple[ObservationMode, ...] = ("relative", "local")


def safe_normalize(vec: np.ndarray, eps: float = 1e-6) -> np.ndarray:
    """Unit vector along ``vec``; the zero vector when ``vec`` is (near) zero-length."""
    v = np.asarray(vec, dtype=np.float32)
    norm = float(np.linalg.norm(v))
    if norm <= eps:
        return np.zeros_like(v)
    return (v / norm).astype(np.float32)


class ObservationBuilder:
    def __init__(self, mode: str = "relative", area_origin: np.ndarray | None = None):
        if mode not in OBSERVATION_MODES:
            raise ValueError(f"Unknown observation mode: {mode!r}")
        self.mode = mode
        if area_origin is None:
            area_origin = np.zeros(3, dtype=np.float32)
        self.area_origin = np.asarray(area_origin, dtype=np.float32)

    def build(self, agent_pos: np.ndarray, agent_forward: np.ndarray, goal_pos: np.ndarray) -> np.ndarray:
        agent_pos = np.asarray(agent_pos, dtype=np.float32)
        goal_pos = np.asarray(goal_pos, dtype=np.float32)

        obs = np.zeros(OBS_DIM, dtype=np.float32)
        obs[0] = float(np.linalg.norm(goal_pos - agent_pos))
        if self.mode == "relative":
            obs[1:4] = safe_normalize(goal_pos - agent_pos)
            obs[4:7] = np.asarray(agent_forward, dtype=np.float32)
        else:
            obs[1:4] = safe_normalize(goal_pos - self.area_origin)
            obs[4:7] = safe_normalize(agent_pos - self.area_origin)
        return obs
