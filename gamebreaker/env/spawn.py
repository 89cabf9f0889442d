from __future__ import annotations

import numpy as np

from ..config import SpawnRegion
from ..sim.body import FORWARD, rotate_y


def sample_radius_angle(region: SpawnRegion, rng: np.random.Generator) -> tuple[float, float]:
    radius = float(region.min_radius)
    angle = float(region.min_angle)
    if region.max_radius > region.min_radius:
        radius = float(rng.uniform(region.min_radius, region.max_radius))
    if region.max_angle > region.min_angle:
        angle = float(rng.uniform(region.min_angle, region.max_angle))
    return radius, angle


def sample_position(region: SpawnRegion, rng: np.random.Generator) -> np.ndarray:
    """Choose a random point inside a wedge of a donut around ``region.center``.

    Degenerate ranges (max <= min) are fixed at the minimum, so a region with
    equal bounds always yields ``center + rotate_y(forward, angle) * radius``.
    The height lift is not applied here.
    """
    radius, angle = sample_radius_angle(region, rng)
    center = np.asarray(region.center, dtype=np.float32)
    return (center + rotate_y(FORWARD, angle) * radius).astype(np.float32)


def sample_yaw(rng: np.random.Generator) -> float:
    return float(rng.uniform(0.0, 360.0))
