from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

# World axes: +y is up, +z is forward at zero heading.
UP = np.asarray([0.0, 1.0, 0.0], dtype=np.float32)
FORWARD = np.asarray([0.0, 0.0, 1.0], dtype=np.float32)


def rotate_y(vec: np.ndarray, angle_deg: float) -> np.ndarray:
    """Rotate ``vec`` about the vertical axis; positive angles turn +z toward +x."""
    a = math.radians(angle_deg)
    c, s = math.cos(a), math.sin(a)
    x, y, z = (float(v) for v in vec)
    return np.asarray([x * c + z * s, y, -x * s + z * c], dtype=np.float32)


def heading_vector(yaw_deg: float) -> np.ndarray:
    return rotate_y(FORWARD, yaw_deg)


@dataclass
class KinematicBody:
    """Position/heading handle for an object placed in the area.

    Stands in for the engine's rigid body: the core only reads ``pos`` and
    ``forward`` and writes placements, velocities and moves. ``vel`` and
    ``ang_vel`` hold the rates applied by the last ``move``.
    """

    name: str
    pos: np.ndarray  # float32[3]
    yaw: float = 0.0  # degrees
    vel: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float32))
    ang_vel: float = 0.0  # degrees / s

    @property
    def forward(self) -> np.ndarray:
        return heading_vector(self.yaw)

    def clear_velocity(self) -> None:
        self.vel = np.zeros(3, dtype=np.float32)
        self.ang_vel = 0.0

    def place(self, pos: np.ndarray, yaw: float) -> None:
        self.pos = np.asarray(pos, dtype=np.float32).copy()
        self.yaw = float(yaw) % 360.0

    def move(self, forward: float, turn: float, dt: float, move_speed: float, turn_speed: float) -> None:
        """Translate along the current heading, then turn."""
        self.vel = (self.forward * (forward * move_speed)).astype(np.float32)
        self.ang_vel = turn * turn_speed
        self.pos = (self.pos + self.vel * dt).astype(np.float32)
        self.yaw = (self.yaw + self.ang_vel * dt) % 360.0

    def distance_to(self, other: KinematicBody) -> float:
        return float(np.linalg.norm(other.pos - self.pos))
