from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ObservationMode = Literal["relative", "local"]

# Object identities delivered with collision/trigger events.
GOAL_ID = "goal"
STICKY_1 = "sticky_1"
STICKY_2 = "sticky_2"
FAKE_BARRIER_1 = "fakeBarrier_1"
FAKE_BARRIER_2 = "fakeBarrier_2"

# Which discovery flag each distractor/trigger object sets.
DISCOVERY_FLAG_FOR: dict[str, str] = {
    STICKY_1: "sticky_found_1",
    STICKY_2: "sticky_found_2",
    FAKE_BARRIER_1: "secret_wall_1",
    FAKE_BARRIER_2: "secret_wall_2",
}

# Trail/visual gating: minimum distance to the goal and every distractor.
TRAIL_CLEARANCE = 2.0


@dataclass(frozen=True)
class SpawnRegion:
    """Wedge-donut sampling region.

    ``center`` is relative to the area origin. Angles are in degrees, measured
    around the vertical axis from +z toward +x. Inverted ranges collapse to the
    minimum value.
    """

    center: tuple[float, float, float] = (0.0, 0.0, 0.0)
    min_angle: float = 0.0
    max_angle: float = 0.0
    min_radius: float = 0.0
    max_radius: float = 0.0
    height: float = 0.0  # Lift applied after sampling (keeps bodies above the floor)


# Agent spawns in the arc behind the area origin, the goal in front of it.
AGENT_SPAWN = SpawnRegion(min_angle=150.0, max_angle=210.0, min_radius=10.0, max_radius=15.0, height=0.5)
GOAL_SPAWN = SpawnRegion(min_angle=-30.0, max_angle=30.0, min_radius=8.0, max_radius=12.0, height=1.0)

GOAL_YAW_DEG = 180.0


@dataclass(frozen=True)
class LevelConfig:
    """Objects scoped to one level. Every name must be resolvable at setup."""

    name: str
    distractors: tuple[str, ...] = ()
    triggers: tuple[str, ...] = ()

    @property
    def required_objects(self) -> tuple[str, ...]:
        return (GOAL_ID, *self.distractors, *self.triggers)


LEVELS: dict[str, LevelConfig] = {
    "open": LevelConfig(name="open"),
    "level_1": LevelConfig(name="level_1", distractors=(STICKY_1,), triggers=(FAKE_BARRIER_1,)),
    "level_2": LevelConfig(
        name="level_2",
        distractors=(STICKY_1, STICKY_2),
        triggers=(FAKE_BARRIER_1, FAKE_BARRIER_2),
    ),
}


def get_level(name: str) -> LevelConfig:
    level = LEVELS.get(name)
    if level is None:
        raise ValueError(f"Unknown level: {name!r} (known: {sorted(LEVELS)})")
    return level


@dataclass(frozen=True)
class AgentConfig:
    # Step budget for the per-step penalty and the timeout record. <= 0 disables both.
    max_steps: int = 1000
    move_speed: float = 5.0  # units / s
    turn_speed: float = 180.0  # degrees / s
    observation_mode: ObservationMode = "relative"
    level: str = "level_2"
    goal_reward: float = 1.0
    trail_clearance: float = TRAIL_CLEARANCE


@dataclass(frozen=True)
class EnvConfig:
    agent: AgentConfig = field(default_factory=AgentConfig)
    agent_spawn: SpawnRegion = AGENT_SPAWN
    goal_spawn: SpawnRegion = GOAL_SPAWN
    area_origin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    dt: float = 0.02  # Fixed physics step
    # External hard cap on episode length; ends the episode as an interruption.
    # None leaves episode length to the goal contact alone.
    episode_step_cap: int | None = None
    # Contact radii for the reference host's proximity detector.
    contact_radius: float = 1.0
    trigger_radius: float = 1.5
    # Where the reference host places level objects, relative to the area origin.
    object_layout: dict[str, tuple[float, float, float]] = field(
        default_factory=lambda: {
            STICKY_1: (-4.0, 0.5, 2.0),
            STICKY_2: (4.0, 0.5, 2.0),
            FAKE_BARRIER_1: (-6.0, 1.0, -4.0),
            FAKE_BARRIER_2: (6.0, 1.0, -4.0),
        }
    )
    seed: int | None = None
