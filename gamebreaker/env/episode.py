"""Per-agent episode state."""

from __future__ import annotations

from dataclasses import dataclass, field, fields


@dataclass
class DiscoveryFlags:
    """One-way discovery markers; cleared only by ``EpisodeState.begin_episode``."""

    sticky_found_1: bool = False
    sticky_found_2: bool = False
    secret_wall_1: bool = False
    secret_wall_2: bool = False

    def mark(self, flag: str) -> bool:
        """Set ``flag``. Returns True if it was newly discovered."""
        if flag not in FLAG_NAMES:
            raise KeyError(f"Unknown discovery flag: {flag!r}")
        was_set = getattr(self, flag)
        setattr(self, flag, True)
        return not was_set

    def as_tuple(self) -> tuple[bool, bool, bool, bool]:
        return (self.sticky_found_1, self.sticky_found_2, self.secret_wall_1, self.secret_wall_2)

    def to_dict(self) -> dict[str, bool]:
        return {
            "sticky_found_1": self.sticky_found_1,
            "sticky_found_2": self.sticky_found_2,
            "secret_wall_1": self.secret_wall_1,
            "secret_wall_2": self.secret_wall_2,
        }


FLAG_NAMES: tuple[str, ...] = tuple(f.name for f in fields(DiscoveryFlags))


@dataclass
class EpisodeState:
    motion_enabled: bool = True
    cumulative_reward: float = 0.0
    step_count: int = 0
    episode_index: int = 0  # Completed episodes; never decreases
    discovery: DiscoveryFlags = field(default_factory=DiscoveryFlags)

    def begin_episode(self) -> None:
        """Re-arm per-episode fields. Motion is re-enabled by the area reset."""
        self.cumulative_reward = 0.0
        self.step_count = 0
        self.discovery = DiscoveryFlags()

    def add_reward(self, delta: float) -> None:
        self.cumulative_reward += float(delta)

    def complete_episode(self) -> int:
        """Count the current episode as completed and return the finished index."""
        finished = self.episode_index
        self.episode_index += 1
        return finished
