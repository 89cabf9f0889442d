# gamebreaker/server/models.py
"""Pydantic models for API requests/responses."""

from pydantic import BaseModel


class TelemetrySnapshot(BaseModel):
    """HUD fields pushed by the training loop once per frame (or less)."""

    agent_id: str = "agent"
    episode_index: int
    cumulative_reward: float
    best_episode_index: int
    high_score: float
    total_steps: int


class EpisodeRecordModel(BaseModel):
    """One row of the game log."""

    timestamp: str
    episode_index: int
    step_count: int
    cumulative_reward: float
    sticky_found_1: bool
    sticky_found_2: bool
    secret_wall_1: bool
    secret_wall_2: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    agents: int
    uptime_s: float
