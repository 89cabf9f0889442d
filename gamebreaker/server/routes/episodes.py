# gamebreaker/server/routes/episodes.py
"""Game log endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, HTTPException, Query

from gamebreaker.records.history import summarize

from ..config import settings
from ..models import EpisodeRecordModel

if TYPE_CHECKING:
    from gamebreaker.records.history import GameLog

router = APIRouter(prefix="/api/episodes", tags=["episodes"])

# Module-level state set by init_episode_routes
_game_log: GameLog | None = None


def init_episode_routes(game_log: GameLog) -> None:
    """Initialize routes with the game log to serve."""
    global _game_log
    _game_log = game_log


@router.get("")
def list_episodes(limit: int = Query(50, ge=1)) -> list[EpisodeRecordModel]:
    """Most recent records first."""
    if _game_log is None:
        raise HTTPException(503, "Game log not configured")

    limit = min(limit, settings.EPISODES_LIMIT_MAX)
    return [EpisodeRecordModel(**r.to_dict()) for r in _game_log.list_recent(limit=limit)]


@router.get("/summary")
def get_summary() -> dict[str, Any]:
    if _game_log is None:
        raise HTTPException(503, "Game log not configured")

    return summarize(_game_log.read())
