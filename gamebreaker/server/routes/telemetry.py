# gamebreaker/server/routes/telemetry.py
"""Live HUD telemetry endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from ..models import TelemetrySnapshot

router = APIRouter(prefix="/api/telemetry", tags=["telemetry"])

# In-memory latest snapshot per agent
_snapshots: dict[str, dict[str, Any]] = {}


def agent_count() -> int:
    return len(_snapshots)


@router.get("")
def get_all_telemetry() -> dict[str, Any]:
    """Latest snapshot of every agent that has reported."""
    return {"active": bool(_snapshots), "agents": dict(_snapshots)}


@router.get("/{agent_id}")
def get_agent_telemetry(agent_id: str) -> dict[str, Any]:
    snapshot = _snapshots.get(agent_id)
    if snapshot is None:
        raise HTTPException(404, f"No telemetry for agent '{agent_id}'")
    return snapshot


@router.post("")
def push_telemetry(snapshot: TelemetrySnapshot) -> dict[str, str]:
    """Store the latest snapshot (called by the training loop)."""
    _snapshots[snapshot.agent_id] = snapshot.model_dump()
    return {"status": "ok"}


@router.delete("")
def clear_telemetry() -> dict[str, str]:
    """Forget all snapshots (training ended)."""
    _snapshots.clear()
    return {"status": "ok"}
