"""Proximity-based contact detection for the reference host.

The real engine delivers collision/trigger callbacks. This detector produces
the same event dicts from body distances so the core can be driven without an
engine: an event fires on the frame the agent comes within range of an object
and not again until it has left that range.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .body import KinematicBody


@dataclass
class ContactDetector:
    agent: KinematicBody
    colliders: dict[str, KinematicBody]  # name -> body; contact emits a "collision" event
    triggers: dict[str, KinematicBody]  # name -> body; entry emits a "trigger" event
    contact_radius: float = 1.0
    trigger_radius: float = 1.5
    _inside: set[str] = field(default_factory=set)

    def reset(self) -> None:
        self._inside.clear()

    def poll(self) -> list[dict[str, Any]]:
        """Return the enter-events for this frame, colliders before triggers."""
        events: list[dict[str, Any]] = []
        for kind, bodies, radius in (
            ("collision", self.colliders, self.contact_radius),
            ("trigger", self.triggers, self.trigger_radius),
        ):
            for name, body in bodies.items():
                inside = self.agent.distance_to(body) <= radius
                if inside and name not in self._inside:
                    events.append({"type": kind, "other": name})
                if inside:
                    self._inside.add(name)
                else:
                    self._inside.discard(name)
        return events
