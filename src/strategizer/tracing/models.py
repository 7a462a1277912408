"""Data models for tracing infrastructure.

Records are plain JSON-serializable structures so any history backend can
store them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class TickRecord:
    """Complete record of a single engine tick.

    Attributes:
        tick: The tick number (1 for the first advance() of a match).
        timestamp: Unix timestamp when the tick finished.
        snapshot: Assignment after redistribution, as
            {"agents": int, "managers": {manager: [agent ids]}}.
        events: Agent creations, retirements and override moves.
        phase_timings: Optional dict of phase name -> duration in ms.
        metadata: Optional arbitrary metadata for annotations.

    Example:
        record = TickRecord(
            tick=42,
            timestamp=1704067200.0,
            snapshot={"agents": 2, "managers": {"resource": ["0:0", "1:0"]}},
            events=[{"type": "agent_created", "agent": "1:0", "role": "worker"}],
            phase_timings={"discover": 0.04, "assign": 0.02},
        )
    """

    tick: int
    timestamp: float
    snapshot: dict[str, Any]
    events: list[dict[str, Any]] = field(default_factory=list)
    phase_timings: dict[str, float] | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        result: dict[str, Any] = {
            "tick": self.tick,
            "timestamp": self.timestamp,
            "snapshot": self.snapshot,
            "events": self.events,
        }
        if self.phase_timings is not None:
            result["phase_timings"] = self.phase_timings
        if self.metadata is not None:
            result["metadata"] = self.metadata
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TickRecord:
        """Create from dictionary (for deserialization)."""
        return cls(
            tick=data["tick"],
            timestamp=data["timestamp"],
            snapshot=data["snapshot"],
            events=data.get("events", []),
            phase_timings=data.get("phase_timings"),
            metadata=data.get("metadata"),
        )
