"""Protocols for tracing infrastructure.

These protocols define the interface for history storage backends,
allowing different implementations (in-memory, file, database).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from strategizer.tracing.models import TickRecord


@runtime_checkable
class HistoryStore(Protocol):
    """Protocol for storing and retrieving tick history.

    Implementations store TickRecords and provide random access to past
    assignments, which is how a misbehaving match gets debugged after the
    fact.

    Usage:
        store = InMemoryHistoryStore(max_ticks=1000)
        strategizer = Strategizer(host, history=store)

        # Later, inspect
        snapshot = store.get_snapshot(tick=42)
        events = store.get_events(start_tick=40, end_tick=50)
    """

    def record_tick(self, record: TickRecord) -> None:
        """Record a tick.

        Note:
            Implementations may have bounded storage (e.g., last N ticks).
            Older records may be evicted when the limit is reached.
        """
        ...

    def get_tick(self, tick: int) -> TickRecord | None:
        """Get the complete record for a tick, or None if not stored."""
        ...

    def get_snapshot(self, tick: int) -> dict[str, Any] | None:
        """Get the assignment snapshot for a tick, or None if not stored."""
        ...

    def get_events(self, start_tick: int, end_tick: int) -> list[dict[str, Any]]:
        """Get events in tick range (inclusive), flattened in tick order."""
        ...

    def get_tick_range(self) -> tuple[int, int] | None:
        """Get (min_tick, max_tick) if history exists, None if empty."""
        ...

    def clear(self) -> None:
        """Clear all stored history."""
        ...

    @property
    def tick_count(self) -> int:
        """Number of ticks currently stored."""
        ...
