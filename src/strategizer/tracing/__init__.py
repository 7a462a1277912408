"""Tracing infrastructure for recording per-tick assignment history.

Usage:
    from strategizer.tracing import InMemoryHistoryStore

    store = InMemoryHistoryStore(max_ticks=500)
    strategizer = Strategizer(host, history=store)
    strategizer.advance()
    store.get_snapshot(tick=1)
"""

from strategizer.tracing.memory import InMemoryHistoryStore
from strategizer.tracing.models import TickRecord
from strategizer.tracing.protocol import HistoryStore

__all__ = [
    "HistoryStore",
    "InMemoryHistoryStore",
    "TickRecord",
]
