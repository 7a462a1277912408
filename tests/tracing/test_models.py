"""Tests for tracing data models.

Why these tests exist:
- TickRecord is what every history backend stores
- Serialization must preserve engine snapshots and events
- Optional fields must be handled properly
"""

import pytest

from strategizer.tracing import TickRecord

SNAPSHOT = {"agents": 2, "managers": {"resource": ["0:0"], "supply": ["1:0"]}}


@pytest.mark.parametrize(
    ("kwargs", "expected_events", "has_timings", "has_metadata"),
    [
        (
            {"tick": 42, "timestamp": 1704067200.0, "snapshot": SNAPSHOT},
            [],
            False,
            False,
        ),
        (
            {
                "tick": 100,
                "timestamp": 1704067300.0,
                "snapshot": SNAPSHOT,
                "events": [{"type": "agent_created", "agent": "1:0", "role": "worker"}],
                "phase_timings": {"discover": 0.5, "update": 1.2},
                "metadata": {"map": "test"},
            },
            [{"type": "agent_created", "agent": "1:0", "role": "worker"}],
            True,
            True,
        ),
    ],
    ids=["minimal", "full"],
)
def test_tick_record_creation(kwargs, expected_events, has_timings, has_metadata) -> None:
    """TickRecord handles required and optional fields correctly."""
    record = TickRecord(**kwargs)
    assert record.tick == kwargs["tick"]
    assert record.snapshot == SNAPSHOT
    assert record.events == expected_events
    assert (record.phase_timings is not None) == has_timings
    assert (record.metadata is not None) == has_metadata


def test_to_dict_omits_unset_optionals() -> None:
    data = TickRecord(tick=1, timestamp=0.0, snapshot={}).to_dict()

    assert data == {"tick": 1, "timestamp": 0.0, "snapshot": {}, "events": []}


def test_tick_record_round_trip() -> None:
    """TickRecord survives serialization round-trip.

    Why: Recorded matches are inspected after the fact, possibly from disk.
    """
    original = TickRecord(
        tick=42,
        timestamp=1704067200.123,
        snapshot=SNAPSHOT,
        events=[
            {"type": "override", "rule": "supply_pressure", "agent": "1:0"},
            {"type": "agent_retired", "agent": "3:0", "reason": "vanished"},
        ],
        phase_timings={"assign": 0.02},
        metadata={"run_id": "abc123"},
    )

    assert TickRecord.from_dict(original.to_dict()) == original


def test_from_dict_minimal() -> None:
    record = TickRecord.from_dict({"tick": 10, "timestamp": 500.0, "snapshot": SNAPSHOT})
    assert record.events == []
    assert record.phase_timings is None
    assert record.metadata is None
