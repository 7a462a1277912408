"""Core type definitions for strategizer."""

from collections.abc import Hashable
from typing import TypeAlias

UnitHandle: TypeAlias = Hashable
"""Opaque identifier of a host unit.

The core never owns unit lifetime. Handles are only used as keys into the
engine's unit-to-agent table.
"""

Position: TypeAlias = tuple[float, float]
"""Map position in host coordinates."""
