"""Host protocols: the game interface the core consumes.

The host owns unit lifetime and executes orders. The core only enumerates
units, reads a few counters, and issues fire-and-forget orders.

Usage:
    host = LocalHost()
    strategizer = Strategizer(host)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from strategizer.core.types import Position, UnitHandle

if TYPE_CHECKING:
    from strategizer.host.unit_types import UnitType


@runtime_checkable
class Unit(Protocol):
    """A host unit. Queries reflect the current frame; orders return nothing."""

    @property
    def handle(self) -> UnitHandle:
        """Stable identifier for the unit's lifetime."""
        ...

    @property
    def unit_type(self) -> UnitType:
        """Static type classification."""
        ...

    @property
    def position(self) -> Position:
        """Current map position."""
        ...

    @property
    def exists(self) -> bool:
        """False once the unit is destroyed or no longer visible to us."""
        ...

    @property
    def is_completed(self) -> bool:
        """True once the unit is fully built or trained."""
        ...

    @property
    def is_idle(self) -> bool:
        """True when the unit has no order in progress."""
        ...

    @property
    def is_gathering(self) -> bool:
        """True while the unit mines or returns cargo."""
        ...

    def move(self, position: Position) -> None:
        """Order a move."""
        ...

    def gather(self, target: Unit) -> None:
        """Order gathering from a resource source."""
        ...

    def build(self, unit_type: UnitType, position: Position) -> None:
        """Order construction of a structure at or near position."""
        ...

    def train(self, unit_type: UnitType) -> None:
        """Order a structure to train a unit."""
        ...

    def attack(self, target: Unit | Position) -> None:
        """Order an attack on a unit or an attack-move to a position."""
        ...


@runtime_checkable
class Host(Protocol):
    """Game state provider for the controlled side."""

    def units(self) -> Iterable[Unit]:
        """All units currently controlled, including incomplete ones."""
        ...

    def resource_sources(self) -> Iterable[Unit]:
        """Resource sources workers may gather from."""
        ...

    def supply_used(self) -> int:
        """Supply consumed by living units."""
        ...

    def supply_total(self) -> int:
        """Supply capacity provided by completed units."""
        ...

    def minerals(self) -> int:
        """Current mineral stockpile."""
        ...

    def gathered_minerals(self) -> int:
        """Cumulative minerals gathered since match start."""
        ...


@runtime_checkable
class DiagnosticSink(Protocol):
    """Write-only overlay for per-tick annotations. Never read back."""

    def draw_text(self, x: int, y: int, text: str) -> None:
        """Draw text at screen coordinates."""
        ...
