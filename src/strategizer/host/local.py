"""Local in-memory host implementation.

Simple dict-based host suitable for single-process use and testing. Orders
are recorded on each unit; step() advances a deliberately crude simulation
(moves are instant, construction takes one step, every gathering worker
yields a fixed amount per step).

Usage:
    host = LocalHost(minerals=50)
    host.spawn(UnitTypes.TERRAN_COMMAND_CENTER)
    host.spawn(UnitTypes.TERRAN_SCV, position=(2.0, 0.0))
    host.add_resource((8.0, 0.0))
    strategizer = Strategizer(host)
    strategizer.advance()
    host.step()
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from strategizer.core.types import Position
from strategizer.host.unit_types import UnitType, UnitTypes

if TYPE_CHECKING:
    from strategizer.host.protocol import Unit

MAX_SUPPLY = 200


class OrderKind(Enum):
    """Kinds of order a LocalUnit records."""

    MOVE = "move"
    GATHER = "gather"
    BUILD = "build"
    TRAIN = "train"
    ATTACK = "attack"


@dataclass(frozen=True, slots=True)
class Order:
    """One order as issued by the core."""

    kind: OrderKind
    unit_type: UnitType | None = None
    position: Position | None = None
    target: Unit | None = None


class LocalUnit:
    """In-memory unit satisfying the Unit protocol.

    Args:
        handle: Identifier assigned by the owning host.
        unit_type: Static type.
        position: Initial position.
        completed: Whether the unit starts fully built.
        owned: Whether the unit belongs to the controlled side.
    """

    def __init__(
        self,
        handle: int,
        unit_type: UnitType,
        position: Position,
        completed: bool = True,
        owned: bool = True,
    ):
        self._handle = handle
        self._unit_type = unit_type
        self._position = position
        self.completed = completed
        self.owned = owned
        self.alive = True
        self.orders: list[Order] = []
        self.current_order: Order | None = None

    def __repr__(self) -> str:
        return f"LocalUnit({self._handle}, {self._unit_type.name!r})"

    @property
    def handle(self) -> int:
        return self._handle

    @property
    def unit_type(self) -> UnitType:
        return self._unit_type

    @property
    def position(self) -> Position:
        return self._position

    @property
    def exists(self) -> bool:
        return self.alive

    @property
    def is_completed(self) -> bool:
        return self.completed

    @property
    def is_idle(self) -> bool:
        return self.current_order is None

    @property
    def is_gathering(self) -> bool:
        return self.current_order is not None and self.current_order.kind is OrderKind.GATHER

    def move(self, position: Position) -> None:
        self._issue(Order(OrderKind.MOVE, position=position))

    def gather(self, target: Unit) -> None:
        self._issue(Order(OrderKind.GATHER, target=target))

    def build(self, unit_type: UnitType, position: Position) -> None:
        self._issue(Order(OrderKind.BUILD, unit_type=unit_type, position=position))

    def train(self, unit_type: UnitType) -> None:
        self._issue(Order(OrderKind.TRAIN, unit_type=unit_type))

    def attack(self, target: Unit | Position) -> None:
        if isinstance(target, tuple):
            self._issue(Order(OrderKind.ATTACK, position=target))
        else:
            self._issue(Order(OrderKind.ATTACK, target=target))

    def place(self, position: Position) -> None:
        """Teleport the unit."""
        self._position = position

    def stop(self) -> None:
        """Drop the current order, leaving the unit idle."""
        self.current_order = None

    def _issue(self, order: Order) -> None:
        self.orders.append(order)
        self.current_order = order


class LocalHost:
    """In-memory host using a dict of units.

    Supply figures are derived from living units unless pinned with
    set_supply(), which tests use to stage resource-pressure scenarios.

    Args:
        minerals: Starting mineral stockpile.
        gather_rate: Minerals yielded per gathering worker per step.
    """

    def __init__(self, minerals: int = 50, gather_rate: int = 1):
        self._handles = itertools.count(1)
        self._units: dict[int, LocalUnit] = {}
        self._pending: list[LocalUnit] = []
        self._minerals = minerals
        self._gathered = 0
        self._gather_rate = gather_rate
        self._supply_pin: tuple[int, int] | None = None
        self.overlay: list[tuple[int, int, str]] = []
        self.frame = 0

    def spawn(
        self,
        unit_type: UnitType,
        position: Position = (0.0, 0.0),
        *,
        completed: bool = True,
        owned: bool = True,
    ) -> LocalUnit:
        """Create a unit. For use by tests and scripted scenarios."""
        unit = LocalUnit(next(self._handles), unit_type, position, completed, owned)
        self._units[unit.handle] = unit
        return unit

    def add_resource(self, position: Position) -> LocalUnit:
        """Create an unowned mineral field."""
        return self.spawn(UnitTypes.MINERAL_FIELD, position, owned=False)

    def destroy(self, unit: LocalUnit) -> None:
        """Remove a unit from the game."""
        unit.alive = False
        unit.current_order = None
        self._units.pop(unit.handle, None)

    def set_supply(self, used: int, total: int) -> None:
        """Pin supply figures regardless of living units."""
        self._supply_pin = (used, total)

    def units(self) -> list[LocalUnit]:
        return [u for u in self._units.values() if u.owned]

    def resource_sources(self) -> list[LocalUnit]:
        return [u for u in self._units.values() if u.unit_type.is_resource]

    def supply_used(self) -> int:
        if self._supply_pin is not None:
            return self._supply_pin[0]
        return sum(u.unit_type.supply_required for u in self.units())

    def supply_total(self) -> int:
        if self._supply_pin is not None:
            return self._supply_pin[1]
        provided = sum(u.unit_type.supply_provided for u in self.units() if u.completed)
        return min(MAX_SUPPLY, provided)

    def minerals(self) -> int:
        return self._minerals

    def gathered_minerals(self) -> int:
        return self._gathered

    def draw_text(self, x: int, y: int, text: str) -> None:
        self.overlay.append((x, y, text))

    def step(self) -> None:
        """Advance the simulation one frame.

        Units placed or trained last step complete first, then every owned
        unit's current order is resolved.
        """
        self.frame += 1
        self.overlay.clear()

        for unit in self._pending:
            unit.completed = True
        self._pending.clear()

        for unit in self.units():
            order = unit.current_order
            if order is None or not unit.completed:
                continue
            if order.kind is OrderKind.GATHER:
                if order.target is not None and order.target.exists:
                    self._minerals += self._gather_rate
                    self._gathered += self._gather_rate
                else:
                    unit.stop()
            elif order.kind in (OrderKind.MOVE, OrderKind.ATTACK):
                if order.position is not None:
                    unit.place(order.position)
                unit.stop()
            elif order.unit_type is None:
                unit.stop()
            elif order.kind is OrderKind.BUILD:
                position = order.position if order.position is not None else unit.position
                self._produce(order.unit_type, position)
                unit.stop()
            elif order.kind is OrderKind.TRAIN:
                if self.supply_used() + order.unit_type.supply_required <= self.supply_total():
                    self._produce(order.unit_type, unit.position)
                unit.stop()

    def _produce(self, unit_type: UnitType, position: Position) -> None:
        if self._minerals < unit_type.mineral_cost:
            return
        self._minerals -= unit_type.mineral_cost
        self._pending.append(self.spawn(unit_type, position, completed=False))
