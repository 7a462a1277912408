"""Agent models: roles, behavioural states, and target directives."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from strategizer.core.types import Position

if TYPE_CHECKING:
    from strategizer.host.protocol import Unit
    from strategizer.host.unit_types import UnitType


class Role(Enum):
    """Fixed classification of an agent, derived once from its unit type."""

    WORKER = "worker"
    DEPOT = "depot"  # resource-depot-like
    PRODUCER = "producer"  # trains combat units
    COMBAT = "combat"  # combat unit


class AgentState(Enum):
    """Behavioural state. Any state may follow any other."""

    IDLE = "idle"
    MOVE_TO_TARGET = "move_to_target"
    BUILD = "build"
    AWAIT_BUILD = "await_build"
    GATHER = "gather"
    COMBAT = "combat"


@dataclass(frozen=True, slots=True)
class Target:
    """Directive attached to an agent. Interpreted by the agent's current state.

    Attributes:
        unit_type: Type to construct or train (Build state).
        position: Location to move to, build at, or attack-move to.
        unit: Unit to gather from or attack.
    """

    unit_type: UnitType | None = None
    position: Position | None = None
    unit: Unit | None = None

    def location(self) -> Position | None:
        """Resolve where this target is, preferring an explicit position.

        Returns:
            The explicit position, else the position of a still-existing
            target unit, else None.
        """
        if self.position is not None:
            return self.position
        if self.unit is not None and self.unit.exists:
            return self.unit.position
        return None
