"""Pure functions over unit types and positions."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from strategizer.core.agent.models import Role
from strategizer.core.types import Position

if TYPE_CHECKING:
    from strategizer.host.unit_types import UnitType


def classify_role(unit_type: UnitType) -> Role | None:
    """Classify a unit type into an agent role.

    Checks run in a fixed order, so a worker that can also attack is still a
    worker and a depot that trains workers is still a depot.

    Args:
        unit_type: Static type of the unit.

    Returns:
        The role, or None for types that get no agent (resources, supply
        structures, anything unrecognised).
    """
    if unit_type.is_worker:
        return Role.WORKER
    if unit_type.is_resource_depot:
        return Role.DEPOT
    if unit_type.is_building and unit_type.trains:
        return Role.PRODUCER
    if not unit_type.is_building and unit_type.can_attack:
        return Role.COMBAT
    return None


def distance(a: Position, b: Position) -> float:
    """Euclidean distance between two positions."""
    return math.hypot(a[0] - b[0], a[1] - b[1])
