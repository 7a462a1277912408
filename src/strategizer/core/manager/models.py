"""Manager models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strategizer.host.protocol import Host
    from strategizer.host.unit_types import UnitType


class ManagerKey(StrEnum):
    """Identity of each manager. Declaration order is the update order."""

    COMBAT = "combat"
    CONSTRUCTION = "construction"
    PRODUCTION = "production"
    RESOURCE = "resource"
    SCOUT = "scout"
    SUPPLY = "supply"


@dataclass(slots=True)
class Budget:
    """Minerals and free supply not yet committed this tick.

    The engine builds one per tick and hands it to every manager, so orders
    handed out by one manager reduce what the next one can spend.

    Usage:
        budget = Budget.from_host(host)
        if budget.reserve(UnitTypes.TERRAN_SCV):
            agent.set_state(AgentState.BUILD)
    """

    minerals: int
    supply: int

    @classmethod
    def from_host(cls, host: Host) -> Budget:
        return cls(
            minerals=host.minerals(),
            supply=host.supply_total() - host.supply_used(),
        )

    def can_afford(self, unit_type: UnitType) -> bool:
        return (
            unit_type.mineral_cost <= self.minerals
            and unit_type.supply_required <= self.supply
        )

    def reserve(self, unit_type: UnitType) -> bool:
        """Deduct unit_type's cost if affordable. Returns whether it was."""
        if not self.can_afford(unit_type):
            return False
        self.minerals -= unit_type.mineral_cost
        self.supply -= unit_type.supply_required
        return True
