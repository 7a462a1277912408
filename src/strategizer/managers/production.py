"""Production manager: keeps depots training workers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from strategizer.config import StrategizerSettings
from strategizer.core.agent import Agent, AgentState
from strategizer.core.identity import AgentId
from strategizer.core.manager import Budget, Manager, ManagerKey
from strategizer.host.unit_types import UnitTypes

if TYPE_CHECKING:
    from strategizer.host.protocol import Host


def queue_training(structures: Iterable[Agent], budget: Budget) -> int:
    """Order idle structures to train the first unit type they can afford.

    Each order is reserved against budget as it is handed out, so structures
    sharing one budget never spend the same minerals or supply.

    Returns:
        Number of structures switched to Build.
    """
    queued = 0
    for agent in structures:
        if agent.state is not AgentState.IDLE:
            continue
        for unit_type in UnitTypes.trained_by(agent.unit.unit_type):
            if budget.reserve(unit_type):
                agent.set_unit_type_target(unit_type)
                agent.set_state(AgentState.BUILD)
                queued += 1
                break
    return queued


class ProductionManager(Manager):
    """Trains units from member structures whenever they are idle."""

    KEY = ManagerKey.PRODUCTION
    NAME = "ProductionMgr"

    def __init__(
        self, host: Host, agents: Mapping[AgentId, Agent], settings: StrategizerSettings
    ):
        super().__init__(host, agents)
        self._settings = settings

    def update(self, budget: Budget | None = None) -> None:
        if budget is None:
            budget = Budget.from_host(self._host)
        queue_training((a for a in self.agents() if a.unit.unit_type.trains), budget)
        super().update(budget)
