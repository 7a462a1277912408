"""Supply manager: builds supply structures before capacity runs out."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from strategizer.config import StrategizerSettings
from strategizer.core.agent import Agent, AgentState, Role
from strategizer.core.identity import AgentId
from strategizer.core.manager import Budget, Manager, ManagerKey
from strategizer.host.unit_types import UnitTypes

if TYPE_CHECKING:
    from strategizer.host.protocol import Host

BUILDING_STATES = frozenset({AgentState.BUILD, AgentState.AWAIT_BUILD})


class SupplyManager(Manager):
    """Redirects member workers into Build while projected headroom is low.

    Projected headroom counts capacity of supply structures that are still
    under construction, so a depot already being built is not duplicated.
    """

    KEY = ManagerKey.SUPPLY
    NAME = "SupplyMgr"

    def __init__(
        self, host: Host, agents: Mapping[AgentId, Agent], settings: StrategizerSettings
    ):
        super().__init__(host, agents)
        self._settings = settings
        self._structure = UnitTypes.by_name(settings.supply_structure)

    def projected_headroom(self) -> int:
        """Supply capacity, including capacity under construction, minus supply used."""
        pending = sum(
            u.unit_type.supply_provided for u in self._host.units() if not u.is_completed
        )
        return self._host.supply_total() + pending - self._host.supply_used()

    def update(self, budget: Budget | None = None) -> None:
        if self.projected_headroom() < self._settings.supply_headroom_threshold:
            for agent in self.agents(Role.WORKER):
                if agent.state not in BUILDING_STATES:
                    agent.set_unit_type_target(self._structure)
                    agent.set_state(AgentState.BUILD)

        super().update(budget)
