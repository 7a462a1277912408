"""Combat manager: grows the military branch and sends it at an objective."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from strategizer.config import StrategizerSettings
from strategizer.core.agent import Agent, AgentState, Role, Target
from strategizer.core.identity import AgentId
from strategizer.core.manager import Budget, Manager, ManagerKey
from strategizer.core.types import Position
from strategizer.host.unit_types import UnitTypes
from strategizer.managers.production import queue_training
from strategizer.managers.supply import BUILDING_STATES

if TYPE_CHECKING:
    from strategizer.host.protocol import Host

logger = logging.getLogger(__name__)


class CombatManager(Manager):
    """Builds producers with member workers, trains from producers, attacks.

    Worker members construct the configured combat structure until
    max_producers exist or are under way, and only while the structure is
    affordable. Idle combat units attack the objective once one is set.
    """

    KEY = ManagerKey.COMBAT
    NAME = "CombatMgr"

    def __init__(
        self, host: Host, agents: Mapping[AgentId, Agent], settings: StrategizerSettings
    ):
        super().__init__(host, agents)
        self._settings = settings
        self._structure = UnitTypes.by_name(settings.combat_structure)
        self._objective: Position | None = None

    @property
    def objective(self) -> Position | None:
        return self._objective

    def set_objective(self, position: Position | None) -> None:
        """Set (or clear) the position idle combat units attack-move to."""
        self._objective = position

    def producer_count(self) -> int:
        """Producers that exist, are under construction, or are ordered.

        Pending orders are counted across the whole agent table, so a builder
        that moved to another manager since its order still counts.
        """
        placed = sum(1 for u in self._host.units() if u.unit_type == self._structure)
        ordered = sum(
            1
            for a in self._agents.values()
            if not a.retired
            and a.role is Role.WORKER
            and a.state in BUILDING_STATES
            and a.target is not None
            and a.target.unit_type == self._structure
        )
        return placed + ordered

    def update(self, budget: Budget | None = None) -> None:
        if budget is None:
            budget = Budget.from_host(self._host)
        self._assign_builders(budget)
        queue_training(self.agents(Role.PRODUCER), budget)
        self._assign_attackers()
        super().update(budget)

    def _assign_builders(self, budget: Budget) -> None:
        missing = self._settings.max_producers - self.producer_count()
        if missing <= 0:
            return
        for agent in self.agents(Role.WORKER):
            if missing <= 0:
                break
            if agent.state in BUILDING_STATES:
                continue
            if not budget.reserve(self._structure):
                break
            agent.set_unit_type_target(self._structure)
            agent.set_state(AgentState.BUILD)
            missing -= 1
            logger.debug("Agent %s ordered to build %s", agent.id, self._structure.name)

    def _assign_attackers(self) -> None:
        if self._objective is None:
            return
        for agent in self.agents(Role.COMBAT):
            if agent.state is AgentState.IDLE:
                agent.set_target(Target(position=self._objective))
                agent.set_state(AgentState.COMBAT)
