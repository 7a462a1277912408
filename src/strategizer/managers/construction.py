"""Construction manager: hands queued construction requests to idle workers."""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from typing import TYPE_CHECKING

from strategizer.config import StrategizerSettings
from strategizer.core.agent import Agent, AgentState, Role, Target
from strategizer.core.identity import AgentId
from strategizer.core.manager import Budget, Manager, ManagerKey
from strategizer.core.types import Position

if TYPE_CHECKING:
    from strategizer.host.protocol import Host
    from strategizer.host.unit_types import UnitType


class ConstructionManager(Manager):
    """FIFO queue of structures to build, served by idle member workers."""

    KEY = ManagerKey.CONSTRUCTION
    NAME = "ConstructionMgr"

    def __init__(
        self, host: Host, agents: Mapping[AgentId, Agent], settings: StrategizerSettings
    ):
        super().__init__(host, agents)
        self._settings = settings
        self._requests: deque[Target] = deque()

    @property
    def pending(self) -> int:
        """Requests not yet handed to a worker."""
        return len(self._requests)

    def request(self, unit_type: UnitType, position: Position | None = None) -> None:
        """Queue a structure, optionally at a specific site."""
        self._requests.append(Target(unit_type=unit_type, position=position))

    def update(self, budget: Budget | None = None) -> None:
        for agent in self.agents(Role.WORKER):
            if not self._requests:
                break
            if agent.state is AgentState.IDLE:
                agent.set_target(self._requests.popleft())
                agent.set_state(AgentState.BUILD)
        super().update(budget)
