"""Scout manager: walks idle members around a list of waypoints."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from strategizer.config import StrategizerSettings
from strategizer.core.agent import Agent, AgentState, Role, Target
from strategizer.core.identity import AgentId
from strategizer.core.manager import Budget, Manager, ManagerKey
from strategizer.core.types import Position

if TYPE_CHECKING:
    from strategizer.host.protocol import Host

MOBILE_ROLES = frozenset({Role.WORKER, Role.COMBAT})


class ScoutManager(Manager):
    """Sends each idle mobile member to the next waypoint, round robin."""

    KEY = ManagerKey.SCOUT
    NAME = "ScoutMgr"

    def __init__(
        self,
        host: Host,
        agents: Mapping[AgentId, Agent],
        settings: StrategizerSettings,
        waypoints: Iterable[Position] = (),
    ):
        super().__init__(host, agents)
        self._settings = settings
        self._waypoints: list[Position] = list(waypoints)
        self._next = 0

    @property
    def waypoints(self) -> tuple[Position, ...]:
        return tuple(self._waypoints)

    def add_waypoint(self, position: Position) -> None:
        self._waypoints.append(position)

    def update(self, budget: Budget | None = None) -> None:
        if self._waypoints:
            for agent in self.agents():
                if agent.role in MOBILE_ROLES and agent.state is AgentState.IDLE:
                    waypoint = self._waypoints[self._next % len(self._waypoints)]
                    self._next += 1
                    agent.set_target(Target(position=waypoint))
                    agent.set_state(AgentState.MOVE_TO_TARGET)
        super().update(budget)
