"""Manager base class.

A manager holds a membership set of agent ids, never agents. Ids resolve
through the engine's agent table, so a retired agent simply stops resolving
and is skipped.

Usage:
    manager = ResourceManager(host, agents, settings)
    manager.add_agent(agent)
    manager.update(Budget.from_host(host))  # coordinate, then tick every member
    manager.remove_all_agents()
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, ClassVar

from strategizer.core.identity import AgentId
from strategizer.core.manager.models import Budget, ManagerKey

if TYPE_CHECKING:
    from strategizer.core.agent import Agent, Role
    from strategizer.host.protocol import DiagnosticSink, Host

logger = logging.getLogger(__name__)


class Manager:
    """Goal-oriented driver of a set of agents.

    Subclasses set KEY and NAME and override update() to apply group-level
    coordination before calling super().update(budget), which ticks every member.

    Args:
        host: Game state provider.
        agents: Read-only view of the engine's agent table.
    """

    KEY: ClassVar[ManagerKey]
    NAME: ClassVar[str] = "Manager"

    def __init__(self, host: Host, agents: Mapping[AgentId, Agent]):
        self._host = host
        self._agents = agents
        self._members: dict[AgentId, None] = {}  # insertion-ordered set

    def __repr__(self) -> str:
        return f"{type(self).__name__}(members={len(self._members)})"

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, agent: object) -> bool:
        if isinstance(agent, AgentId):
            return agent in self._members
        return getattr(agent, "id", None) in self._members

    @property
    def name(self) -> str:
        return self.NAME

    def add_agent(self, agent: Agent) -> None:
        """Insert an agent into membership. Idempotent."""
        self._members[agent.id] = None

    def remove_agent(self, agent: Agent) -> None:
        """Remove an agent from membership. Missing agents are ignored."""
        self._members.pop(agent.id, None)

    def remove_all_agents(self) -> None:
        """Clear membership. Agent lifetime is unaffected."""
        self._members.clear()

    def member_ids(self) -> list[AgentId]:
        """Member ids in insertion order."""
        return list(self._members)

    def agents(self, role: Role | None = None) -> Iterator[Agent]:
        """Iterate live members, optionally filtered by role.

        Ids that no longer resolve in the agent table are skipped.
        """
        for agent_id in self._members:
            agent = self._agents.get(agent_id)
            if agent is None or agent.retired:
                continue
            if role is None or agent.role is role:
                yield agent

    def num_agents(self, role: Role | None = None) -> int:
        """Count live members, optionally filtered by role."""
        return sum(1 for _ in self.agents(role))

    def update(self, budget: Budget | None = None) -> None:
        """Advance every member one step. No-op when membership is empty.

        Args:
            budget: Spending shared by every manager this tick. Managers that
                spend build their own from the host when none is given.
        """
        for agent in self.agents():
            agent.tick()

    def draw(self, sink: DiagnosticSink, x: int, y: int) -> None:
        """Write a one-line summary to the diagnostic overlay."""
        sink.draw_text(x, y, f"{self.NAME}: {len(self._members)}")
