"""Agent-to-manager assignment: default routing plus priority-ordered overrides.

Stateless functions and rule objects. The engine builds a fresh assignment
every tick with compute_assignment() and discards it after redistribution.

Usage:
    rules = default_rules(settings)
    context = AssignmentContext(host=host, agents=agents, managers=managers)
    assignment, moves = compute_assignment(context, rules)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

from strategizer.core.agent import Agent, Role
from strategizer.core.identity import AgentId
from strategizer.core.manager import Manager, ManagerKey

if TYPE_CHECKING:
    from strategizer.config import StrategizerSettings
    from strategizer.host.protocol import Host

logger = logging.getLogger(__name__)

Assignment: TypeAlias = dict[AgentId, ManagerKey]
"""Single-valued map from every live agent to exactly one manager."""

DEFAULT_ROUTES: dict[Role, ManagerKey] = {
    Role.WORKER: ManagerKey.RESOURCE,
    Role.DEPOT: ManagerKey.PRODUCTION,
    Role.PRODUCER: ManagerKey.COMBAT,
    Role.COMBAT: ManagerKey.COMBAT,
}


@dataclass(frozen=True, slots=True)
class AssignmentContext:
    """Read-only inputs for one assignment pass.

    Attributes:
        host: Game state provider (supply figures).
        agents: Live agents in table order.
        managers: Managers with last tick's membership still in place.
    """

    host: Host
    agents: Mapping[AgentId, Agent]
    managers: Mapping[ManagerKey, Manager]


@dataclass(frozen=True, slots=True)
class Move:
    """One override that fired: which rule moved which agent where."""

    rule: str
    agent: AgentId
    source: ManagerKey
    target: ManagerKey


@runtime_checkable
class AssignmentRule(Protocol):
    """Override applied after default routing.

    Rules run in a fixed order; a later rule may reassign an agent an earlier
    rule already mapped.
    """

    name: str

    def apply(self, assignment: Assignment, context: AssignmentContext) -> Move | None:
        """Mutate assignment in place. Returns the move made, if any."""
        ...


def route_by_role(agents: Iterable[Agent]) -> Assignment:
    """Map every agent to its role's default manager, in iteration order."""
    return {agent.id: DEFAULT_ROUTES[agent.role] for agent in agents}


def pick_worker(
    assignment: Assignment,
    agents: Mapping[AgentId, Agent],
    source: ManagerKey,
    preferred: Iterable[AgentId] = (),
    held: Collection[AgentId] = (),
) -> AgentId | None:
    """Pick one worker currently routed to source.

    Preferred ids are tried first, in order, then every agent in assignment
    order. Preferring the target manager's current members keeps the same
    worker in place across ticks instead of swapping it for another.

    Workers in held are only taken when no other worker is routed to source,
    so a worker another override manager kept last tick stays put.

    Returns:
        The chosen agent id, or None if no worker is routed to source.
    """

    def eligible(agent_id: AgentId) -> bool:
        agent = agents.get(agent_id)
        return (
            agent is not None
            and agent.role is Role.WORKER
            and assignment.get(agent_id) is source
        )

    for agent_id in preferred:
        if eligible(agent_id):
            return agent_id
    fallback = None
    for agent_id in assignment:
        if not eligible(agent_id):
            continue
        if agent_id not in held:
            return agent_id
        if fallback is None:
            fallback = agent_id
    return fallback


@dataclass(frozen=True, slots=True, kw_only=True)
class WorkerOverride(ABC):
    """Moves at most one worker per tick from source to target when triggered.

    Fires only while the target manager holds at most worker_cap workers.
    Subclasses define the trigger.
    """

    name: str
    target: ManagerKey
    worker_cap: int
    source: ManagerKey = ManagerKey.RESOURCE

    @abstractmethod
    def triggered(self, host: Host) -> bool:
        """Whether the override applies this tick."""

    def apply(self, assignment: Assignment, context: AssignmentContext) -> Move | None:
        if not self.triggered(context.host):
            return None
        manager = context.managers[self.target]
        if manager.num_agents(Role.WORKER) > self.worker_cap:
            return None

        held = {
            agent_id
            for key, other in context.managers.items()
            if key not in (self.source, self.target)
            for agent_id in other.member_ids()
        }
        agent_id = pick_worker(
            assignment, context.agents, self.source, manager.member_ids(), held
        )
        if agent_id is None:
            return None
        assignment[agent_id] = self.target
        logger.debug("Rule %s moved agent %s to %s", self.name, agent_id, self.target)
        return Move(rule=self.name, agent=agent_id, source=self.source, target=self.target)


@dataclass(frozen=True, slots=True, kw_only=True)
class SupplyPressureRule(WorkerOverride):
    """Triggered while supply headroom is strictly below threshold."""

    threshold: int

    def triggered(self, host: Host) -> bool:
        return host.supply_total() - host.supply_used() < self.threshold


@dataclass(frozen=True, slots=True, kw_only=True)
class ExpansionRule(WorkerOverride):
    """Triggered once supply used strictly exceeds threshold."""

    threshold: int

    def triggered(self, host: Host) -> bool:
        return host.supply_used() > self.threshold


def default_rules(settings: StrategizerSettings) -> tuple[AssignmentRule, ...]:
    """Override rules in priority order: supply pressure, then expansion."""
    return (
        SupplyPressureRule(
            name="supply_pressure",
            target=ManagerKey.SUPPLY,
            worker_cap=settings.supply_worker_cap,
            threshold=settings.supply_headroom_threshold,
        ),
        ExpansionRule(
            name="expansion",
            target=ManagerKey.COMBAT,
            worker_cap=settings.expansion_worker_cap,
            threshold=settings.expansion_supply_threshold,
        ),
    )


def compute_assignment(
    context: AssignmentContext,
    rules: Sequence[AssignmentRule],
) -> tuple[Assignment, list[Move]]:
    """Build a fresh assignment: default routes, then each rule in order.

    Args:
        context: Host, live agents, and managers with last tick's membership.
        rules: Overrides in priority order.

    Returns:
        Tuple of (assignment, moves made by rules).
    """
    assignment = route_by_role(context.agents.values())
    moves: list[Move] = []
    for rule in rules:
        move = rule.apply(assignment, context)
        if move is not None:
            moves.append(move)
    return assignment, moves
