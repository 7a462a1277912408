"""Role-specific agent variants and the role dispatch table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from strategizer.core.agent.core import Agent
from strategizer.core.agent.models import AgentState, Role
from strategizer.core.agent.operations import classify_role
from strategizer.core.identity import AgentId

if TYPE_CHECKING:
    from strategizer.host.protocol import Unit


class WorkerAgent(Agent):
    """Gathers resources and constructs structures."""

    ROLE = Role.WORKER

    def _on_build(self) -> None:
        unit_type = self._target.unit_type if self._target is not None else None
        if unit_type is None:
            self.set_state(AgentState.IDLE)
            return
        site = self._target.location() if self._target is not None else None
        self._unit.build(unit_type, site if site is not None else self.position)
        self.set_state(AgentState.AWAIT_BUILD)

    def _on_gather(self) -> None:
        source = self._target.unit if self._target is not None else None
        if source is None or not source.exists:
            self._target = None
            self.set_state(AgentState.IDLE)
            return
        if not self._ordered or self._unit.is_idle:
            self._unit.gather(source)
            self._ordered = True


class StructureAgent(Agent):
    """Immobile agent that trains units instead of constructing them."""

    def _on_move(self) -> None:
        self.set_state(AgentState.IDLE)

    def _on_combat(self) -> None:
        self.set_state(AgentState.IDLE)

    def _on_build(self) -> None:
        unit_type = self._target.unit_type if self._target is not None else None
        if unit_type is None or unit_type.name not in self._unit.unit_type.trains:
            self.set_state(AgentState.IDLE)
            return
        if self._unit.is_idle:
            self._unit.train(unit_type)
            self.set_state(AgentState.AWAIT_BUILD)


class DepotAgent(StructureAgent):
    """Resource depot; trains workers."""

    ROLE = Role.DEPOT


class ProducerAgent(StructureAgent):
    """Combat-unit producing structure."""

    ROLE = Role.PRODUCER


class CombatUnitAgent(Agent):
    """Armed mobile unit. Moves with attack-move so it engages en route."""

    ROLE = Role.COMBAT

    def _on_move(self) -> None:
        destination = self._target.location() if self._target is not None else None
        if destination is None:
            self.set_state(AgentState.IDLE)
            return
        if not self._ordered:
            self._unit.attack(destination)
            self._ordered = True
        elif self._unit.is_idle:
            self.set_state(AgentState.IDLE)


AGENT_VARIANTS: dict[Role, type[Agent]] = {
    Role.WORKER: WorkerAgent,
    Role.DEPOT: DepotAgent,
    Role.PRODUCER: ProducerAgent,
    Role.COMBAT: CombatUnitAgent,
}


def create_agent(agent_id: AgentId, unit: Unit) -> Agent | None:
    """Create the agent variant matching a unit's role.

    Args:
        agent_id: Arena key for the new agent.
        unit: Completed unit to bind.

    Returns:
        The new agent, or None if the unit type has no role.
    """
    role = classify_role(unit.unit_type)
    if role is None:
        return None
    return AGENT_VARIANTS[role](agent_id, unit)
