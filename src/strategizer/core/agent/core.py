"""Agent base class.

An agent binds one live unit to a free-form behavioural state. Whichever
manager currently holds the agent decides which states are meaningful; the
agent only knows how to act in each of them.

Usage:
    agent = WorkerAgent(AgentId(index=0), unit)
    agent.set_target(Target(unit=mineral_field))
    agent.set_state(AgentState.GATHER)
    agent.tick()  # issues unit.gather(mineral_field)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from strategizer.core.agent.models import AgentState, Role, Target
from strategizer.core.agent.operations import classify_role, distance
from strategizer.core.identity import AgentId
from strategizer.core.types import Position, UnitHandle

if TYPE_CHECKING:
    from strategizer.host.protocol import Unit
    from strategizer.host.unit_types import UnitType

logger = logging.getLogger(__name__)

ARRIVAL_RADIUS = 1.0


class AgentBindError(ValueError):
    """Raised when an agent cannot be bound to a unit."""


class AgentRetiredError(RuntimeError):
    """Raised when an agent is retired a second time."""


class Agent:
    """Controller wrapper around exactly one unit.

    The role is inferred from the unit's static type at construction and
    never re-derived. Subclasses pin the role they accept via ROLE and
    override the per-state handlers they support; unsupported states are
    no-ops.

    Args:
        agent_id: Arena key issued by the engine's allocator.
        unit: Live, completed unit to bind.

    Raises:
        AgentBindError: If the unit does not exist, is not completed, has no
            recognised role, or has a role this variant does not accept.
    """

    ROLE: ClassVar[Role | None] = None

    def __init__(self, agent_id: AgentId, unit: Unit):
        if not unit.exists:
            raise AgentBindError(f"Unit {unit.handle!r} does not exist")
        if not unit.is_completed:
            raise AgentBindError(f"Unit {unit.handle!r} is not completed")
        role = classify_role(unit.unit_type)
        if role is None:
            raise AgentBindError(f"Unit type {unit.unit_type.name!r} has no agent role")
        if self.ROLE is not None and role is not self.ROLE:
            raise AgentBindError(
                f"{type(self).__name__} cannot bind a {role.value} unit ({unit.unit_type.name})"
            )

        self._id = agent_id
        self._unit = unit
        self._role = role
        self._state = AgentState.IDLE
        self._target: Target | None = None
        self._ordered = False  # one-shot order for the current directive was issued
        self._retired = False

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self._id}, unit={self._unit.handle!r}, "
            f"state={self._state.value})"
        )

    @property
    def id(self) -> AgentId:
        return self._id

    @property
    def unit(self) -> Unit:
        return self._unit

    @property
    def handle(self) -> UnitHandle:
        return self._unit.handle

    @property
    def role(self) -> Role:
        return self._role

    @property
    def state(self) -> AgentState:
        return self._state

    @property
    def target(self) -> Target | None:
        return self._target

    @property
    def retired(self) -> bool:
        return self._retired

    @property
    def is_active(self) -> bool:
        """True while the agent may act: not retired and its unit exists."""
        return not self._retired and self._unit.exists

    @property
    def position(self) -> Position:
        return self._unit.position

    def set_state(self, state: AgentState) -> None:
        """Transition to a state. Changing state re-arms its one-shot order."""
        if state is not self._state:
            self._state = state
            self._ordered = False

    def set_target(self, target: Target | None) -> None:
        """Attach a directive. A different directive re-arms the one-shot order."""
        if target != self._target:
            self._target = target
            self._ordered = False

    def set_unit_type_target(self, unit_type: UnitType) -> None:
        """Shorthand for a Build directive without a location."""
        self.set_target(Target(unit_type=unit_type))

    def tick(self) -> None:
        """Execute one behaviour step for the current state.

        No-op once retired or after the bound unit disappeared; the engine
        reaps such agents on its next discovery pass.
        """
        if not self.is_active:
            return

        state = self._state
        if state is AgentState.IDLE:
            self._on_idle()
        elif state is AgentState.MOVE_TO_TARGET:
            self._on_move()
        elif state is AgentState.BUILD:
            self._on_build()
        elif state is AgentState.AWAIT_BUILD:
            self._on_await_build()
        elif state is AgentState.GATHER:
            self._on_gather()
        elif state is AgentState.COMBAT:
            self._on_combat()

    def retire(self) -> None:
        """Release the unit. Called by the engine exactly once.

        Raises:
            AgentRetiredError: If the agent was already retired.
        """
        if self._retired:
            raise AgentRetiredError(f"Agent {self._id} already retired")
        self._retired = True
        self._target = None
        logger.debug("Retired agent %s for unit %r", self._id, self._unit.handle)

    # State handlers. Defaults cover mobile units.

    def _on_idle(self) -> None:
        pass

    def _on_move(self) -> None:
        destination = self._target.location() if self._target is not None else None
        if destination is None:
            self.set_state(AgentState.IDLE)
            return
        if not self._ordered:
            self._unit.move(destination)
            self._ordered = True
        elif self._unit.is_idle or distance(self.position, destination) <= ARRIVAL_RADIUS:
            self.set_state(AgentState.IDLE)

    def _on_build(self) -> None:
        pass

    def _on_await_build(self) -> None:
        if self._unit.is_idle:
            self.set_state(AgentState.IDLE)

    def _on_gather(self) -> None:
        pass

    def _on_combat(self) -> None:
        target = self._target
        if target is None:
            self.set_state(AgentState.IDLE)
            return
        if target.unit is not None and target.unit.exists:
            victim: Unit | Position = target.unit
        elif target.position is not None:
            victim = target.position
        else:
            self.set_state(AgentState.IDLE)
            return
        if not self._ordered:
            self._unit.attack(victim)
            self._ordered = True
        elif self._unit.is_idle:
            self.set_state(AgentState.IDLE)
