"""Strategizer: the per-tick assignment engine.

Usage:
    host = LocalHost()
    strategizer = Strategizer(host)
    strategizer.on_match_start()

    # Once per game frame
    strategizer.advance()

    strategizer.on_match_end()

Each advance() runs four phases to completion:
    1. discover_agents()     reap agents of vanished units, create new ones
    2. assign_agents()       default routes plus override rules
    3. redistribute_agents() clear every manager, refill from the assignment
    4. update_managers()     drive every active manager
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from strategizer.config import StrategizerSettings
from strategizer.core.agent import AGENT_VARIANTS, Agent, classify_role
from strategizer.core.identity import AgentId
from strategizer.core.manager import Budget, Manager, ManagerKey
from strategizer.core.types import UnitHandle
from strategizer.engine.allocator import AgentAllocator
from strategizer.engine.assignment import (
    Assignment,
    AssignmentContext,
    AssignmentRule,
    Move,
    compute_assignment,
    default_rules,
)
from strategizer.managers import MANAGER_TYPES
from strategizer.tracing import HistoryStore, InMemoryHistoryStore, TickRecord

if TYPE_CHECKING:
    from strategizer.host.protocol import DiagnosticSink, Host, Unit

logger = logging.getLogger(__name__)


class Strategizer:
    """Owns the agent table and keeps agents distributed across managers.

    The engine is the only owner of agents. Managers receive a read-only view
    of the agent table and hold ids, so retiring an agent here is the single
    point where it stops existing.

    Args:
        host: Game state provider and order sink.
        settings: Thresholds and switches. Defaults load from the environment.
        history: Store receiving one TickRecord per tick. When omitted and
            settings.history_size > 0, an InMemoryHistoryStore is created.
        sink: Diagnostic overlay, used when settings.draw_diagnostics is set.
        rules: Override rules in priority order. Defaults to default_rules().
    """

    def __init__(
        self,
        host: Host,
        settings: StrategizerSettings | None = None,
        *,
        history: HistoryStore | None = None,
        sink: DiagnosticSink | None = None,
        rules: Sequence[AssignmentRule] | None = None,
    ):
        self._host = host
        self._settings = settings or StrategizerSettings()
        self._allocator = AgentAllocator()
        self._agents: dict[AgentId, Agent] = {}
        self._by_unit: dict[UnitHandle, AgentId] = {}
        self._agents_view: Mapping[AgentId, Agent] = MappingProxyType(self._agents)

        self._managers: dict[ManagerKey, Manager] = {
            manager_cls.KEY: manager_cls(host, self._agents_view, self._settings)
            for manager_cls in MANAGER_TYPES
        }
        self._rules = tuple(rules) if rules is not None else default_rules(self._settings)

        if history is None and self._settings.history_size > 0:
            history = InMemoryHistoryStore(max_ticks=self._settings.history_size)
        self._history = history
        self._sink = sink

        self._tick = 0
        self._events: list[dict[str, Any]] = []
        self._last_moves: list[Move] = []

    @property
    def host(self) -> Host:
        return self._host

    @property
    def settings(self) -> StrategizerSettings:
        return self._settings

    @property
    def tick(self) -> int:
        """Number of advance() calls since match start."""
        return self._tick

    @property
    def history(self) -> HistoryStore | None:
        return self._history

    @property
    def agents(self) -> Mapping[AgentId, Agent]:
        """Read-only view of the agent table, in creation order."""
        return self._agents_view

    @property
    def managers(self) -> Mapping[ManagerKey, Manager]:
        """Managers in update order."""
        return MappingProxyType(self._managers)

    @property
    def last_moves(self) -> list[Move]:
        """Override moves made by the most recent assign_agents()."""
        return list(self._last_moves)

    def manager(self, key: ManagerKey) -> Manager:
        return self._managers[key]

    def agent_for(self, handle: UnitHandle) -> Agent | None:
        """Look up the agent bound to a unit handle."""
        agent_id = self._by_unit.get(handle)
        return self._agents.get(agent_id) if agent_id is not None else None

    # Host hooks

    def on_match_start(self) -> None:
        """Reset every table. Agents left from a previous match are retired."""
        if self._agents:
            self._retire_all("match_start")
        self._allocator.reset()
        self._tick = 0
        self._events = []
        self._last_moves = []
        if self._history is not None:
            self._history.clear()
        logger.info("Match started")

    def on_match_end(self, is_winner: bool | None = None) -> None:
        """Retire every agent exactly once and clear all tables and memberships."""
        retired = self._retire_all("match_end")
        self._allocator.reset()
        self._last_moves = []
        logger.info("Match ended (winner=%s), retired %d agents", is_winner, retired)

    def on_unit_destroy(self, unit: Unit | UnitHandle) -> None:
        """Retire the agent of a destroyed unit right away.

        Optional: discover_agents() reaps vanished units on its own.
        """
        handle = getattr(unit, "handle", unit)
        agent_id = self._by_unit.get(handle)
        if agent_id is not None:
            self._retire(agent_id, "destroyed")

    # Tick

    def advance(self) -> None:
        """Run one tick: discover, assign, redistribute, update."""
        self._tick += 1
        self._events = []
        timings: dict[str, float] = {}

        started = time.perf_counter()
        self.discover_agents()
        timings["discover"] = _elapsed_ms(started)

        started = time.perf_counter()
        assignment = self.assign_agents()
        timings["assign"] = _elapsed_ms(started)

        started = time.perf_counter()
        self.redistribute_agents(assignment)
        timings["redistribute"] = _elapsed_ms(started)

        started = time.perf_counter()
        self.update_managers()
        timings["update"] = _elapsed_ms(started)

        self._draw()
        self._record(timings)

    def discover_agents(self) -> list[Agent]:
        """Phase 1: reap agents of vanished units, then bind new completed units.

        Units without a recognised role are skipped. Units that already have
        an agent are left untouched.

        Returns:
            Agents created this call.
        """
        self.reap_agents()

        created: list[Agent] = []
        for unit in self._host.units():
            if not unit.exists or not unit.is_completed:
                continue
            if unit.handle in self._by_unit:
                continue
            role = classify_role(unit.unit_type)
            if role is None:
                continue

            agent_id = self._allocator.allocate()
            agent = AGENT_VARIANTS[role](agent_id, unit)
            self._agents[agent_id] = agent
            self._by_unit[unit.handle] = agent_id
            created.append(agent)

            logger.debug("Created %r", agent)
            self._events.append(
                {
                    "type": "agent_created",
                    "agent": str(agent_id),
                    "unit": repr(unit.handle),
                    "role": agent.role.value,
                }
            )
        return created

    def reap_agents(self) -> list[AgentId]:
        """Retire agents whose unit no longer exists or left the controlled side.

        Returns:
            Ids of the retired agents.
        """
        controlled = {u.handle for u in self._host.units() if u.exists}
        stale = [
            agent_id
            for handle, agent_id in self._by_unit.items()
            if handle not in controlled or not self._agents[agent_id].unit.exists
        ]
        for agent_id in stale:
            self._retire(agent_id, "vanished")
        return stale

    def assign_agents(self) -> Assignment:
        """Phase 2: compute a fresh agent-to-manager map.

        Override rules read each manager's membership from the previous tick,
        so this must run before redistribute_agents().
        """
        context = AssignmentContext(
            host=self._host,
            agents=self._agents_view,
            managers=self._managers,
        )
        assignment, moves = compute_assignment(context, self._rules)
        self._last_moves = moves
        for move in moves:
            self._events.append(
                {
                    "type": "override",
                    "rule": move.rule,
                    "agent": str(move.agent),
                    "from": move.source.value,
                    "to": move.target.value,
                }
            )
        return assignment

    def redistribute_agents(self, assignment: Assignment) -> None:
        """Phase 3: clear every manager, then add each agent to its mapped manager."""
        for manager in self._managers.values():
            manager.remove_all_agents()
        for agent_id, key in assignment.items():
            self._managers[key].add_agent(self._agents[agent_id])

    def update_managers(self) -> None:
        """Phase 4: update every manager not listed in settings.skipped_managers.

        Managers share one budget, so minerals committed by an earlier
        manager are not spent again by a later one in the same tick.
        """
        skipped = self._settings.skipped_managers
        budget = Budget.from_host(self._host)
        for key, manager in self._managers.items():
            if key in skipped:
                continue
            manager.update(budget)

    def snapshot(self) -> dict[str, Any]:
        """Current membership of every manager, JSON-serializable."""
        return {
            "agents": len(self._agents),
            "managers": {
                key.value: [str(agent_id) for agent_id in manager.member_ids()]
                for key, manager in self._managers.items()
            },
        }

    # Internals

    def _retire(self, agent_id: AgentId, reason: str) -> None:
        agent = self._agents.pop(agent_id)
        self._by_unit.pop(agent.handle, None)
        for manager in self._managers.values():
            manager.remove_agent(agent)
        agent.retire()
        self._allocator.release(agent_id)
        self._events.append({"type": "agent_retired", "agent": str(agent_id), "reason": reason})

    def _retire_all(self, reason: str) -> int:
        count = len(self._agents)
        for agent_id in list(self._agents):
            self._retire(agent_id, reason)
        self._by_unit.clear()
        for manager in self._managers.values():
            manager.remove_all_agents()
        return count

    def _draw(self) -> None:
        if not self._settings.draw_diagnostics or self._sink is None:
            return
        self._sink.draw_text(300, 0, f"Tick {self._tick}, agents={len(self._agents)}")
        for row, manager in enumerate(self._managers.values()):
            manager.draw(self._sink, 5, 10 + 10 * row)

    def _record(self, timings: dict[str, float]) -> None:
        if self._history is None:
            return
        self._history.record_tick(
            TickRecord(
                tick=self._tick,
                timestamp=time.time(),
                snapshot=self.snapshot(),
                events=self._events,
                phase_timings=timings,
            )
        )


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0
