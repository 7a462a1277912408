"""Tests for agent-to-manager assignment.

Critical Invariants:
- Every agent starts on its role's default route
- Each override moves at most one worker per tick
- A manager already holding its worker keeps that same worker
- Earlier rules win when rules compete for the last worker
"""

import pytest

from strategizer import LocalHost, Strategizer, StrategizerSettings, UnitTypes
from strategizer.core.agent import Role
from strategizer.core.identity import AgentId
from strategizer.core.manager import ManagerKey
from strategizer.engine import (
    DEFAULT_ROUTES,
    AssignmentContext,
    ExpansionRule,
    SupplyPressureRule,
    WorkerOverride,
    compute_assignment,
    default_rules,
    pick_worker,
    route_by_role,
)
from strategizer.host import OrderKind


def _workers_in(strategizer, key):
    return strategizer.manager(key).num_agents(Role.WORKER)


def _worker_ids(strategizer, key):
    return [agent.id for agent in strategizer.manager(key).agents(Role.WORKER)]


# Default routing


def test_default_routes_cover_every_role():
    assert set(DEFAULT_ROUTES) == set(Role)


def test_route_by_role(host, strategizer):
    host.set_supply(used=0, total=100)
    for unit_type in [
        UnitTypes.TERRAN_SCV,
        UnitTypes.TERRAN_COMMAND_CENTER,
        UnitTypes.TERRAN_BARRACKS,
        UnitTypes.TERRAN_MARINE,
    ]:
        host.spawn(unit_type)

    strategizer.discover_agents()
    assignment = route_by_role(strategizer.agents.values())

    assert list(assignment.values()) == [
        ManagerKey.RESOURCE,
        ManagerKey.PRODUCTION,
        ManagerKey.COMBAT,
        ManagerKey.COMBAT,
    ]


def test_no_pressure_keeps_default_routes(host, strategizer, opening):
    """Headroom 6 is not below the threshold and 14 used is not above 20."""
    host.set_supply(used=14, total=20)

    strategizer.advance()

    assert strategizer.last_moves == []
    assert _workers_in(strategizer, ManagerKey.RESOURCE) == 10
    assert _workers_in(strategizer, ManagerKey.SUPPLY) == 0
    assert strategizer.manager(ManagerKey.PRODUCTION).num_agents(Role.DEPOT) == 1


# Supply pressure


def test_supply_pressure_moves_exactly_one_worker(host, strategizer, opening):
    """CRITICAL: Headroom 5 moves one worker; the other nine keep gathering."""
    host.set_supply(used=15, total=20)

    strategizer.advance()

    assert _workers_in(strategizer, ManagerKey.SUPPLY) == 1
    assert _workers_in(strategizer, ManagerKey.RESOURCE) == 9
    [move] = strategizer.last_moves
    assert move.rule == "supply_pressure"
    assert move.source is ManagerKey.RESOURCE
    assert move.target is ManagerKey.SUPPLY


def test_supply_pressure_holds_steady(host, strategizer, opening):
    host.set_supply(used=15, total=20)

    for _ in range(5):
        strategizer.advance()

    assert _workers_in(strategizer, ManagerKey.SUPPLY) == 1


def test_supply_pressure_released_when_relieved(host, strategizer, opening):
    host.set_supply(used=15, total=20)
    strategizer.advance()

    host.set_supply(used=15, total=28)
    strategizer.advance()

    assert _workers_in(strategizer, ManagerKey.SUPPLY) == 0
    assert _workers_in(strategizer, ManagerKey.RESOURCE) == 10


# Expansion


def test_expansion_retains_same_worker(host, strategizer, opening):
    """CRITICAL: Combat keeps its single worker instead of swapping it.

    Why: Re-picking each tick would pull a different worker off its
    construction job every frame.
    """
    host.set_supply(used=21, total=40)
    strategizer.advance()
    [first] = strategizer.manager(ManagerKey.COMBAT).agents(Role.WORKER)

    for _ in range(3):
        strategizer.advance()
        workers = list(strategizer.manager(ManagerKey.COMBAT).agents(Role.WORKER))
        assert [w.id for w in workers] == [first.id]


def test_expansion_does_not_fire_above_cap(host, strategizer, opening):
    host.set_supply(used=21, total=40)
    strategizer.discover_agents()
    combat = strategizer.manager(ManagerKey.COMBAT)
    workers = [a for a in strategizer.agents.values() if a.role is Role.WORKER]
    combat.add_agent(workers[0])
    combat.add_agent(workers[1])

    assignment = strategizer.assign_agents()

    assert strategizer.last_moves == []
    assert all(
        key is ManagerKey.RESOURCE
        for agent_id, key in assignment.items()
        if strategizer.agents[agent_id].role is Role.WORKER
    )


def test_supply_rule_wins_the_last_worker(host, strategizer):
    """CRITICAL: With one worker and both triggers, supply takes it."""
    host.spawn(UnitTypes.TERRAN_SCV)
    host.set_supply(used=21, total=22)

    strategizer.advance()

    assert _workers_in(strategizer, ManagerKey.SUPPLY) == 1
    assert _workers_in(strategizer, ManagerKey.COMBAT) == 0
    assert [m.rule for m in strategizer.last_moves] == ["supply_pressure"]


def test_both_rules_fire_with_enough_workers(host, strategizer, opening):
    host.set_supply(used=21, total=22)

    strategizer.advance()

    assert _workers_in(strategizer, ManagerKey.SUPPLY) == 1
    assert _workers_in(strategizer, ManagerKey.COMBAT) == 1
    assert _workers_in(strategizer, ManagerKey.RESOURCE) == 8


def test_supply_pressure_leaves_combat_builder_in_place(populate):
    """CRITICAL: A worker combat already holds is not pulled into supply.

    Why: Taking it would strand its pending producer order and have combat
    order a second producer with a fresh worker.
    """
    host = LocalHost(minerals=1000)
    scvs, _ = populate(host)
    strategizer = Strategizer(host, StrategizerSettings(_env_file=None))
    strategizer.on_match_start()

    host.set_supply(used=21, total=40)
    strategizer.advance()
    [builder] = _worker_ids(strategizer, ManagerKey.COMBAT)

    host.set_supply(used=21, total=22)
    strategizer.advance()
    [combat_worker] = _worker_ids(strategizer, ManagerKey.COMBAT)
    [supply_worker] = _worker_ids(strategizer, ManagerKey.SUPPLY)

    orders = [order for scv in scvs for order in scv.orders if order.kind is OrderKind.BUILD]
    built = [order.unit_type for order in orders]
    assert combat_worker == builder
    assert supply_worker != builder
    assert built.count(UnitTypes.TERRAN_BARRACKS) == 1
    assert built.count(UnitTypes.TERRAN_SUPPLY_DEPOT) == 1


def test_no_workers_no_moves(host, strategizer):
    host.spawn(UnitTypes.TERRAN_COMMAND_CENTER)
    host.set_supply(used=21, total=22)

    strategizer.advance()

    assert strategizer.last_moves == []


# Rule objects


def test_rule_thresholds_are_strict():
    supply = SupplyPressureRule(name="s", target=ManagerKey.SUPPLY, worker_cap=1, threshold=6)
    expansion = ExpansionRule(name="e", target=ManagerKey.COMBAT, worker_cap=1, threshold=20)
    host = LocalHost()

    host.set_supply(used=14, total=20)
    assert not supply.triggered(host)
    host.set_supply(used=15, total=20)
    assert supply.triggered(host)

    host.set_supply(used=20, total=40)
    assert not expansion.triggered(host)
    host.set_supply(used=21, total=40)
    assert expansion.triggered(host)


def test_default_rules_follow_settings(settings):
    tuned = settings.model_copy(update={"expansion_supply_threshold": 30})
    supply, expansion = default_rules(tuned)
    assert supply.target is ManagerKey.SUPPLY
    assert expansion.threshold == 30


def test_pick_worker_prefers_given_ids(host, bind):
    agents = bind([host.spawn(UnitTypes.TERRAN_SCV) for _ in range(3)])
    assignment = {agent_id: ManagerKey.RESOURCE for agent_id in agents}

    assert pick_worker(assignment, agents, ManagerKey.RESOURCE) == AgentId(0)
    assert pick_worker(assignment, agents, ManagerKey.RESOURCE, [AgentId(2)]) == AgentId(2)
    assert pick_worker(assignment, agents, ManagerKey.SUPPLY) is None


def test_pick_worker_skips_held_workers(host, bind):
    """Workers another override manager held are only taken as a last resort."""
    agents = bind([host.spawn(UnitTypes.TERRAN_SCV) for _ in range(2)])
    assignment = {agent_id: ManagerKey.RESOURCE for agent_id in agents}

    held = {AgentId(0)}
    assert pick_worker(assignment, agents, ManagerKey.RESOURCE, held=held) == AgentId(1)
    assert pick_worker(assignment, agents, ManagerKey.RESOURCE, [AgentId(0)], held) == AgentId(0)

    del assignment[AgentId(1)]
    assert pick_worker(assignment, agents, ManagerKey.RESOURCE, held=held) == AgentId(0)


def test_worker_override_needs_a_trigger():
    with pytest.raises(TypeError):
        WorkerOverride(name="bare", target=ManagerKey.SUPPLY, worker_cap=1)


def test_custom_rules_replace_defaults(host, opening, settings):
    """Passing rules=() disables every override."""
    host.set_supply(used=21, total=22)
    strategizer = Strategizer(host, settings, rules=())
    strategizer.on_match_start()

    strategizer.advance()

    assert strategizer.last_moves == []
    assert _workers_in(strategizer, ManagerKey.RESOURCE) == 10


def test_compute_assignment_is_deterministic(host, strategizer, opening):
    host.set_supply(used=21, total=22)
    strategizer.discover_agents()
    context = AssignmentContext(host=host, agents=strategizer.agents, managers=strategizer.managers)
    rules = default_rules(strategizer.settings)

    first = compute_assignment(context, rules)
    second = compute_assignment(context, rules)

    assert first == second
    assert list(first[0]) == list(strategizer.agents)
