"""Tests for the supply manager.

Critical Invariants:
- Member workers are sent to build while projected headroom is below threshold
- Supply structures under construction count towards projected headroom
- Workers already building are not re-ordered
"""

from strategizer import StrategizerSettings
from strategizer.core.agent import AgentState, Target
from strategizer.core.identity import AgentId
from strategizer.host import OrderKind, UnitTypes
from strategizer.managers import SupplyManager


def _supply_manager(host, settings, agents):
    manager = SupplyManager(host, agents, settings)
    for agent in agents.values():
        manager.add_agent(agent)
    return manager


def test_low_headroom_orders_supply_structure(host, settings, bind):
    """CRITICAL: Headroom below threshold sends the worker to build."""
    scv = host.spawn(UnitTypes.TERRAN_SCV, (3.0, 3.0))
    host.set_supply(used=9, total=10)
    manager = _supply_manager(host, settings, bind([scv]))

    manager.update()

    assert scv.orders[0].kind is OrderKind.BUILD
    assert scv.orders[0].unit_type is UnitTypes.TERRAN_SUPPLY_DEPOT
    assert scv.orders[0].position == (3.0, 3.0)


def test_headroom_at_threshold_does_nothing(host, settings, bind):
    scv = host.spawn(UnitTypes.TERRAN_SCV)
    host.set_supply(used=4, total=10)
    manager = _supply_manager(host, settings, bind([scv]))

    manager.update()

    assert scv.orders == []
    assert manager.projected_headroom() == settings.supply_headroom_threshold


def test_pending_supply_structure_counts_as_headroom(host, settings, bind):
    """CRITICAL: A depot under construction is not duplicated."""
    scv = host.spawn(UnitTypes.TERRAN_SCV)
    host.spawn(UnitTypes.TERRAN_SUPPLY_DEPOT, completed=False)
    host.set_supply(used=9, total=10)
    manager = _supply_manager(host, settings, bind([scv]))

    manager.update()

    assert manager.projected_headroom() == 9
    assert scv.orders == []


def test_building_worker_is_not_reordered(host, settings, bind):
    scv = host.spawn(UnitTypes.TERRAN_SCV)
    host.set_supply(used=9, total=10)
    agents = bind([scv])
    manager = _supply_manager(host, settings, agents)

    manager.update()
    manager.update()

    assert len(scv.orders) == 1
    assert agents[AgentId(0)].state is AgentState.AWAIT_BUILD


def test_worker_returns_to_build_after_finishing(host, settings, bind):
    scv = host.spawn(UnitTypes.TERRAN_SCV)
    host.set_supply(used=9, total=10)
    agents = bind([scv])
    manager = _supply_manager(host, settings, agents)
    manager.update()

    scv.stop()
    manager.update()  # AwaitBuild notices the idle unit
    manager.update()

    assert [o.kind for o in scv.orders] == [OrderKind.BUILD, OrderKind.BUILD]


def test_threshold_is_configurable(host, bind):
    scv = host.spawn(UnitTypes.TERRAN_SCV)
    host.set_supply(used=9, total=10)
    manager = _supply_manager(
        host, StrategizerSettings(_env_file=None, supply_headroom_threshold=1), bind([scv])
    )

    manager.update()

    assert scv.orders == []


def test_configured_structure_is_built(host, bind):
    scv = host.spawn(UnitTypes.TERRAN_SCV)
    host.set_supply(used=9, total=10)
    agents = bind([scv])
    manager = _supply_manager(
        host,
        StrategizerSettings(_env_file=None, supply_structure="Terran Command Center"),
        agents,
    )

    manager.update()

    assert agents[AgentId(0)].target == Target(unit_type=UnitTypes.TERRAN_COMMAND_CENTER)
