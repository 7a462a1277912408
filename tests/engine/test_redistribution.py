"""Property tests for redistribution.

Critical Invariants:
- After every tick each live agent belongs to exactly one manager
- Manager memberships together cover every live agent and nothing else
- Supply and combat never hold more than one extra worker per tick
"""

from hypothesis import given
from hypothesis import settings as hsettings
from hypothesis import strategies as st

from strategizer import LocalHost, Strategizer, StrategizerSettings, UnitTypes
from strategizer.core.agent import Role
from strategizer.core.manager import ManagerKey

populations = st.fixed_dictionaries(
    {
        "workers": st.integers(min_value=0, max_value=12),
        "depots": st.integers(min_value=0, max_value=2),
        "producers": st.integers(min_value=0, max_value=2),
        "marines": st.integers(min_value=0, max_value=4),
        "fields": st.integers(min_value=0, max_value=4),
    }
)
supply_states = st.lists(
    st.tuples(st.integers(min_value=0, max_value=60), st.integers(min_value=0, max_value=60)),
    min_size=1,
    max_size=6,
)


def _build_host(population) -> LocalHost:
    host = LocalHost(minerals=0)
    for _ in range(population["depots"]):
        host.spawn(UnitTypes.TERRAN_COMMAND_CENTER)
    for i in range(population["workers"]):
        host.spawn(UnitTypes.TERRAN_SCV, (float(i), 0.0))
    for _ in range(population["producers"]):
        host.spawn(UnitTypes.TERRAN_BARRACKS, (5.0, 5.0))
    for _ in range(population["marines"]):
        host.spawn(UnitTypes.TERRAN_MARINE, (5.0, 6.0))
    for i in range(population["fields"]):
        host.add_resource((10.0, float(i)))
    return host


def _memberships(strategizer):
    return {key: manager.member_ids() for key, manager in strategizer.managers.items()}


@given(population=populations, supplies=supply_states)
@hsettings(max_examples=60, deadline=None)
def test_every_agent_in_exactly_one_manager(population, supplies):
    """CRITICAL: Assignment is total and exclusive after every tick."""
    host = _build_host(population)
    strategizer = Strategizer(host, StrategizerSettings(_env_file=None))
    strategizer.on_match_start()

    for used, total in supplies:
        host.set_supply(used=used, total=total)
        strategizer.advance()

        memberships = _memberships(strategizer)
        flat = [agent_id for ids in memberships.values() for agent_id in ids]
        assert len(flat) == len(set(flat))
        assert set(flat) == set(strategizer.agents)


@given(population=populations, supplies=supply_states)
@hsettings(max_examples=60, deadline=None)
def test_override_managers_hold_at_most_one_worker(population, supplies):
    """CRITICAL: Each override moves at most one worker, so caps stay tight."""
    host = _build_host(population)
    strategizer = Strategizer(host, StrategizerSettings(_env_file=None))
    strategizer.on_match_start()

    for used, total in supplies:
        host.set_supply(used=used, total=total)
        strategizer.advance()

        assert len(strategizer.last_moves) <= 2
        assert strategizer.manager(ManagerKey.SUPPLY).num_agents(Role.WORKER) <= 1
        assert strategizer.manager(ManagerKey.COMBAT).num_agents(Role.WORKER) <= 1
        assert strategizer.manager(ManagerKey.SCOUT).num_agents() == 0
        assert strategizer.manager(ManagerKey.CONSTRUCTION).num_agents() == 0


@given(population=populations)
@hsettings(max_examples=30, deadline=None)
def test_non_workers_follow_default_routes(population):
    host = _build_host(population)
    host.set_supply(used=59, total=60)
    strategizer = Strategizer(host, StrategizerSettings(_env_file=None))
    strategizer.on_match_start()

    strategizer.advance()

    production = strategizer.manager(ManagerKey.PRODUCTION)
    combat = strategizer.manager(ManagerKey.COMBAT)
    assert production.num_agents(Role.DEPOT) == population["depots"]
    assert combat.num_agents(Role.PRODUCER) == population["producers"]
    assert combat.num_agents(Role.COMBAT) == population["marines"]


@given(population=populations, supplies=supply_states)
@hsettings(max_examples=20, deadline=None)
def test_identical_inputs_give_identical_assignments(population, supplies):
    def run():
        host = _build_host(population)
        strategizer = Strategizer(host, StrategizerSettings(_env_file=None))
        strategizer.on_match_start()
        snapshots = []
        for used, total in supplies:
            host.set_supply(used=used, total=total)
            strategizer.advance()
            snapshots.append(strategizer.snapshot())
        return snapshots

    assert run() == run()
