"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from strategizer import LocalHost, Strategizer, StrategizerSettings, UnitTypes
from strategizer.core.agent import create_agent
from strategizer.core.identity import AgentId


@pytest.fixture
def host():
    """Empty LocalHost with a small mineral stockpile."""
    return LocalHost(minerals=50)


@pytest.fixture
def settings():
    """Default settings, isolated from STRATEGIZER_* environment variables."""
    return StrategizerSettings(_env_file=None)


@pytest.fixture
def strategizer(host, settings):
    """Strategizer over the host fixture, match already started."""
    engine = Strategizer(host, settings)
    engine.on_match_start()
    return engine


def _populate(host: LocalHost, workers: int = 10, depots: int = 1, fields: int = 4):
    """Spawn a standard opening: depots at the origin, workers and fields nearby."""
    for _ in range(depots):
        host.spawn(UnitTypes.TERRAN_COMMAND_CENTER, (0.0, 0.0))
    scvs = [host.spawn(UnitTypes.TERRAN_SCV, (1.0 + i, 0.0)) for i in range(workers)]
    minerals = [host.add_resource((10.0, float(i))) for i in range(fields)]
    return scvs, minerals


@pytest.fixture
def opening(host):
    """Host populated with 10 workers, 1 depot and 4 mineral fields."""
    return _populate(host)


@pytest.fixture
def populate():
    """Callable spawning a custom opening: populate(host, workers=, depots=, fields=)."""
    return _populate


def _bind(units):
    """Bind units to agents with sequential ids, as the engine's table would."""
    table = {}
    for index, unit in enumerate(units):
        agent = create_agent(AgentId(index), unit)
        table[agent.id] = agent
    return table


@pytest.fixture
def bind():
    """Callable building an agent table from units: bind(units) -> {AgentId: Agent}."""
    return _bind
