"""Resource manager: sends workers to gather at the nearest open source."""

from __future__ import annotations

from collections import Counter, deque
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from strategizer.config import StrategizerSettings
from strategizer.core.agent import Agent, AgentState, Role, Target, distance
from strategizer.core.identity import AgentId
from strategizer.core.manager import Budget, Manager, ManagerKey
from strategizer.core.types import Position, UnitHandle

if TYPE_CHECKING:
    from strategizer.host.protocol import DiagnosticSink, Host, Unit


def closest_source(
    position: Position,
    sources: Iterable[Unit],
    load: Mapping[UnitHandle, int],
    cap: int,
) -> Unit | None:
    """Find the nearest source with fewer than cap gatherers.

    Ties keep the host's source order.

    Args:
        position: Where the worker is.
        sources: Candidate resource sources.
        load: Current gatherer count per source handle.
        cap: Gatherers at which a source is saturated.

    Returns:
        The chosen source, or None if every source is saturated.
    """
    open_sources = [s for s in sources if s.exists and load.get(s.handle, 0) < cap]
    return min(open_sources, key=lambda s: distance(position, s.position), default=None)


def make_agent_gather(
    agent: Agent,
    sources: Iterable[Unit],
    load: Counter[UnitHandle],
    cap: int,
) -> bool:
    """Point a worker at the closest open source and switch it to Gather.

    Increments load for the chosen source so later picks in the same tick
    see it.

    Returns:
        True if a source was assigned.
    """
    source = closest_source(agent.position, sources, load, cap)
    if source is None:
        return False
    agent.set_target(Target(unit=source))
    agent.set_state(AgentState.GATHER)
    load[source.handle] += 1
    return True


def _gather_source(agent: Agent) -> Unit | None:
    target = agent.target
    if target is None or target.unit is None or not target.unit.exists:
        return None
    return target.unit


class ResourceManager(Manager):
    """Keeps every member worker gathering.

    Idle workers, and workers whose source ran dry, are sent to the nearest
    source still below the saturation cap. Collection throughput is sampled
    once per update from the host's cumulative gathered-minerals counter.
    """

    KEY = ManagerKey.RESOURCE
    NAME = "ResourceMgr"

    def __init__(
        self, host: Host, agents: Mapping[AgentId, Agent], settings: StrategizerSettings
    ):
        super().__init__(host, agents)
        self._settings = settings
        self._gathered: deque[int] = deque(maxlen=settings.throughput_window)

    def source_load(self) -> Counter[UnitHandle]:
        """Gatherers per source among current members."""
        load: Counter[UnitHandle] = Counter()
        for agent in self.agents(Role.WORKER):
            source = _gather_source(agent)
            if agent.state is AgentState.GATHER and source is not None:
                load[source.handle] += 1
        return load

    def update(self, budget: Budget | None = None) -> None:
        self._gathered.append(self._host.gathered_minerals())

        sources = [s for s in self._host.resource_sources() if s.exists]
        load = self.source_load()
        cap = self._settings.gatherers_per_source
        for agent in self.agents(Role.WORKER):
            if agent.state is AgentState.IDLE or (
                agent.state is AgentState.GATHER and _gather_source(agent) is None
            ):
                make_agent_gather(agent, sources, load, cap)

        super().update(budget)

    def collection_rate(self) -> float:
        """Average minerals gathered per tick over the sampling window."""
        if len(self._gathered) < 2:
            return 0.0
        return (self._gathered[-1] - self._gathered[0]) / (len(self._gathered) - 1)

    def num_workers_gathering(self) -> int:
        """Member workers currently in the Gather state."""
        return sum(1 for a in self.agents(Role.WORKER) if a.state is AgentState.GATHER)

    def draw(self, sink: DiagnosticSink, x: int, y: int) -> None:
        sink.draw_text(
            x,
            y,
            f"{self.NAME}: {len(self)} agents, {self.num_workers_gathering()} gathering, "
            f"{self.collection_rate():.2f}/tick",
        )
