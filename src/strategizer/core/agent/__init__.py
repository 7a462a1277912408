"""Agents: role-tagged controllers bound to one unit each."""

from strategizer.core.agent.core import (
    ARRIVAL_RADIUS,
    Agent,
    AgentBindError,
    AgentRetiredError,
)
from strategizer.core.agent.models import AgentState, Role, Target
from strategizer.core.agent.operations import classify_role, distance
from strategizer.core.agent.variants import (
    AGENT_VARIANTS,
    CombatUnitAgent,
    DepotAgent,
    ProducerAgent,
    StructureAgent,
    WorkerAgent,
    create_agent,
)

__all__ = [
    "Agent",
    "AgentBindError",
    "AgentRetiredError",
    "ARRIVAL_RADIUS",
    "AgentState",
    "Role",
    "Target",
    "classify_role",
    "distance",
    "AGENT_VARIANTS",
    "WorkerAgent",
    "StructureAgent",
    "DepotAgent",
    "ProducerAgent",
    "CombatUnitAgent",
    "create_agent",
]
