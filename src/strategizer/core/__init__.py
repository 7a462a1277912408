"""Core functionalities: agents, managers, identities and shared types.

Architecture Note:
    core/ holds the building blocks the engine composes. Agents and managers
    carry per-instance state but never touch each other's; all cross-agent
    bookkeeping lives in engine/.
"""

from strategizer.core.agent import (
    AGENT_VARIANTS,
    Agent,
    AgentBindError,
    AgentRetiredError,
    AgentState,
    CombatUnitAgent,
    DepotAgent,
    ProducerAgent,
    Role,
    Target,
    WorkerAgent,
    classify_role,
    create_agent,
)
from strategizer.core.identity import AgentId
from strategizer.core.manager import Manager, ManagerKey
from strategizer.core.types import Position, UnitHandle

__all__ = [
    # Types
    "Position",
    "UnitHandle",
    # Identity
    "AgentId",
    # Agent
    "Agent",
    "AgentBindError",
    "AgentRetiredError",
    "AgentState",
    "Role",
    "Target",
    "classify_role",
    "create_agent",
    "AGENT_VARIANTS",
    "WorkerAgent",
    "DepotAgent",
    "ProducerAgent",
    "CombatUnitAgent",
    # Manager
    "Manager",
    "ManagerKey",
]
