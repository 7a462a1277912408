"""Assignment engine.

Architecture Note:
    engine/ is the stateful service layer. It owns the agent table and the
    allocator, builds the managers, and is the only place agents are created
    or retired.
"""

from strategizer.engine.allocator import AgentAllocator
from strategizer.engine.assignment import (
    DEFAULT_ROUTES,
    Assignment,
    AssignmentContext,
    AssignmentRule,
    ExpansionRule,
    Move,
    SupplyPressureRule,
    WorkerOverride,
    compute_assignment,
    default_rules,
    pick_worker,
    route_by_role,
)
from strategizer.engine.strategizer import Strategizer

__all__ = [
    "Strategizer",
    "AgentAllocator",
    "Assignment",
    "AssignmentContext",
    "AssignmentRule",
    "DEFAULT_ROUTES",
    "ExpansionRule",
    "Move",
    "SupplyPressureRule",
    "WorkerOverride",
    "compute_assignment",
    "default_rules",
    "pick_worker",
    "route_by_role",
]
