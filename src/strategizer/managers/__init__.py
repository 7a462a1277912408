"""Concrete managers.

Every manager shares the Manager contract and the constructor signature
(host, agents, settings), so the engine can build and drive them uniformly.
"""

from strategizer.managers.combat import CombatManager
from strategizer.managers.construction import ConstructionManager
from strategizer.managers.production import ProductionManager, queue_training
from strategizer.managers.resource import ResourceManager, closest_source, make_agent_gather
from strategizer.managers.scout import ScoutManager
from strategizer.managers.supply import SupplyManager

MANAGER_TYPES = (
    CombatManager,
    ConstructionManager,
    ProductionManager,
    ResourceManager,
    ScoutManager,
    SupplyManager,
)
"""All concrete managers, in update order (matches ManagerKey declaration order)."""

__all__ = [
    "MANAGER_TYPES",
    "CombatManager",
    "ConstructionManager",
    "ProductionManager",
    "ResourceManager",
    "ScoutManager",
    "SupplyManager",
    "closest_source",
    "make_agent_gather",
    "queue_training",
]
