"""strategizer: per-tick agent-to-manager assignment for game bots.

Usage:
    from strategizer import LocalHost, Strategizer, UnitTypes

    host = LocalHost()
    host.spawn(UnitTypes.TERRAN_COMMAND_CENTER)
    host.spawn(UnitTypes.TERRAN_SCV, position=(2.0, 0.0))
    host.add_resource((8.0, 0.0))

    strategizer = Strategizer(host)
    strategizer.on_match_start()
    for _ in range(100):
        strategizer.advance()
        host.step()
    strategizer.on_match_end()
"""

__version__ = "0.1.0"

# Configuration
from strategizer.config import StrategizerSettings

# Core primitives
from strategizer.core import (
    Agent,
    AgentBindError,
    AgentId,
    AgentRetiredError,
    AgentState,
    Manager,
    ManagerKey,
    Role,
    Target,
    classify_role,
)

# Engine
from strategizer.engine import (
    AssignmentRule,
    ExpansionRule,
    Strategizer,
    SupplyPressureRule,
)

# Host
from strategizer.host import (
    DiagnosticSink,
    Host,
    LocalHost,
    Unit,
    UnitType,
    UnitTypes,
)

# Managers
from strategizer.managers import (
    CombatManager,
    ConstructionManager,
    ProductionManager,
    ResourceManager,
    ScoutManager,
    SupplyManager,
)

# Tracing
from strategizer.tracing import HistoryStore, InMemoryHistoryStore, TickRecord

__all__ = [
    # Version
    "__version__",
    # Config
    "StrategizerSettings",
    # Core
    "AgentId",
    "Agent",
    "AgentBindError",
    "AgentRetiredError",
    "AgentState",
    "Role",
    "Target",
    "classify_role",
    "Manager",
    "ManagerKey",
    # Engine
    "Strategizer",
    "AssignmentRule",
    "SupplyPressureRule",
    "ExpansionRule",
    # Host
    "Host",
    "Unit",
    "DiagnosticSink",
    "UnitType",
    "UnitTypes",
    "LocalHost",
    # Managers
    "CombatManager",
    "ConstructionManager",
    "ProductionManager",
    "ResourceManager",
    "ScoutManager",
    "SupplyManager",
    # Tracing
    "HistoryStore",
    "InMemoryHistoryStore",
    "TickRecord",
]
