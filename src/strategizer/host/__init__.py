"""Host interface and backends."""

from strategizer.host.local import LocalHost, LocalUnit, Order, OrderKind
from strategizer.host.protocol import DiagnosticSink, Host, Unit
from strategizer.host.unit_types import UnitType, UnitTypes

__all__ = [
    "Host",
    "Unit",
    "DiagnosticSink",
    "UnitType",
    "UnitTypes",
    "LocalHost",
    "LocalUnit",
    "Order",
    "OrderKind",
]
