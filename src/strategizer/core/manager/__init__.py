"""Manager abstraction: non-owning membership plus a per-tick update."""

from strategizer.core.manager.core import Manager
from strategizer.core.manager.models import Budget, ManagerKey

__all__ = [
    "Budget",
    "Manager",
    "ManagerKey",
]
