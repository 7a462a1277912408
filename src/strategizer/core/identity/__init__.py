"""Agent identity: lightweight arena keys."""

from strategizer.core.identity.models import AgentId

__all__ = [
    "AgentId",
]
