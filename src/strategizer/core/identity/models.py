"""Agent identity models.

Usage:
    agent_id = AgentId(index=3, generation=1)
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AgentId:
    """Arena key for an agent with generation for safe slot reuse.

    Managers and the assignment map hold AgentIds, never agents. A retired
    agent's slot is reissued with a higher generation, so an old id stops
    resolving instead of pointing at the wrong agent.
    """

    index: int = 0
    generation: int = 0

    def __hash__(self) -> int:
        return hash((self.index, self.generation))

    def __str__(self) -> str:
        return f"{self.index}:{self.generation}"
