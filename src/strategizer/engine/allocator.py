"""Agent id allocation service.

AgentAllocator is a stateful service that manages agent id lifecycle.
"""

from __future__ import annotations

from strategizer.core.identity import AgentId


class AgentAllocator:
    """Allocates agent ids with generation tracking for recycling.

    Maintains a free list of released indices with incremented generations so
    slots can be reused without an old id ever resolving to a new agent.
    """

    def __init__(self) -> None:
        self._next_index = 0
        self._free_list: list[tuple[int, int]] = []  # (index, generation)
        self._generations: dict[int, int] = {}

    def allocate(self) -> AgentId:
        """Allocate a new id, reusing released slots when available.

        Reused ids carry the incremented generation recorded at release.

        Returns:
            Newly allocated AgentId.
        """
        if self._free_list:
            index, gen = self._free_list.pop()
            return AgentId(index=index, generation=gen)

        index = self._next_index
        self._next_index += 1
        self._generations[index] = 0
        return AgentId(index=index, generation=0)

    def release(self, agent_id: AgentId) -> None:
        """Return an id for reuse with incremented generation.

        Args:
            agent_id: Live id to release.

        Raises:
            ValueError: If the id is stale or was already released.
        """
        if not self.is_alive(agent_id):
            raise ValueError(f"Cannot release stale agent id {agent_id}")

        new_gen = agent_id.generation + 1
        self._generations[agent_id.index] = new_gen
        self._free_list.append((agent_id.index, new_gen))

    def is_alive(self, agent_id: AgentId) -> bool:
        """Check whether an id is current (allocated and not released).

        Args:
            agent_id: Id to check.

        Returns:
            True if the id's generation matches its slot and the slot is not
            waiting on the free list.
        """
        current_gen = self._generations.get(agent_id.index, -1)
        if current_gen != agent_id.generation:
            return False
        return (agent_id.index, current_gen) not in self._free_list

    def reset(self) -> None:
        """Forget every allocation. Used between matches."""
        self._next_index = 0
        self._free_list.clear()
        self._generations.clear()
