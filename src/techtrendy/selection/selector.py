"""Ranking of candidate topics and their distribution among the hosts."""
from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from ..core.errors import InsufficientTopics
from ..core.roles import Role
from ..core.types import RoleAssignment, Topic

LOGGER = logging.getLogger(__name__)

Partition = Tuple[Tuple[Role, Tuple[int, ...]], ...]

# Positions in the ranked list. The trend analyst gets the top story and a
# lower ranked future oriented one, the technical expert the next two and the
# product specialist one mid/low item.
DEFAULT_PARTITION: Partition = (
    (Role.PETR, (0, 4)),
    (Role.LUBO, (1, 2)),
    (Role.JARDA, (3,)),
)


class TopicSelector:
    """Sort topics by relevance and hand them out using a static index map."""

    def __init__(self, partition: Optional[Mapping[Role, Sequence[int]] | Partition] = None) -> None:
        if partition is None:
            partition = DEFAULT_PARTITION
        items = partition.items() if isinstance(partition, Mapping) else partition
        normalized: List[Tuple[Role, Tuple[int, ...]]] = []
        for role, indices in items:
            if not role.is_host:
                raise ValueError("Topics can only be assigned to hosts")
            if any(index < 0 for index in indices):
                raise ValueError(f"Negative topic index for role {role.value}")
            normalized.append((role, tuple(indices)))
        if not normalized:
            raise ValueError("Partition must assign topics to at least one role")
        self._partition: Partition = tuple(normalized)

    @property
    def required_topics(self) -> int:
        return max((max(indices) + 1 for _, indices in self._partition if indices), default=0)

    def rank(self, topics: Sequence[Topic]) -> List[Topic]:
        # sorted() is stable, reverse=True keeps ties in fetch order
        return sorted(topics, key=lambda topic: topic.relevance_score, reverse=True)

    def select(self, topics: Sequence[Topic]) -> List[RoleAssignment]:
        required = self.required_topics
        if len(topics) < required:
            raise InsufficientTopics(required=required, available=len(topics))
        ranked = self.rank(topics)
        assignments = [
            RoleAssignment(role=role, topics=tuple(ranked[index] for index in indices))
            for role, indices in self._partition
        ]
        LOGGER.debug(
            "Assigned topics: %s",
            {assignment.role.value: [topic.title for topic in assignment.topics] for assignment in assignments},
        )
        return assignments


__all__ = ["DEFAULT_PARTITION", "Partition", "TopicSelector"]
