"""Topic selection."""
from __future__ import annotations

from .selector import DEFAULT_PARTITION, Partition, TopicSelector

__all__ = ["DEFAULT_PARTITION", "Partition", "TopicSelector"]
