"""Topic sources."""
from __future__ import annotations

from .topics import (
    REPRESENTATIVE_TOPICS,
    CompositeTopicSource,
    HackerNewsTopicSource,
    NewsApiTopicSource,
    StaticTopicSource,
    TopicSource,
    TopicSourceError,
)

__all__ = [
    "CompositeTopicSource",
    "HackerNewsTopicSource",
    "NewsApiTopicSource",
    "REPRESENTATIVE_TOPICS",
    "StaticTopicSource",
    "TopicSource",
    "TopicSourceError",
]
