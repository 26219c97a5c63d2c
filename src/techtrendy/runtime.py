"""Application level helpers for assembling pipeline dependencies."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List
import logging

from .config import AppConfig
from .database import EpisodeHistory, Storage, create_storage
from .pipeline import PodcastGenerator
from .selection import TopicSelector
from .sources import (
    CompositeTopicSource,
    HackerNewsTopicSource,
    NewsApiTopicSource,
    StaticTopicSource,
    TopicSource,
)
from .synthesis import ScriptSynthesizer, SpeechSynthesizer

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class GeneratorResources:
    """Container bundling the objects needed to run the generator."""

    generator: PodcastGenerator
    storage: Storage
    owns_storage: bool = True

    def close(self) -> None:
        if self.owns_storage:
            self.storage.dispose()


def create_topic_source(config: AppConfig) -> TopicSource:
    """Build the topic source from the enabled feed names."""

    sources: List[TopicSource] = []
    for name in config.sources.enabled_sources():
        if name == "static":
            sources.append(StaticTopicSource())
        elif name == "hackernews":
            sources.append(HackerNewsTopicSource(timeout=config.sources.timeout))
        elif name == "newsapi":
            sources.append(NewsApiTopicSource(config.sources.news_api_key, timeout=config.sources.timeout))
        else:
            LOGGER.warning("Unknown topic source %r ignored", name)
    if not sources:
        LOGGER.warning("No topic source enabled - using the static topic set")
        return StaticTopicSource()
    if len(sources) == 1:
        return sources[0]
    return CompositeTopicSource(sources)


def create_generator(config: AppConfig, *, storage: Storage | None = None) -> GeneratorResources:
    owns_storage = storage is None
    storage_instance = storage or create_storage(config.storage.database_url, echo=config.storage.echo_sql)
    generator = PodcastGenerator(
        config,
        topic_source=create_topic_source(config),
        selector=TopicSelector(),
        script_synthesizer=ScriptSynthesizer(config.text),
        speech_synthesizer=SpeechSynthesizer(config.speech),
        history=EpisodeHistory(storage_instance, limit=config.storage.history_limit),
    )
    return GeneratorResources(
        generator=generator,
        storage=storage_instance,
        owns_storage=owns_storage,
    )


__all__ = ["GeneratorResources", "create_generator", "create_topic_source"]
