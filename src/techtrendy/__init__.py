"""Automatický generátor týdenního tech podcastu Tech Trendy."""
from __future__ import annotations

from .config import AppConfig, load_config
from .core import (
    AlreadyRunning,
    DialogueSegment,
    Episode,
    EpisodeStatus,
    GenerationCancelled,
    GenerationError,
    InsufficientTopics,
    MissingConfiguration,
    MissingCredential,
    Role,
    RoleAssignment,
    Script,
    SegmentKind,
    Topic,
)
from .database import EpisodeHistory, Storage, create_storage
from .parsing import parse_script
from .pipeline import PodcastGenerator, RunStage
from .runtime import GeneratorResources, create_generator
from .selection import TopicSelector
from .sources import StaticTopicSource
from .synthesis import ScriptSynthesizer, SpeechSynthesizer, fallback_script

__all__ = [
    "AlreadyRunning",
    "AppConfig",
    "DialogueSegment",
    "Episode",
    "EpisodeHistory",
    "EpisodeStatus",
    "GenerationCancelled",
    "GenerationError",
    "GeneratorResources",
    "InsufficientTopics",
    "MissingConfiguration",
    "MissingCredential",
    "PodcastGenerator",
    "Role",
    "RoleAssignment",
    "RunStage",
    "Script",
    "ScriptSynthesizer",
    "SegmentKind",
    "SpeechSynthesizer",
    "StaticTopicSource",
    "Storage",
    "Topic",
    "TopicSelector",
    "create_generator",
    "create_storage",
    "fallback_script",
    "load_config",
    "parse_script",
]
