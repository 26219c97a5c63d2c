"""Core domain types shared by all pipeline stages."""
from __future__ import annotations

from .errors import (
    AlreadyRunning,
    GenerationCancelled,
    GenerationError,
    InsufficientTopics,
    MissingConfiguration,
    MissingCredential,
)
from .roles import HOST_ROLES, PERSONAS, Persona, Role, resolve_role
from .types import (
    DialogueSegment,
    Episode,
    EpisodeStatus,
    RoleAssignment,
    Script,
    ScriptMetadata,
    SegmentKind,
    Topic,
    count_words,
)

__all__ = [
    "AlreadyRunning",
    "DialogueSegment",
    "Episode",
    "EpisodeStatus",
    "GenerationCancelled",
    "GenerationError",
    "HOST_ROLES",
    "InsufficientTopics",
    "MissingConfiguration",
    "MissingCredential",
    "PERSONAS",
    "Persona",
    "Role",
    "RoleAssignment",
    "Script",
    "ScriptMetadata",
    "SegmentKind",
    "Topic",
    "count_words",
    "resolve_role",
]
