"""Typed domain objects for the podcast generation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .roles import HOST_ROLES, Role


class SegmentKind(str, Enum):
    INTRO = "intro"
    DIALOG = "dialog"
    OUTRO = "outro"
    TRANSITION = "transition"


class EpisodeStatus(str, Enum):
    GENERATING = "generating"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Topic:
    """A candidate news item with a relevance score between 0 and 1."""

    title: str
    description: str
    source: str
    url: str
    relevance_score: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.relevance_score <= 1.0:
            raise ValueError(f"Relevance score must be within [0, 1], got {self.relevance_score!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "source": self.source,
            "url": self.url,
            "relevance_score": self.relevance_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Topic":
        return cls(
            title=data["title"],
            description=data.get("description", ""),
            source=data.get("source", ""),
            url=data.get("url", ""),
            relevance_score=float(data["relevance_score"]),
        )


@dataclass(frozen=True, slots=True)
class RoleAssignment:
    """Topics one host is going to talk about."""

    role: Role
    topics: Tuple[Topic, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role.value, "topics": [topic.to_dict() for topic in self.topics]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoleAssignment":
        return cls(
            role=Role(data["role"]),
            topics=tuple(Topic.from_dict(item) for item in data.get("topics", [])),
        )


def count_words(text: str) -> int:
    return len(text.split())


@dataclass(frozen=True, slots=True)
class DialogueSegment:
    """One contiguous piece of speech attributed to a single role."""

    role: Role
    text: str
    duration: int
    kind: SegmentKind = SegmentKind.DIALOG

    @property
    def word_count(self) -> int:
        return count_words(self.text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role.value,
            "text": self.text,
            "duration": self.duration,
            "kind": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DialogueSegment":
        return cls(
            role=Role(data["role"]),
            text=data["text"],
            duration=int(data["duration"]),
            kind=SegmentKind(data.get("kind", SegmentKind.DIALOG.value)),
        )


@dataclass(frozen=True, slots=True)
class ScriptMetadata:
    total_duration: int
    word_count: int
    participant_count: int


@dataclass(frozen=True, slots=True)
class Script:
    """Ordered dialogue segments plus metadata derived from them."""

    segments: Tuple[DialogueSegment, ...]
    metadata: ScriptMetadata

    @classmethod
    def from_segments(cls, segments: Sequence[DialogueSegment]) -> "Script":
        """Build a script and recompute its metadata from ``segments``."""

        segments = tuple(segments)
        metadata = ScriptMetadata(
            total_duration=sum(segment.duration for segment in segments),
            word_count=sum(segment.word_count for segment in segments),
            participant_count=len(HOST_ROLES),
        )
        return cls(segments=segments, metadata=metadata)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "segments": [segment.to_dict() for segment in self.segments],
            "metadata": {
                "total_duration": self.metadata.total_duration,
                "word_count": self.metadata.word_count,
                "participant_count": self.metadata.participant_count,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Script":
        return cls.from_segments([DialogueSegment.from_dict(item) for item in data.get("segments", [])])


@dataclass(slots=True)
class Episode:
    """A generated podcast episode as stored in the history."""

    id: str
    title: str
    script: Optional[Script]
    topics: List[RoleAssignment] = field(default_factory=list)
    audio_url: Optional[str] = None
    duration: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: EpisodeStatus = EpisodeStatus.GENERATING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "script": self.script.to_dict() if self.script else None,
            "audio_url": self.audio_url,
            "topics": [assignment.to_dict() for assignment in self.topics],
            "duration": self.duration,
            "created_at": self.created_at.isoformat(),
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Episode":
        script_data = data.get("script")
        return cls(
            id=data["id"],
            title=data["title"],
            script=Script.from_dict(script_data) if script_data else None,
            topics=[RoleAssignment.from_dict(item) for item in data.get("topics", [])],
            audio_url=data.get("audio_url"),
            duration=int(data.get("duration", 0)),
            created_at=datetime.fromisoformat(data["created_at"]),
            status=EpisodeStatus(data.get("status", EpisodeStatus.COMPLETED.value)),
        )


__all__ = [
    "DialogueSegment",
    "Episode",
    "EpisodeStatus",
    "RoleAssignment",
    "Script",
    "ScriptMetadata",
    "SegmentKind",
    "Topic",
    "count_words",
]
