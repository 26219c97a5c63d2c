"""High level orchestration of one podcast generation run."""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from threading import Event, Lock
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple
import asyncio
import logging
import uuid

from ..config import AppConfig
from ..core.errors import (
    AlreadyRunning,
    GenerationCancelled,
    GenerationError,
    MissingConfiguration,
    MissingCredential,
)
from ..core.types import Episode, EpisodeStatus, RoleAssignment, Script
from ..database import EpisodeHistory
from ..selection import TopicSelector
from ..sources import TopicSource

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], None]


class RunStage(str, Enum):
    IDLE = "idle"
    COLLECTING_TOPICS = "collecting_topics"
    SELECTING_TOPICS = "selecting_topics"
    SYNTHESIZING_SCRIPT = "synthesizing_script"
    SYNTHESIZING_AUDIO = "synthesizing_audio"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    FAILED = "failed"


CHECKPOINTS: Dict[RunStage, Tuple[str, int]] = {
    RunStage.COLLECTING_TOPICS: ("Collecting news from online sources", 10),
    RunStage.SELECTING_TOPICS: ("Analysing and selecting top topics", 30),
    RunStage.SYNTHESIZING_SCRIPT: ("Generating podcast script", 50),
    RunStage.SYNTHESIZING_AUDIO: ("Creating AI voices", 70),
    RunStage.FINALIZING: ("Finalizing podcast", 90),
    RunStage.COMPLETED: ("Done!", 100),
}


class ScriptStage(Protocol):
    async def synthesize(self, assignments: Sequence[RoleAssignment]) -> Script:  # pragma: no cover - protocol
        ...


class SpeechStage(Protocol):
    async def synthesize(self, script: Script, *, name: Optional[str] = None) -> str:  # pragma: no cover - protocol
        ...


def episode_title(assignments: Sequence[RoleAssignment], created_at: datetime) -> str:
    """Title built from the first selected topic and a timestamp token."""

    token = int(created_at.timestamp() * 1000)
    for assignment in assignments:
        if assignment.topics:
            return f"Tech Trendy #{token}: {assignment.topics[0].title} a další novinky"
    return f"Tech Trendy #{token}"


class PodcastGenerator:
    """Drive the stages of a run and persist the finished episode.

    Only one run may be active per instance; the run-state flag is owned by
    the instance and guarded by a lock.
    """

    def __init__(
        self,
        config: Optional[AppConfig],
        *,
        topic_source: TopicSource,
        selector: TopicSelector,
        script_synthesizer: ScriptStage,
        speech_synthesizer: SpeechStage,
        history: EpisodeHistory,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._config = config
        self._topic_source = topic_source
        self._selector = selector
        self._script = script_synthesizer
        self._speech = speech_synthesizer
        self._history = history
        self._clock = clock
        self._lock = Lock()
        self._running = False
        self._stage = RunStage.IDLE
        self._cancel_event = Event()

    @property
    def stage(self) -> RunStage:
        with self._lock:
            return self._stage

    def is_running(self) -> bool:
        with self._lock:
            return self._running

    def history(self) -> List[Episode]:
        return self._history.list_episodes()

    def stop(self) -> bool:
        """Ask the active run to stop at the next stage boundary."""

        with self._lock:
            if not self._running:
                return False
            self._cancel_event.set()
            return True

    async def generate_weekly_podcast(self, progress_callback: Optional[ProgressCallback] = None) -> Episode:
        """Run all stages and return the completed episode."""

        with self._lock:
            if self._running:
                raise AlreadyRunning()
            self._validate_config()
            self._running = True
            self._stage = RunStage.IDLE
            self._cancel_event.clear()

        episode = Episode(id=uuid.uuid4().hex, title="", script=None, created_at=self._clock())
        try:
            self._enter(RunStage.COLLECTING_TOPICS, progress_callback)
            topics = await self._topic_source.fetch()
            LOGGER.info("Collected %s candidate topics", len(topics))

            self._enter(RunStage.SELECTING_TOPICS, progress_callback)
            assignments = self._selector.select(topics)

            self._enter(RunStage.SYNTHESIZING_SCRIPT, progress_callback)
            script = await self._script.synthesize(assignments)
            LOGGER.info(
                "Script has %s segments, %s seconds",
                len(script.segments),
                script.metadata.total_duration,
            )

            self._enter(RunStage.SYNTHESIZING_AUDIO, progress_callback)
            audio_url = await self._speech.synthesize(script, name=episode.id)

            self._enter(RunStage.FINALIZING, progress_callback)
            episode.title = episode_title(assignments, episode.created_at)
            episode.script = script
            episode.topics = list(assignments)
            episode.audio_url = audio_url
            episode.duration = script.metadata.total_duration
            episode.status = EpisodeStatus.COMPLETED
            self._history.append(episode)

            self._set_stage(RunStage.COMPLETED)
            self._notify(progress_callback, RunStage.COMPLETED)
            LOGGER.info("Episode %s completed: %s", episode.id, episode.title)
            return episode
        except GenerationError as exc:
            episode.status = EpisodeStatus.ERROR
            self._set_stage(RunStage.FAILED)
            LOGGER.error("Podcast generation failed: %s", exc)
            raise
        except asyncio.CancelledError:
            LOGGER.warning("Podcast generation was cancelled during %s", self._stage.value)
            episode.status = EpisodeStatus.ERROR
            self._set_stage(RunStage.FAILED)
            raise
        except Exception as exc:
            episode.status = EpisodeStatus.ERROR
            self._set_stage(RunStage.FAILED)
            LOGGER.exception("Podcast generation failed unexpectedly: %s", exc)
            raise
        finally:
            with self._lock:
                self._running = False
                self._cancel_event.clear()

    def _validate_config(self) -> None:
        if self._config is None:
            raise MissingConfiguration()
        missing = self._config.missing_credentials()
        if missing:
            raise MissingCredential(missing[0])

    def _enter(self, stage: RunStage, callback: Optional[ProgressCallback]) -> None:
        if self._cancel_event.is_set():
            raise GenerationCancelled(stage.value)
        self._set_stage(stage)
        self._notify(callback, stage)

    def _set_stage(self, stage: RunStage) -> None:
        with self._lock:
            self._stage = stage
        LOGGER.debug("Generation stage: %s", stage.value)

    @staticmethod
    def _notify(callback: Optional[ProgressCallback], stage: RunStage) -> None:
        if callback:
            label, percent = CHECKPOINTS[stage]
            callback(label, percent)


__all__ = ["CHECKPOINTS", "PodcastGenerator", "ProgressCallback", "RunStage", "episode_title"]
