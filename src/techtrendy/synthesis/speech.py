"""Per-segment speech synthesis for a finished script."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Protocol
import asyncio
import logging

from ..clients import ElevenLabsClient, VoiceSettings
from ..config import SpeechProviderConfig
from ..core.errors import MissingCredential
from ..core.roles import PERSONAS, Role
from ..core.types import DialogueSegment, Script

LOGGER = logging.getLogger(__name__)

MIN_SEGMENT_CHARS = 10
VOICE_SETTINGS = VoiceSettings(stability=0.5, similarity_boost=0.75, style=0.3, use_speaker_boost=True)


class SpeechClient(Protocol):
    async def synthesize(
        self,
        *,
        voice_id: str,
        text: str,
        model_id: str,
        voice_settings: VoiceSettings,
    ) -> bytes:  # pragma: no cover - protocol
        ...


def voice_for(role: Role) -> Optional[str]:
    persona = PERSONAS.get(role)
    return persona.voice_id if persona else None


def placeholder_reference(now: Optional[datetime] = None) -> str:
    """Synthetic audio reference used when nothing could be synthesised."""

    moment = now or datetime.now(timezone.utc)
    return f"https://example.com/podcast-{int(moment.timestamp() * 1000)}.mp3"


def speakable_segments(script: Script) -> List[DialogueSegment]:
    """Segments that are sent for synthesis: hosts only, no short snippets."""

    return [
        segment
        for segment in script.segments
        if segment.role.is_host and len(segment.text.strip()) >= MIN_SEGMENT_CHARS
    ]


class SpeechSynthesizer:
    """Request audio for every speakable segment and store the result."""

    def __init__(
        self,
        config: SpeechProviderConfig,
        *,
        client: Optional[SpeechClient] = None,
    ) -> None:
        self._config = config
        self._client = client

    async def synthesize(self, script: Script, *, name: Optional[str] = None) -> str:
        """Return an audio reference for ``script``.

        Failed segments are skipped. Without a single synthesised segment a
        placeholder reference is returned instead of raising.
        """

        if not (self._config.api_key or "").strip():
            raise MissingCredential("speech")
        segments = speakable_segments(script)
        skipped = len(script.segments) - len(segments)
        if skipped:
            LOGGER.debug("Skipping %s narrator or too short segments", skipped)

        if self._client is not None:
            chunks = await self._collect(self._client, segments)
        else:
            # one HTTP client per run, its connection pool is bound to the running loop
            client = self._open_client()
            try:
                chunks = await self._collect(client, segments)
            finally:
                await client.aclose()

        if not chunks:
            LOGGER.warning("No audio could be synthesised, using placeholder reference")
            return placeholder_reference()
        LOGGER.info("Synthesised %s of %s segments", len(chunks), len(segments))
        target = await asyncio.to_thread(self._write_audio, chunks, name)
        return str(target)

    async def _collect(self, client: SpeechClient, segments: List[DialogueSegment]) -> List[bytes]:
        chunks: List[bytes] = []
        for index, segment in enumerate(segments, start=1):
            voice_id = voice_for(segment.role)
            if voice_id is None:
                continue
            try:
                audio = await client.synthesize(
                    voice_id=voice_id,
                    text=segment.text,
                    model_id=self._config.model,
                    voice_settings=VOICE_SETTINGS,
                )
            except Exception as exc:
                LOGGER.warning(
                    "Speech synthesis failed for segment %s/%s (%s): %s",
                    index,
                    len(segments),
                    segment.role.value,
                    exc,
                )
                continue
            chunks.append(audio)
        return chunks

    def _write_audio(self, chunks: List[bytes], name: Optional[str]) -> Path:
        target_dir = Path(self._config.output_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        stem = name or f"podcast-{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
        target = target_dir / f"{stem}.mp3"
        # MP3 frames can be concatenated as they are
        with target.open("wb") as fh:
            for chunk in chunks:
                fh.write(chunk)
        return target

    def _open_client(self) -> ElevenLabsClient:
        return ElevenLabsClient(
            self._config.base_url,
            self._config.api_key or "",
            timeout=self._config.timeout,
        )


__all__ = [
    "MIN_SEGMENT_CHARS",
    "SpeechClient",
    "SpeechSynthesizer",
    "VOICE_SETTINGS",
    "placeholder_reference",
    "speakable_segments",
    "voice_for",
]
