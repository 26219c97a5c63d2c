"""Parsing of generated podcast transcripts into timed dialogue segments."""
from __future__ import annotations

from typing import List, Optional
import logging
import re

from ..core.roles import Role, resolve_role
from ..core.types import DialogueSegment, SegmentKind, count_words

LOGGER = logging.getLogger(__name__)

WORDS_PER_SECOND = 2.5  # 150 words per minute

_STAGE_DIRECTION_PATTERN = re.compile(r"^\*\*\[.*\]\*\*$")
_SPEAKER_PATTERN = re.compile(r"^\*\*(?P<name>[^*\[\]:]+?):\*\*\s*(?P<text>.*)$")


def estimate_duration(text: str) -> int:
    """Estimated reading time of ``text`` in whole seconds."""

    return round(count_words(text) / WORDS_PER_SECOND)


def parse_script(transcript: str) -> List[DialogueSegment]:
    """Parse ``transcript`` into dialogue segments.

    Speaker tags look like ``**Name:** text`` and stage directions like
    ``**[music]**``. Text before the first speaker tag is dropped; a
    transcript without tags yields an empty list.
    """

    segments: List[DialogueSegment] = []
    speaker: Optional[Role] = None
    buffer: List[str] = []

    def flush() -> None:
        if speaker is not None and buffer:
            text = " ".join(buffer).strip()
            if text:
                segments.append(
                    DialogueSegment(
                        role=speaker,
                        text=text,
                        duration=estimate_duration(text),
                        kind=SegmentKind.DIALOG,
                    )
                )
        buffer.clear()

    for raw_line in transcript.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if _STAGE_DIRECTION_PATTERN.match(line):
            flush()
            continue
        match = _SPEAKER_PATTERN.match(line)
        if match:
            flush()
            speaker = resolve_role(match.group("name"))
            trailing = match.group("text").strip()
            if trailing:
                buffer.append(trailing)
            continue
        if speaker is not None:
            buffer.append(line)
    flush()

    if not segments:
        LOGGER.warning("No speaker segments detected in generated transcript")
    return segments


__all__ = ["WORDS_PER_SECOND", "estimate_duration", "parse_script"]
