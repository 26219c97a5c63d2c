"""Script and speech synthesis stages."""
from __future__ import annotations

from .script import (
    SYSTEM_INSTRUCTION,
    ScriptGenerationError,
    ScriptSynthesizer,
    TextCompletionClient,
    build_prompt,
    fallback_script,
)
from .speech import (
    MIN_SEGMENT_CHARS,
    VOICE_SETTINGS,
    SpeechClient,
    SpeechSynthesizer,
    placeholder_reference,
    speakable_segments,
    voice_for,
)

__all__ = [
    "MIN_SEGMENT_CHARS",
    "SYSTEM_INSTRUCTION",
    "ScriptGenerationError",
    "ScriptSynthesizer",
    "SpeechClient",
    "SpeechSynthesizer",
    "TextCompletionClient",
    "VOICE_SETTINGS",
    "build_prompt",
    "fallback_script",
    "placeholder_reference",
    "speakable_segments",
    "voice_for",
]
