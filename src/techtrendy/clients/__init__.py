"""Clients for the remote text and speech providers."""
from __future__ import annotations

from .elevenlabs import ElevenLabsClient, SpeechClientError, VoiceSettings
from .gemini import GeminiTextClient, TextGenerationError

__all__ = [
    "ElevenLabsClient",
    "GeminiTextClient",
    "SpeechClientError",
    "TextGenerationError",
    "VoiceSettings",
]
