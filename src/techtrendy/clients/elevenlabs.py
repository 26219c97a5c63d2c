"""HTTP client for the ElevenLabs text-to-speech API."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional
import logging

import httpx

LOGGER = logging.getLogger(__name__)


class SpeechClientError(RuntimeError):
    """Raised when the ElevenLabs API responds with an error."""


@dataclass(frozen=True, slots=True)
class VoiceSettings:
    stability: float = 0.5
    similarity_boost: float = 0.75
    style: float = 0.3
    use_speaker_boost: bool = True


class ElevenLabsClient:
    """Minimal async client for synthesising speech with ElevenLabs."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key:
            raise ValueError("An ElevenLabs API key must be provided")
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    # --- public API -----------------------------------------------------
    async def synthesize(
        self,
        *,
        voice_id: str,
        text: str,
        model_id: str,
        voice_settings: VoiceSettings,
    ) -> bytes:
        """Return the MP3 audio for ``text`` spoken by ``voice_id``."""

        url = f"{self._base_url}/v1/text-to-speech/{voice_id}"
        payload = {
            "text": text,
            "model_id": model_id,
            "voice_settings": asdict(voice_settings),
        }
        try:
            response = await self._client.post(url, headers=self._headers(), json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            LOGGER.warning("ElevenLabs API returned status %s for voice %s", status, voice_id)
            if status == 401:
                message = "ElevenLabs rejected the API key (status 401)"
            elif status == 429:
                message = "ElevenLabs rate limit reached (status 429)"
            else:
                message = f"ElevenLabs rejected the request with status {status}"
            raise SpeechClientError(message) from exc
        except httpx.HTTPError as exc:
            LOGGER.warning("HTTP error while requesting %s: %s", url, exc)
            raise SpeechClientError(f"Failed to request {url}") from exc
        if not response.content:
            raise SpeechClientError(f"ElevenLabs returned no audio for voice {voice_id}")
        return response.content

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def __aenter__(self) -> "ElevenLabsClient":  # pragma: no cover - trivial
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - trivial
        await self.aclose()

    # --- helpers --------------------------------------------------------
    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "audio/mpeg",
            "Content-Type": "application/json",
            "xi-api-key": self._api_key,
        }


__all__ = ["ElevenLabsClient", "SpeechClientError", "VoiceSettings"]
