"""Text generation through the Gemini API via the official SDK."""
from __future__ import annotations

import logging

from google import genai
from google.genai import errors, types

LOGGER = logging.getLogger(__name__)


class TextGenerationError(RuntimeError):
    """Raised when the text endpoint fails or returns no usable text."""


class GeminiTextClient:
    """Async client for the Gemini ``generate_content`` endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        model: str = "gemini-2.5-flash",
        timeout: float = 60.0,
    ) -> None:
        if not api_key:
            raise ValueError("A Gemini API key must be provided")
        self._model = model
        http_options_kwargs: dict[str, object] = {}
        base_url = base_url.rstrip("/")
        if base_url:
            http_options_kwargs["base_url"] = base_url
        if timeout > 0:
            # the SDK expects milliseconds
            http_options_kwargs["timeout"] = int(timeout * 1000)
        http_options = types.HttpOptions(**http_options_kwargs)
        self._client = genai.Client(api_key=api_key, http_options=http_options)

    async def complete(
        self,
        *,
        system_instruction: str,
        prompt: str,
        max_output_tokens: int,
        temperature: float,
    ) -> str:
        """Return the completion text for ``prompt``."""

        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
        except errors.APIError as exc:
            LOGGER.warning("Gemini request failed with status %s: %s", exc.code, exc)
            raise TextGenerationError(f"Gemini request failed with status {exc.code}") from exc
        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: types.GenerateContentResponse) -> str:
        text = (response.text or "").strip()
        if text:
            return text
        for candidate in response.candidates or ():
            if candidate.content and candidate.content.parts:
                for part in candidate.content.parts:
                    if getattr(part, "text", None):
                        candidate_text = part.text.strip()
                        if candidate_text:
                            return candidate_text
        raise TextGenerationError("Gemini response did not contain text")


__all__ = ["GeminiTextClient", "TextGenerationError"]
