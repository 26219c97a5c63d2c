from __future__ import annotations

import pytest
from google.genai import types

from techtrendy.clients import GeminiTextClient, TextGenerationError


def test_extract_text_reads_candidate_parts():
    response = types.GenerateContentResponse(
        candidates=[
            types.Candidate(content=types.Content(role="model", parts=[types.Part(text="  **Petr:** Ahoj  ")]))
        ]
    )

    assert GeminiTextClient._extract_text(response) == "**Petr:** Ahoj"


def test_extract_text_without_content_raises():
    with pytest.raises(TextGenerationError):
        GeminiTextClient._extract_text(types.GenerateContentResponse(candidates=[]))


def test_empty_api_key_is_rejected():
    with pytest.raises(ValueError):
        GeminiTextClient(api_key="")
