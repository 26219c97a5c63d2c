from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from techtrendy.clients import ElevenLabsClient, SpeechClientError, VoiceSettings


def _synthesize(handler) -> bytes:
    async def run() -> bytes:
        client = ElevenLabsClient("https://tts.example/", "sk_test", transport=httpx.MockTransport(handler))
        try:
            return await client.synthesize(
                voice_id="petr_czech_voice",
                text="Ahoj všem",
                model_id="eleven_multilingual_v2",
                voice_settings=VoiceSettings(),
            )
        finally:
            await client.aclose()

    return asyncio.run(run())


def test_request_carries_voice_text_and_settings():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["key"] = request.headers["xi-api-key"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, content=b"ID3audio")

    audio = _synthesize(handler)

    assert audio == b"ID3audio"
    assert captured["url"] == "https://tts.example/v1/text-to-speech/petr_czech_voice"
    assert captured["key"] == "sk_test"
    assert captured["body"]["text"] == "Ahoj všem"
    assert captured["body"]["model_id"] == "eleven_multilingual_v2"
    assert captured["body"]["voice_settings"] == {
        "stability": 0.5,
        "similarity_boost": 0.75,
        "style": 0.3,
        "use_speaker_boost": True,
    }


def test_rate_limit_is_reported():
    with pytest.raises(SpeechClientError, match="429"):
        _synthesize(lambda request: httpx.Response(429))


def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(SpeechClientError):
        _synthesize(handler)


def test_empty_api_key_is_rejected():
    with pytest.raises(ValueError):
        ElevenLabsClient("https://tts.example", "")
