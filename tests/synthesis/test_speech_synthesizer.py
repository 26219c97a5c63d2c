from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List

import pytest

from techtrendy.clients import SpeechClientError
from techtrendy.config import SpeechProviderConfig
from techtrendy.core import DialogueSegment, MissingCredential, Role, Script
from techtrendy.synthesis import (
    VOICE_SETTINGS,
    SpeechSynthesizer,
    fallback_script,
    speakable_segments,
)


class FakeSpeechClient:
    def __init__(self, failing_voices: tuple[str, ...] = ()):
        self._failing = failing_voices
        self.calls: List[dict] = []

    async def synthesize(self, **kwargs) -> bytes:
        self.calls.append(kwargs)
        if kwargs["voice_id"] in self._failing:
            raise SpeechClientError("boom")
        return f"<{kwargs['voice_id']}>".encode()


class UnreachableSpeechClient:
    async def synthesize(self, **kwargs) -> bytes:
        raise SpeechClientError("connection refused")


def _config(tmp_path: Path, **overrides) -> SpeechProviderConfig:
    values = {"api_key": "sk_test", "output_dir": str(tmp_path / "audio")}
    values.update(overrides)
    return SpeechProviderConfig(**values)


def test_narrator_and_short_segments_are_skipped():
    script = Script.from_segments(
        [
            DialogueSegment(role=Role.NARRATOR, text="Vítejte u Tech Trendů, přátelé.", duration=2),
            DialogueSegment(role=Role.PETR, text="Krátce.", duration=0),
            DialogueSegment(role=Role.LUBO, text="Tohle je dost dlouhá replika.", duration=2),
        ]
    )

    segments = speakable_segments(script)

    assert [segment.role for segment in segments] == [Role.LUBO]


def test_audio_is_written_for_synthesised_segments(tmp_path):
    client = FakeSpeechClient()
    synthesizer = SpeechSynthesizer(_config(tmp_path), client=client)

    reference = asyncio.run(synthesizer.synthesize(fallback_script(), name="episode-1"))

    path = Path(reference)
    assert path == tmp_path / "audio" / "episode-1.mp3"
    assert len(client.calls) == 8
    assert path.read_bytes().startswith(b"<petr_czech_voice><lubo_czech_voice><jarda_czech_voice>")
    assert all(call["voice_settings"] == VOICE_SETTINGS for call in client.calls)
    assert all(call["model_id"] == "eleven_multilingual_v2" for call in client.calls)


def test_failed_segments_are_skipped(tmp_path):
    client = FakeSpeechClient(failing_voices=("lubo_czech_voice",))
    synthesizer = SpeechSynthesizer(_config(tmp_path), client=client)

    reference = asyncio.run(synthesizer.synthesize(fallback_script(), name="partial"))

    content = Path(reference).read_bytes()
    assert b"lubo" not in content
    assert b"<petr_czech_voice>" in content
    assert len(client.calls) == 8


def test_unreachable_endpoint_returns_placeholder(tmp_path):
    synthesizer = SpeechSynthesizer(_config(tmp_path), client=UnreachableSpeechClient())

    reference = asyncio.run(synthesizer.synthesize(fallback_script()))

    assert reference.startswith("https://example.com/podcast-")
    assert reference.endswith(".mp3")
    assert not (tmp_path / "audio").exists()


def test_missing_credential_raises(tmp_path):
    client = FakeSpeechClient()
    synthesizer = SpeechSynthesizer(_config(tmp_path, api_key=None), client=client)

    with pytest.raises(MissingCredential):
        asyncio.run(synthesizer.synthesize(fallback_script()))
    assert client.calls == []


class RecordingElevenLabsClient:
    instances: List["RecordingElevenLabsClient"] = []

    def __init__(self, base_url: str, api_key: str, *, timeout: float = 60.0) -> None:
        self.loop = asyncio.get_running_loop()
        self.closed = False
        RecordingElevenLabsClient.instances.append(self)

    async def synthesize(self, **kwargs) -> bytes:
        assert asyncio.get_running_loop() is self.loop
        return b"<chunk>"

    async def aclose(self) -> None:
        self.closed = True


def test_each_run_uses_and_closes_its_own_http_client(tmp_path, monkeypatch):
    RecordingElevenLabsClient.instances = []
    monkeypatch.setattr("techtrendy.synthesis.speech.ElevenLabsClient", RecordingElevenLabsClient)
    synthesizer = SpeechSynthesizer(_config(tmp_path))

    first = asyncio.run(synthesizer.synthesize(fallback_script(), name="first"))
    second = asyncio.run(synthesizer.synthesize(fallback_script(), name="second"))

    assert Path(first).read_bytes() == b"<chunk>" * 8
    assert Path(second).name == "second.mp3"
    assert len(RecordingElevenLabsClient.instances) == 2
    assert all(client.closed for client in RecordingElevenLabsClient.instances)


def test_audio_file_is_written_off_the_event_loop(tmp_path, monkeypatch):
    offloaded: List[str] = []
    to_thread = asyncio.to_thread

    async def recording_to_thread(func, *args, **kwargs):
        offloaded.append(func.__name__)
        return await to_thread(func, *args, **kwargs)

    monkeypatch.setattr(asyncio, "to_thread", recording_to_thread)
    synthesizer = SpeechSynthesizer(_config(tmp_path), client=FakeSpeechClient())

    reference = asyncio.run(synthesizer.synthesize(fallback_script(), name="threaded"))

    assert offloaded == ["_write_audio"]
    assert Path(reference).exists()
