import asyncio
from types import SimpleNamespace

import pytest

from app.core.errors import TranscriptionFailed
from app.services import transcription_service
from app.services.transcription_service import (
    AUDIO_ENCODING,
    TranscriptionService,
    join_transcripts,
)


def _result(*transcripts):
    return SimpleNamespace(
        alternatives=[SimpleNamespace(transcript=t) for t in transcripts]
    )


class _FakeSpeechClient:
    def __init__(self, results=None, error=None):
        self.results = results or []
        self.error = error
        self.requests = []

    def recognize(self, config, audio):
        self.requests.append((config, audio))
        if self.error:
            raise self.error
        return SimpleNamespace(results=self.results)


def test_segments_are_joined_with_newlines_using_top_alternative():
    results = [_result("Hello", "Hollow"), _result("world", "word")]

    assert join_transcripts(results) == "Hello\nworld"


def test_segments_without_alternatives_are_skipped():
    assert join_transcripts([_result(), _result("only")]) == "only"


def test_transcribe_uses_fixed_recognition_config():
    client = _FakeSpeechClient(results=[_result("Hello"), _result("world")])
    service = TranscriptionService(client=client)

    assert asyncio.run(service.transcribe(b"webm")) == "Hello\nworld"

    (config, audio), = client.requests
    assert config.encoding == AUDIO_ENCODING
    assert config.sample_rate_hertz == 48000
    assert config.language_code == "en-US"
    assert audio.content == b"webm"


def test_no_segments_is_empty_transcription():
    service = TranscriptionService(client=_FakeSpeechClient(results=[]))

    assert asyncio.run(service.transcribe(b"silence")) == ""


def test_recognizer_errors_become_transcription_failed():
    service = TranscriptionService(client=_FakeSpeechClient(error=OSError("down")))

    with pytest.raises(TranscriptionFailed):
        asyncio.run(service.transcribe(b"webm"))


def test_speech_client_is_created_on_first_use(monkeypatch):
    def _no_credentials():
        raise RuntimeError("default credentials not found")

    monkeypatch.setattr(transcription_service.speech, "SpeechClient", _no_credentials)

    service = TranscriptionService()

    with pytest.raises(TranscriptionFailed):
        asyncio.run(service.transcribe(b"webm"))
