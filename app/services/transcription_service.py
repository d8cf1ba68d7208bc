from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from google.cloud import speech

from app.core.errors import TranscriptionFailed

logger = logging.getLogger(__name__)


# The browser recorder always produces Opus in a WebM container at 48kHz.
AUDIO_ENCODING = speech.RecognitionConfig.AudioEncoding.WEBM_OPUS
SAMPLE_RATE_HERTZ = 48000
LANGUAGE_CODE = "en-US"


def join_transcripts(results: Iterable[Any]) -> str:
    """Join the top alternative of each result segment with newlines."""
    return "\n".join(
        result.alternatives[0].transcript
        for result in results
        if result.alternatives
    )


class TranscriptionService:
    def __init__(self, client: Any = None):
        self._client = client
        self._config = speech.RecognitionConfig(
            encoding=AUDIO_ENCODING,
            sample_rate_hertz=SAMPLE_RATE_HERTZ,
            language_code=LANGUAGE_CODE,
        )

    async def transcribe(self, audio: bytes) -> str:
        """Return the transcript of ``audio``; ``""`` means nothing was recognized."""

        def _recognize() -> str:
            if self._client is None:
                # Created on first use; resolves GOOGLE_APPLICATION_CREDENTIALS.
                self._client = speech.SpeechClient()
            response = self._client.recognize(
                config=self._config,
                audio=speech.RecognitionAudio(content=audio),
            )
            return join_transcripts(response.results)

        try:
            transcription = await asyncio.to_thread(_recognize)
        except Exception as exc:
            logger.exception("Speech recognition failed")
            raise TranscriptionFailed() from exc

        logger.info(
            f"Transcribed {len(audio)} bytes of audio into {len(transcription)} chars"
        )
        return transcription
