from __future__ import annotations

import logging

from app.core.errors import MessageRequired, UpstreamFailed
from app.core.settings import Settings, get_settings
from app.services.conversation_service import FALLBACK_REPLY
from app.services.gemini_service import GeminiService
from app.services.modality import TextPart, normalize_response
from app.services.prompts import ENGLISH_TEACHER_FRAME, SPEECH_TEACHER_FRAME, compose
from app.services.transcription_service import TranscriptionService

logger = logging.getLogger(__name__)


UNINTELLIGIBLE_REPLY = "I couldn't understand what you said. Please try again."


class EnglishTeacherService:
    def __init__(
        self,
        gemini_service: GeminiService,
        transcription_service: TranscriptionService,
        settings: Settings | None = None,
    ) -> None:
        self._gemini = gemini_service
        self._transcriber = transcription_service
        self._settings = settings or get_settings()

    async def correct_text(self, message: str | None) -> dict[str, str]:
        if not message:
            raise MessageRequired()

        prompt = compose(ENGLISH_TEACHER_FRAME, message)
        try:
            correction = await self._gemini.generate(
                [TextPart(text=prompt)],
                max_output_tokens=self._settings.max_output_tokens,
            )
        except UpstreamFailed as exc:
            raise UpstreamFailed("Failed to get English teacher response") from exc
        return normalize_response(correction, "correction")

    async def correct_speech(self, audio: bytes) -> dict[str, str]:
        """Transcribe ``audio`` then ask for a correction of what was said.

        Nothing recognized short-circuits with a fixed reply and Gemini is
        never called. Upstream failures become a fallback correction unless
        dialogue failures are configured to propagate.
        """
        try:
            transcription = await self._transcriber.transcribe(audio)
            if not transcription.strip():
                return normalize_response(UNINTELLIGIBLE_REPLY, "correction")

            prompt = compose(SPEECH_TEACHER_FRAME, transcription)
            correction = await self._gemini.generate(
                [TextPart(text=prompt)],
                max_output_tokens=self._settings.max_output_tokens,
            )
        except UpstreamFailed as exc:
            if not self._settings.absorb_dialogue_failures:
                raise UpstreamFailed(
                    "Failed to process speech or get AI feedback"
                ) from exc
            logger.warning("Speech correction failed upstream; replying with fallback")
            return normalize_response(FALLBACK_REPLY, "correction")

        return normalize_response(correction, "correction", transcription=transcription)
