from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from google import genai
from google.genai import types

from app.core.errors import UpstreamFailed
from app.core.settings import Settings, get_settings
from app.services.modality import ContentPart

logger = logging.getLogger(__name__)


def _response_text(response: Any) -> str:
    # google-genai responses expose aggregated text via `.text`; it is None
    # when the candidate was blocked or carried no text parts.
    text = getattr(response, "text", None)
    if isinstance(text, str) and text.strip():
        return text
    raise UpstreamFailed("Gemini returned an empty response")


class GeminiService:
    def __init__(self, settings: Settings | None = None, client: Any = None):
        self._settings = settings or get_settings()

        if client is None:
            if not self._settings.gemini_api_key:
                raise RuntimeError("GEMINI_API_KEY is not configured")
            client = genai.Client(api_key=self._settings.gemini_api_key)
        self._client = client

    async def generate(
        self,
        parts: Sequence[ContentPart],
        max_output_tokens: int | None = None,
    ) -> str:
        """Single-shot completion over text and/or image parts."""
        contents = [
            types.Content(role="user", parts=[part.to_genai() for part in parts])
        ]
        config = None
        if max_output_tokens is not None:
            config = types.GenerateContentConfig(max_output_tokens=max_output_tokens)

        def _send() -> str:
            response = self._client.models.generate_content(
                model=self._settings.gemini_model,
                contents=contents,
                config=config,
            )
            return _response_text(response)

        try:
            return await asyncio.to_thread(_send)
        except UpstreamFailed:
            logger.exception("Gemini request returned no text")
            raise
        except Exception as exc:
            logger.exception("Gemini request failed")
            raise UpstreamFailed() from exc

    async def send_chat(
        self,
        history: list[types.Content],
        message: str,
        max_output_tokens: int,
    ) -> str:
        """Start a fresh chat seeded with ``history`` and send one user turn.

        Gemini keeps no state between calls, so the whole history goes out
        every time.
        """

        def _send() -> str:
            chat = self._client.chats.create(
                model=self._settings.gemini_model,
                history=history,
                config=types.GenerateContentConfig(
                    max_output_tokens=max_output_tokens
                ),
            )
            response = chat.send_message(message)
            return _response_text(response)

        try:
            return await asyncio.to_thread(_send)
        except UpstreamFailed:
            logger.exception("Gemini chat returned no text")
            raise
        except Exception as exc:
            logger.exception(f"Gemini chat failed (history_len={len(history)})")
            raise UpstreamFailed() from exc
