from __future__ import annotations

import logging

from app.core.errors import MessageRequired, UpstreamFailed
from app.core.settings import Settings, get_settings
from app.models.chat import ChatTurn
from app.services.gemini_service import GeminiService

logger = logging.getLogger(__name__)


FALLBACK_REPLY = "Sorry, I encountered an error. Please try again."


class ConversationReplayer:
    """Continues a conversation whose history is held by the client.

    History is replayed exactly as received: no reordering, deduplication or
    role repair. A history that does not alternate user/model turns is sent
    as-is and Gemini decides what to make of it.
    """

    def __init__(
        self,
        gemini_service: GeminiService,
        settings: Settings | None = None,
    ) -> None:
        self._gemini = gemini_service
        self._settings = settings or get_settings()

    async def continue_conversation(
        self,
        history: list[ChatTurn],
        new_message: str | None,
    ) -> str:
        if not new_message:
            raise MessageRequired()

        contents = [turn.to_content() for turn in history]
        logger.info(f"Replaying conversation with {len(contents)} prior turns")

        try:
            return await self._gemini.send_chat(
                history=contents,
                message=new_message,
                max_output_tokens=self._settings.max_output_tokens,
            )
        except UpstreamFailed:
            if not self._settings.absorb_dialogue_failures:
                raise
            logger.warning("Conversation turn failed upstream; replying with fallback")
            return FALLBACK_REPLY
