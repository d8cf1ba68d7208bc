import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.errors import AppError
from app.dependencies import get_conversation_replayer
from app.models.chat import InterviewRequest
from app.services.conversation_service import ConversationReplayer
from app.services.modality import normalize_response

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/interview")
async def interview(
    request: InterviewRequest | None = None,
    replayer: ConversationReplayer = Depends(get_conversation_replayer),
) -> dict[str, str]:
    """Answer the next interview turn given the full client-held history."""
    request = request or InterviewRequest()
    try:
        reply = await replayer.continue_conversation(
            history=request.history or [],
            new_message=request.message,
        )
        return normalize_response(reply, "reply")
    except AppError:
        raise
    except Exception:
        logger.exception("Interview endpoint failed")
        raise HTTPException(status_code=500, detail="Internal server error")
