import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.core.errors import AppError, MissingInput, UpstreamFailed
from app.dependencies import get_gemini_service
from app.models.chat import AskRequest
from app.services.gemini_service import GeminiService
from app.services.modality import ImageUpload, normalize_request, normalize_response

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ask")
async def ask(
    request: AskRequest | None = None,
    gemini_service: GeminiService = Depends(get_gemini_service),
) -> dict[str, str]:
    if request is None or not request.question:
        raise MissingInput("Question is required")

    try:
        answer = await gemini_service.generate(normalize_request(question=request.question))
        return normalize_response(answer, "answer")
    except UpstreamFailed as e:
        raise UpstreamFailed("Failed to get answer from AI") from e
    except AppError:
        raise
    except Exception:
        logger.exception("Ask endpoint failed")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/ask-with-image")
async def ask_with_image(
    question: str | None = Form(default=None),
    image: UploadFile | None = File(default=None),
    gemini_service: GeminiService = Depends(get_gemini_service),
) -> dict[str, str]:
    upload = None
    if image is not None:
        data = await image.read()
        upload = ImageUpload(
            mime_type=image.content_type or "application/octet-stream",
            data=data,
        )
        logger.info(f"Received image {image.filename!r} ({len(data)} bytes)")

    parts = normalize_request(question=question, image=upload)

    try:
        answer = await gemini_service.generate(parts)
        return normalize_response(answer, "answer")
    except UpstreamFailed as e:
        raise UpstreamFailed("Failed to get answer from AI with image") from e
    except AppError:
        raise
    except Exception:
        logger.exception("Ask-with-image endpoint failed")
        raise HTTPException(status_code=500, detail="Internal server error")
