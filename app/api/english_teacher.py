import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from app.core.errors import AppError, MissingInput
from app.dependencies import get_english_teacher_service
from app.models.chat import EnglishTeacherRequest
from app.services.english_teacher_service import EnglishTeacherService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/english-teacher")
async def english_teacher(
    request: EnglishTeacherRequest | None = None,
    teacher: EnglishTeacherService = Depends(get_english_teacher_service),
) -> dict[str, str]:
    request = request or EnglishTeacherRequest()
    try:
        return await teacher.correct_text(request.message)
    except AppError:
        raise
    except Exception:
        logger.exception("English teacher endpoint failed")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/english-teacher-speech")
async def english_teacher_speech(
    audio: UploadFile | None = File(default=None),
    teacher: EnglishTeacherService = Depends(get_english_teacher_service),
) -> dict[str, str]:
    """
    Correct a spoken sentence recorded by the browser.

    The upload must be WebM/Opus at 48kHz, which is what the client's
    MediaRecorder produces.
    """
    if audio is None:
        raise MissingInput("No audio file provided")

    audio_bytes = await audio.read()
    if not audio_bytes:
        raise MissingInput("No audio file provided")
    logger.info(f"Received audio {audio.filename!r} ({len(audio_bytes)} bytes)")

    try:
        return await teacher.correct_speech(audio_bytes)
    except AppError:
        raise
    except Exception:
        logger.exception("English teacher speech endpoint failed")
        raise HTTPException(status_code=500, detail="Internal server error")
