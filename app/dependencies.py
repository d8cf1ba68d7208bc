from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.settings import Settings, get_settings
from app.db.session import get_db_session
from app.services.auth_service import AuthService
from app.services.conversation_service import ConversationReplayer
from app.services.english_teacher_service import EnglishTeacherService
from app.services.gemini_service import GeminiService
from app.services.transcription_service import TranscriptionService


@lru_cache
def get_gemini_service() -> GeminiService:
    return GeminiService(settings=get_settings())


@lru_cache
def get_transcription_service() -> TranscriptionService:
    return TranscriptionService()


def get_conversation_replayer(
    gemini_service: GeminiService = Depends(get_gemini_service),
    settings: Settings = Depends(get_settings),
) -> ConversationReplayer:
    return ConversationReplayer(gemini_service=gemini_service, settings=settings)


def get_english_teacher_service(
    gemini_service: GeminiService = Depends(get_gemini_service),
    transcription_service: TranscriptionService = Depends(get_transcription_service),
    settings: Settings = Depends(get_settings),
) -> EnglishTeacherService:
    return EnglishTeacherService(
        gemini_service=gemini_service,
        transcription_service=transcription_service,
        settings=settings,
    )


def get_auth_service(
    db: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(db=db, settings=settings)
