from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base for errors that map onto a client-facing HTTP response.

    ``message`` is what the client sees; never put upstream payloads in it.
    """

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingInput(AppError):
    status_code = 400
    default_message = "Required input is missing"


class MessageRequired(MissingInput):
    default_message = "Message is required"


class UserExists(AppError):
    status_code = 400
    default_message = "User already exists"


class InvalidCredentials(AppError):
    status_code = 400
    default_message = "Invalid Credentials"


class InvalidToken(AppError):
    status_code = 401
    default_message = "Invalid or expired token"


class UpstreamFailed(AppError):
    default_message = "Failed to get a response from the AI service"


class TranscriptionFailed(UpstreamFailed):
    default_message = "Failed to transcribe audio"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
