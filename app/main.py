from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import ask, auth, english_teacher, health, interview
from app.core.errors import AppError, app_error_handler
from app.core.logging import configure_logging
from app.core.settings import get_settings


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AppError, app_error_handler)

    app.include_router(ask.router)
    app.include_router(interview.router, prefix="/api")
    app.include_router(english_teacher.router, prefix="/api")
    app.include_router(auth.router, prefix="/api/auth")

    app.include_router(health.router)

    return app


app = create_app()
