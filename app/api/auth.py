import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.errors import AppError
from app.dependencies import get_auth_service
from app.models.auth import Credentials, TokenResponse
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=TokenResponse)
def register(
    request: Credentials | None = None,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    request = request or Credentials()
    try:
        token = auth_service.register(email=request.email, password=request.password)
        return TokenResponse(token=token)
    except AppError:
        raise
    except Exception:
        logger.exception("Register endpoint failed")
        raise HTTPException(status_code=500, detail="Server error")


@router.post("/login", response_model=TokenResponse)
def login(
    request: Credentials | None = None,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    request = request or Credentials()
    try:
        token = auth_service.login(email=request.email, password=request.password)
        return TokenResponse(token=token)
    except AppError:
        raise
    except Exception:
        logger.exception("Login endpoint failed")
        raise HTTPException(status_code=500, detail="Server error")
