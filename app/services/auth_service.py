from __future__ import annotations

import base64
import hashlib
import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import InvalidCredentials, InvalidToken, MissingInput, UserExists
from app.core.settings import Settings, get_settings
from app.db.models import User

logger = logging.getLogger(__name__)


def _bcrypt_input(password: str) -> bytes:
    # bcrypt rejects inputs over 72 bytes; a base64 SHA-256 digest is 44.
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    """Hash password using bcrypt with a fresh salt"""
    return bcrypt.hashpw(_bcrypt_input(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_bcrypt_input(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def _signing_secret(settings: Settings) -> str:
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET is not configured")
    return settings.jwt_secret


def create_access_token(user_id: int, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "user": {"id": user_id},
        "iat": now,
        "exp": now + timedelta(seconds=settings.access_token_ttl_seconds),
    }
    return jwt.encode(payload, _signing_secret(settings), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> int:
    """Return the user id carried by ``token``."""
    try:
        payload = jwt.decode(
            token,
            _signing_secret(settings),
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
        return int(payload["user"]["id"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError) as exc:
        raise InvalidToken() from exc


class AuthService:
    def __init__(self, db: Session, settings: Settings | None = None):
        self._db = db
        self._settings = settings or get_settings()

    def _find_user(self, email: str) -> User | None:
        return self._db.scalars(select(User).where(User.email == email)).first()

    def register(self, email: str | None, password: str | None) -> str:
        if not email or not password:
            raise MissingInput("Email and password are required")

        if self._find_user(email) is not None:
            raise UserExists()

        user = User(email=email, password_hash=hash_password(password))
        self._db.add(user)
        try:
            self._db.commit()
        except IntegrityError as exc:
            # Another request registered the same email in between.
            self._db.rollback()
            raise UserExists() from exc
        except Exception:
            self._db.rollback()
            logger.exception("Failed to persist new user")
            raise
        self._db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return create_access_token(user.id, self._settings)

    def login(self, email: str | None, password: str | None) -> str:
        if not email or not password:
            raise MissingInput("Email and password are required")

        user = self._find_user(email)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        logger.info(f"User {user.id} logged in")
        return create_access_token(user.id, self._settings)
