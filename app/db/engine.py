from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from app.core.settings import get_settings


@lru_cache
def get_engine(database_url: str | None = None) -> Engine:
    settings = get_settings()
    url = database_url or settings.database_url

    connect_args: dict[str, object] = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync dependencies in a threadpool.
        connect_args["check_same_thread"] = False

    # Connections are opened lazily on first use.
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
