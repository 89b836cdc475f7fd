"""Database configuration — reads connection parameters from environment.

``DATABASE_URL`` wins when set; otherwise the URL is assembled from
``PG_HOST``, ``PG_PORT``, ``PG_USER``, ``PG_PASSWORD`` and ``PG_DATABASE``
(convenient for docker-compose).

Alembic needs a plain ``postgresql://`` URL, the runtime engine needs the
``postgresql+asyncpg://`` flavour; both are derived from the same source.
"""

import os

_SYNC_PREFIX = "postgresql://"
_ASYNC_PREFIX = "postgresql+asyncpg://"


def _url_from_parts() -> str:
    host = os.getenv("PG_HOST", "localhost")
    port = os.getenv("PG_PORT", "5432")
    user = os.getenv("PG_USER", "videoform")
    password = os.getenv("PG_PASSWORD", "videoform")
    database = os.getenv("PG_DATABASE", "videoform")
    return f"{_SYNC_PREFIX}{user}:{password}@{host}:{port}/{database}"


def get_sync_url() -> str:
    """Connection URL for Alembic, which migrates synchronously."""
    url = os.getenv("DATABASE_URL") or _url_from_parts()
    return url.replace(_ASYNC_PREFIX, _SYNC_PREFIX, 1)


def get_async_url() -> str:
    """Connection URL for the asyncpg-backed runtime engine."""
    url = os.getenv("DATABASE_URL") or _url_from_parts()
    if url.startswith(_SYNC_PREFIX):
        return url.replace(_SYNC_PREFIX, _ASYNC_PREFIX, 1)
    return url
