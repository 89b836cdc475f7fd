"""Server configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  In production
the values are typically overridden via env vars or a ``.env`` file.
"""

import os
from dataclasses import dataclass, field

# Module-level so FastAPI Query() defaults can reference them
DEFAULT_RECENT_LIMIT = int(os.getenv("DEFAULT_RECENT_LIMIT", "50"))
MAX_RECENT_LIMIT = int(os.getenv("MAX_RECENT_LIMIT", "200"))


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment at startup."""

    # Network
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS: comma-separated origins, or "*" for wide-open dev mode
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Step registry YAML (None → the file bundled with videoform_steps)
    steps_file: str | None = None

    # Logging
    log_level: str = "INFO"

    # Admin viewer key; when set, admin endpoints require X-Admin-Key
    admin_api_key: str | None = None


def load_settings() -> ServerSettings:
    """Build settings from ``SERVER_*`` environment variables."""
    raw_origins = os.getenv("SERVER_CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=int(os.getenv("SERVER_PORT", "8080")),
        cors_origins=origins,
        steps_file=os.getenv("SERVER_STEPS_FILE") or None,
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        admin_api_key=os.getenv("ADMIN_API_KEY") or None,
    )
