"""
Configuration helpers for the tracker backend.

Settings are read once from the environment (port, storage backend, file path,
database URL, CORS, log level) so that routers/services do not fetch
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = ("json", "sql")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    host: str
    port: int
    storage_backend: str
    data_file: str
    database_url: str
    database_echo: bool
    cors_origins: tuple[str, ...]
    log_level: str
    reload: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _list(value: str | None, default: str) -> tuple[str, ...]:
        raw = value if value is not None else default
        return tuple(item.strip() for item in raw.split(",") if item.strip())

    backend = (os.getenv("STORAGE_BACKEND") or "json").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise RuntimeError(f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}")

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "3001"), 3001),
        storage_backend=backend,
        data_file=os.getenv("DATA_FILE", "data.json"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./tracker.db"),
        database_echo=_bool(os.getenv("DATABASE_ECHO"), False),
        cors_origins=_list(os.getenv("CORS_ORIGINS"), "*"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        reload=_bool(os.getenv("RELOAD"), False),
    )
