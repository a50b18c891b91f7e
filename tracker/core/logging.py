"""Process-wide logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _resolve_level(level: str | None, default: int = logging.INFO) -> int:
    resolved = logging.getLevelName((level or "").strip().upper())
    return resolved if isinstance(resolved, int) else default


def configure_logging(level: str | None = "INFO") -> None:
    """Attach a single stream handler to the ``tracker`` logger; unknown levels fall back to INFO."""
    logger = logging.getLogger("tracker")
    logger.setLevel(_resolve_level(level))
    if not any(getattr(h, "_tracker_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._tracker_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
