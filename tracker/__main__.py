"""
Entry point for running the API with ``python -m tracker``.

Host and port come from HOST/PORT (default 0.0.0.0:3001); RELOAD=1 turns on
uvicorn's autoreload for development.
"""
import uvicorn

from tracker.core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "tracker.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
