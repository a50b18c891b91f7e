import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tracker.core.config import Settings, get_settings
from tracker.core.errors import StorageError
from tracker.core.logging import configure_logging
from tracker.repositories import TrackerRepository, build_repository
from tracker.routers import exercises as exercises_router
from tracker.routers import workouts as workouts_router
from tracker.services.exercise_library_service import ExerciseLibraryService
from tracker.services.workout_service import WorkoutService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    repository: TrackerRepository = app.state.repository
    repository.init()
    logger.info("Storage backend %r ready", repository.backend)
    try:
        yield
    finally:
        repository.close()
        logger.info("Storage backend %r closed", repository.backend)


def _internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"detail": "Internal server error"}, status_code=500)


def create_app(settings: Optional[Settings] = None, repository: Optional[TrackerRepository] = None) -> FastAPI:
    """Build the API; uvicorn uses this as a factory (``--factory``)."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    repository = repository or build_repository(settings)

    app = FastAPI(title="Workout Tracker API", lifespan=lifespan)
    app.state.settings = settings
    app.state.repository = repository
    app.state.workout_service = WorkoutService(repository)
    app.state.exercise_library_service = ExerciseLibraryService(repository)

    origins = list(settings.cors_origins) or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorageError, _internal_error)
    app.add_exception_handler(Exception, _internal_error)

    app.include_router(workouts_router.router)
    app.include_router(exercises_router.router)

    @app.get("/health")
    def health():
        return {"ok": True, "storage": repository.backend}

    return app
