"""
FastAPI routers grouped by resource (workouts, exercise library).

Each module exposes an APIRouter that the application factory includes.
Handlers pull their service from ``app.state`` and translate service
exceptions into HTTP responses.
"""
