# backend/classroom_scheduler/main.py
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .core.config import settings
from .database import init_db
from .errors import register_error_handlers
from .middleware.prometheus_middleware import PrometheusMiddleware
from .routes import prometheus
from .routes.v1 import (
    buildings as buildings_v1,
    courses as courses_v1,
    departments as departments_v1,
    programs as programs_v1,
    rooms as rooms_v1,
    schedules as schedules_v1,
    users as users_v1,
)
from .schemas.main_responses import HealthResponse

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{settings.app_name} API starting up...")
    logger.info(f"Environment: {settings.environment}")

    if not settings.is_testing:
        init_db()
        logger.info("Database tables ensured")

    yield

    logger.info(f"{settings.app_name} API shutting down...")


app = FastAPI(
    title=settings.app_name,
    description="Room booking and schedule management for a college campus",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)

# Register unified error envelope handlers
register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)
app.add_middleware(PrometheusMiddleware)

# Create API v1 router
api_v1 = APIRouter(prefix="/api/v1")

# Static segments (/available, /batch, /date/...) are declared before /{id} in each router
api_v1.include_router(schedules_v1.router, prefix="/schedules")
api_v1.include_router(rooms_v1.router, prefix="/rooms")
api_v1.include_router(buildings_v1.router, prefix="/buildings")
api_v1.include_router(departments_v1.router, prefix="/departments")
api_v1.include_router(programs_v1.router, prefix="/programs")
api_v1.include_router(courses_v1.router, prefix="/courses")
api_v1.include_router(users_v1.router, prefix="/users")

app.include_router(api_v1)
app.include_router(prometheus.router)


@app.get("/health", response_model=HealthResponse, include_in_schema=False)
def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service="classroom-scheduler-api",
        version=__version__,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
