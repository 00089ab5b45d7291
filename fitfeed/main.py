import asyncio
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from fitfeed.api.auth import router as auth_router
from fitfeed.api.errors import register_exception_handlers
from fitfeed.api.exercises import router as exercises_router
from fitfeed.api.feed import router as feed_router
from fitfeed.api.profile import router as profile_router
from fitfeed.api.workouts import router as workouts_router
from fitfeed.config.settings import settings
from fitfeed.core.logger import setup_logger
from fitfeed.db.models import Base
from fitfeed.db.seed import seed_exercises
from fitfeed.db.session import check_database_connection, get_engine, get_session
from fitfeed.utils.timezone import utcnow

setup_logger(level=settings.log_level)


def init_database() -> None:
    """Create tables and, when enabled, seed the exercise catalog."""
    check_database_connection()
    logger.info("Ensuring database tables exist")
    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables verified")

    if settings.seed_exercises:
        with get_session() as session:
            seed_exercises(session)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Prepare the database on startup.

    Note: FastAPI requires async for lifespan context manager,
    even if no await operations are used.
    """
    init_database()
    await asyncio.sleep(0)
    yield
    logger.info("FitFeed API shutting down")


app = FastAPI(title="FitFeed", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origin.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(exercises_router)
app.include_router(workouts_router)
app.include_router(feed_router)
app.include_router(profile_router)

logger.info("FastAPI application initialized")


@app.get("/health")
def health():
    return {"status": "ok", "timestamp": utcnow().isoformat() + "Z"}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests."""
    logger.debug(f"Request: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
    return response


def main() -> None:
    logger.info(f"Starting FitFeed API on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
