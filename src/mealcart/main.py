"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mealcart.config import get_settings
from mealcart.database import Base, async_engine
from mealcart.errors import InvalidState, NotFound, SourceUnavailable
from mealcart.logging_config import LoggingContext, configure_logging, get_logger
from mealcart.routers import (
    daily_log_router,
    offers_router,
    shopping_list_router,
    staples_router,
)

settings = get_settings()

# Configure logging on module load
configure_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Starting Mealcart API")

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")

    yield

    logger.info("Shutting down Mealcart API")
    await async_engine.dispose()


app = FastAPI(
    title="Mealcart API",
    description="Meal plans, pantry staples and shopping lists priced from store offers",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line of a request with its request id."""
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    return response


app.include_router(offers_router)
app.include_router(staples_router)
app.include_router(shopping_list_router)
app.include_router(daily_log_router)


@app.exception_handler(SourceUnavailable)
async def source_unavailable_handler(request: Request, exc: SourceUnavailable) -> JSONResponse:
    logger.warning(f"{request.url.path}: source unavailable ({exc})")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc), "retryable": exc.retryable},
    )


@app.exception_handler(InvalidState)
async def invalid_state_handler(request: Request, exc: InvalidState) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "mealcart-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Mealcart API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
