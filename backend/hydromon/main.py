import json
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from hydromon import __version__
from hydromon.config import settings
from hydromon.database import SessionLocal, get_db
from hydromon.dependencies import get_bot, get_dispatcher
from hydromon.errors import IdentityServiceError, UpstreamError
from hydromon.ratelimit import limiter
from hydromon.routers import (
    bot_router,
    multiplant_router,
    plants_router,
    sensor_data_router,
    system_config_router,
    users_router,
)
from hydromon.services.scheduler import start_scheduler, stop_scheduler
from hydromon.services.sensor_feed import SensorFeed

logger = logging.getLogger("hydromon")
logging.basicConfig(level=settings.log_level.upper())


def _json(data: dict[str, Any]) -> str:
    return json.dumps(data, default=str)


async def _register_webhook() -> None:
    bot = get_bot()
    if bot is None or not settings.telegram_webhook_url:
        logger.warning("Telegram bot or webhook URL not configured, skipping webhook registration")
        return
    try:
        await bot.replace_webhook(settings.telegram_webhook_url)
    except UpstreamError as exc:
        logger.error(f"Failed to set webhook: {exc.message}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan for startup/shutdown events."""
    logger.info(
        "Starting hydromon %s (environment=%s, bot=%s)",
        __version__, settings.environment, "configured" if settings.bot_configured else "not configured",
    )
    if settings.sensor_feed_enabled:
        feed = SensorFeed(get_dispatcher(), SessionLocal)
        start_scheduler(feed, settings.sensor_poll_seconds)
    await _register_webhook()
    yield
    stop_scheduler()


app = FastAPI(
    title="Hydroponic Monitor API",
    description="Alert relay, admin CRUD proxy and Multiplant range resolver for the hydroponic dashboard",
    version=__version__,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.middleware("http")
async def structured_logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    req_id = request.headers.get("X-Request-ID", str(uuid4()))
    request.state.request_id = req_id

    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["X-Request-ID"] = req_id
        return response
    finally:
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(_json({
            "request_id": req_id,
            "path": request.url.path,
            "method": request.method,
            "status": status_code,
            "duration_ms": duration_ms,
        }))


# ── Error translation: every failure becomes {error, details?} ──

def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    content: dict[str, Any] = {"error": error}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body", details)


@app.exception_handler(UpstreamError)
async def upstream_exception_handler(request: Request, exc: UpstreamError):
    logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    client_error = isinstance(exc, IdentityServiceError) and exc.is_client_error
    status_code = status.HTTP_400_BAD_REQUEST if client_error else status.HTTP_500_INTERNAL_SERVER_ERROR
    return _error(status_code, exc.message, exc.details)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    if isinstance(exc, IntegrityError):
        return _error(status.HTTP_400_BAD_REQUEST, "Constraint violation", str(exc.orig))
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error", str(exc))


app.include_router(users_router)
app.include_router(plants_router)
app.include_router(multiplant_router)
app.include_router(sensor_data_router)
app.include_router(system_config_router)
app.include_router(bot_router)


@app.get("/health")
def health(db: Session = Depends(get_db)):
    db_ok = "ok"
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        db_ok = "error"

    payload = {
        "status": "ok" if db_ok == "ok" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "db": db_ok,
    }
    if db_ok == "error":
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=payload)
    return payload


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("hydromon.main:app", host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())
