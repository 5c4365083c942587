from fastapi import FastAPI, Request
from contextlib import asynccontextmanager
from sqlalchemy import text
from starlette.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from event_quotes.api import auth, quotes, admin_quotes, communications
from event_quotes.core.config import settings
from event_quotes.core.redis import init_redis, close_redis, get_redis
from event_quotes.core.metrics import request_count, request_duration, db_connected, redis_connected, get_metrics_text
from event_quotes.db.session import engine
from event_quotes.models import registry  # noqa: F401
import time
import logging

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        status = 500

        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            route = request.scope.get("route")
            endpoint = getattr(route, "path", request.url.path)
            request_count.labels(
                method=request.method,
                endpoint=endpoint,
                status=status
            ).inc()
            request_duration.labels(
                method=request.method,
                endpoint=endpoint
            ).observe(time.time() - start_time)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting...")

    logger.info("Initializing Redis connection...")
    try:
        await init_redis()
        redis_connected.set(1)
    except Exception as e:
        logger.warning(f"Redis unavailable, continuing without cache: {e}")
        redis_connected.set(0)

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        db_connected.set(1)
        logger.info("Database connected")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        db_connected.set(0)

    yield

    logger.info("Application shutting down...")
    await close_redis()
    redis_connected.set(0)
    await engine.dispose()
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

app.add_middleware(MetricsMiddleware)

app.include_router(auth.router)
app.include_router(quotes.router)
app.include_router(admin_quotes.router)
app.include_router(communications.router)


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@app.get("/health", tags=["monitoring"])
async def health_check():
    redis = get_redis()

    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "dependencies": {
            "redis": "connected" if redis is not None else "disconnected",
        }
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics"
    }
