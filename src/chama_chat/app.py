from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chama_chat.api.middleware.correlation_id import CorrelationIdMiddleware
from chama_chat.api.v1.routers import health, messages, notifications, ws
from chama_chat.application.exceptions import (
    ForbiddenError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from chama_chat.config import settings
from chama_chat.infrastructure.bus.redis_pubsub import (
    NOTIFICATION_EVENT,
    OnEventCallback,
    RedisPubSubSubscriber,
)
from chama_chat.infrastructure.db.session import dispose_engine
from chama_chat.infrastructure.ws.registry import InMemoryConnectionRegistry
from chama_chat.services.notification_broadcaster import NotificationBroadcaster

logger = logging.getLogger(__name__)


def _make_bus_handler(broadcaster: NotificationBroadcaster) -> OnEventCallback:
    async def _on_bus_event(event_type: str, data: dict[str, Any]) -> None:
        """Push notifications published by workers to locally connected users."""
        if event_type != NOTIFICATION_EVENT:
            logger.debug("Ignoring bus event: %s", event_type)
            return
        await broadcaster.notify(
            int(data["user_id"]),
            data["title"],
            data["content"],
            data["notification_type"],
        )

    return _on_bus_event


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    app.state.redis = aioredis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
    )
    logger.info("Redis connection pool created")

    subscriber = RedisPubSubSubscriber(
        app.state.redis,
        settings.REDIS_NOTIFICATIONS_CHANNEL,
        _make_bus_handler(app.state.broadcaster),
    )
    await subscriber.start()
    app.state.pubsub_subscriber = subscriber

    yield

    await subscriber.stop()
    await app.state.redis.aclose()
    await dispose_engine()
    logger.info("Redis pool and database engine closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Chama Chat Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    registry = InMemoryConnectionRegistry()
    app.state.registry = registry
    app.state.broadcaster = NotificationBroadcaster(registry)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(messages.router)
    app.include_router(notifications.router)
    app.include_router(ws.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(_req: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.detail})

    @app.exception_handler(ForbiddenError)
    async def _forbidden(_req: Request, exc: ForbiddenError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": exc.detail})

    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})

    @app.exception_handler(ServiceUnavailableError)
    async def _unavailable(_req: Request, exc: ServiceUnavailableError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": exc.detail})
