"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends, HTTPException, status
from fastapi.requests import HTTPConnection
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from chama_chat.application.dto.principal import Principal
from chama_chat.application.ports.auth import TokenVerifier
from chama_chat.application.ports.connection import ConnectionRegistry
from chama_chat.config import settings
from chama_chat.infrastructure.auth.hs256_verifier import HS256Verifier
from chama_chat.infrastructure.auth.jwks_verifier import JWKSVerifier
from chama_chat.infrastructure.db.gateway import SqlAlchemyChatGateway
from chama_chat.infrastructure.db.session import AsyncSessionLocal
from chama_chat.infrastructure.db.uow import SqlAlchemyUoW
from chama_chat.services.notification_broadcaster import NotificationBroadcaster

_bearer_scheme = HTTPBearer()


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        try:
            yield uow
        finally:
            await session.close()


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def get_chat_gateway() -> SqlAlchemyChatGateway:
    return SqlAlchemyChatGateway(AsyncSessionLocal)


ChatGatewayDep = Annotated[SqlAlchemyChatGateway, Depends(get_chat_gateway)]


def get_registry(conn: HTTPConnection) -> ConnectionRegistry:
    return conn.app.state.registry


RegistryDep = Annotated[ConnectionRegistry, Depends(get_registry)]


def get_broadcaster(conn: HTTPConnection) -> NotificationBroadcaster:
    return conn.app.state.broadcaster


BroadcasterDep = Annotated[NotificationBroadcaster, Depends(get_broadcaster)]


def _get_verifier() -> TokenVerifier:
    if settings.JWT_VERIFY_MODE == "jwks":
        assert settings.JWKS_URL, "JWKS_URL must be set when JWT_VERIFY_MODE=jwks"
        return JWKSVerifier(settings.JWKS_URL)
    return HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM)


_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = _get_verifier()
    return _verifier


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(_bearer_scheme)],
) -> Principal:
    verifier = get_verifier()
    try:
        return await verifier.verify(credentials.credentials)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


async def get_current_admin(principal: CurrentPrincipal) -> Principal:
    if not principal.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return principal


CurrentAdmin = Annotated[Principal, Depends(get_current_admin)]
