"""Per-connection handshake state machine and envelope dispatch."""
from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError

from chama_chat.application.exceptions import AppError
from chama_chat.application.ports.connection import ConnectionHandle, ConnectionRegistry
from chama_chat.domain.value_objects.enums import ConnectionState, EnvelopeKind
from chama_chat.infrastructure.ws.protocol import (
    AuthEnvelope,
    ChatEnvelope,
    ErrorOutbound,
    InboundEnvelope,
)
from chama_chat.services.message_router import MessageRouter

logger = logging.getLogger(__name__)

AUTH_REQUIRED = "Authentication required"
INVALID_FORMAT = "Invalid message format"
INVALID_USER_ID = "Invalid userId"

_ALLOWED_TRANSITIONS: frozenset[tuple[ConnectionState, ConnectionState]] = frozenset({
    (ConnectionState.UNAUTHENTICATED, ConnectionState.AUTHENTICATED),
    (ConnectionState.AUTHENTICATED, ConnectionState.AUTHENTICATED),
})


class ConnectionSession:
    """Binds one transport connection to a user and dispatches its envelopes.

    Envelopes from a single connection are handled one at a time, in arrival
    order. Every failure is reported to this connection only.
    """

    def __init__(
        self,
        connection: ConnectionHandle,
        registry: ConnectionRegistry,
        router: MessageRouter,
    ) -> None:
        self._connection = connection
        self._registry = registry
        self._router = router
        self._state = ConnectionState.UNAUTHENTICATED
        self._user_id: int | None = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def user_id(self) -> int | None:
        return self._user_id

    async def handle_text(self, raw: str | bytes) -> None:
        try:
            envelope = InboundEnvelope.model_validate_json(raw)
        except PydanticValidationError:
            await self._send_error(INVALID_FORMAT)
            return

        if envelope.kind == EnvelopeKind.AUTH:
            await self._handle_auth(raw)
            return

        if self._state is not ConnectionState.AUTHENTICATED:
            await self._send_error(AUTH_REQUIRED)
            return

        if envelope.kind == EnvelopeKind.CHAT:
            await self._handle_chat(raw)
        else:
            logger.debug("Ignoring envelope kind=%r from user %s", envelope.kind, self._user_id)

    async def close(self) -> None:
        """Release the registry binding; call once the transport has closed."""
        if self._state is ConnectionState.AUTHENTICATED and self._user_id is not None:
            removed = await self._registry.unregister(self._user_id, self._connection)
            if removed:
                logger.info("User %d disconnected", self._user_id)
            else:
                logger.debug("User %d closed a superseded connection", self._user_id)

    async def _handle_auth(self, raw: str | bytes) -> None:
        try:
            auth = AuthEnvelope.model_validate_json(raw)
        except PydanticValidationError:
            await self._send_error(INVALID_USER_ID)
            return

        previous = self._user_id
        if previous is not None and previous != auth.user_id:
            await self._registry.unregister(previous, self._connection)
            logger.info("Connection rebound from user %d to user %d", previous, auth.user_id)

        await self._registry.register(auth.user_id, self._connection)
        self._user_id = auth.user_id
        self._transition(ConnectionState.AUTHENTICATED)
        if previous is None:
            logger.info("User %d connected", auth.user_id)

    async def _handle_chat(self, raw: str | bytes) -> None:
        try:
            chat = ChatEnvelope.model_validate_json(raw)
        except PydanticValidationError:
            await self._send_error(INVALID_FORMAT)
            return

        assert self._user_id is not None
        try:
            await self._router.route(self._user_id, self._connection, chat)
        except AppError as exc:
            await self._send_error(exc.detail)

    def _transition(self, target: ConnectionState) -> None:
        if (self._state, target) not in _ALLOWED_TRANSITIONS:
            raise RuntimeError(f"Illegal connection state change {self._state} -> {target}")
        self._state = target

    async def _send_error(self, message: str) -> None:
        await self._connection.send_text(ErrorOutbound(message=message).to_wire())
