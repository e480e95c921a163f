"""In-process registry of live WebSocket connections."""
from __future__ import annotations

import asyncio
import logging

from chama_chat.application.ports.connection import ConnectionHandle

logger = logging.getLogger(__name__)


class InMemoryConnectionRegistry:
    """One live connection per user id.

    A new registration for a user replaces the previous entry without closing
    it; the superseded socket is left to fail its own writes and close.
    """

    def __init__(self) -> None:
        self._connections: dict[int, ConnectionHandle] = {}
        self._lock = asyncio.Lock()

    async def register(self, user_id: int, connection: ConnectionHandle) -> None:
        async with self._lock:
            previous = self._connections.get(user_id)
            self._connections[user_id] = connection
            total = len(self._connections)
        if previous is not None and previous is not connection:
            logger.info("User %d reconnected, previous connection superseded", user_id)
        logger.debug("User %d registered (online=%d)", user_id, total)

    async def lookup(self, user_id: int) -> ConnectionHandle | None:
        async with self._lock:
            return self._connections.get(user_id)

    async def unregister(self, user_id: int, connection: ConnectionHandle) -> bool:
        async with self._lock:
            if self._connections.get(user_id) is not connection:
                return False
            del self._connections[user_id]
            total = len(self._connections)
        logger.debug("User %d unregistered (online=%d)", user_id, total)
        return True

    def online_count(self) -> int:
        return len(self._connections)
