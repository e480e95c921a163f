from __future__ import annotations

from typing import Protocol


class ConnectionHandle(Protocol):
    """Outbound half of a live client connection.

    The transport owns the lifecycle; holders of a handle only write to it.
    """

    async def send_text(self, data: str) -> None: ...


class ConnectionRegistry(Protocol):
    """Maps an authenticated user id to exactly one live connection."""

    async def register(self, user_id: int, connection: ConnectionHandle) -> None: ...

    async def lookup(self, user_id: int) -> ConnectionHandle | None: ...

    async def unregister(self, user_id: int, connection: ConnectionHandle) -> bool:
        """Remove the entry only if ``connection`` is the one registered."""
        ...
