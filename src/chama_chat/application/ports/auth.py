from __future__ import annotations

from typing import Protocol

from chama_chat.application.dto.principal import Principal


class TokenVerifier(Protocol):
    async def verify(self, token: str) -> Principal:
        """Return the caller for a bearer token or raise if it is invalid."""
        ...
