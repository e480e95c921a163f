from __future__ import annotations

from datetime import datetime
from typing import Protocol

from chama_chat.application.dto.message import NewMessageDTO
from chama_chat.domain.entities.message import Message


class MessageReader(Protocol):
    async def get_by_id(self, message_id: int) -> Message | None: ...

    async def list_direct_for_user(
        self,
        user_id: int,
        *,
        after_id: int | None = None,
        limit: int = 50,
    ) -> list[Message]:
        """Direct messages the user sent or received, ascending by id."""
        ...

    async def list_for_group(
        self,
        group_id: int,
        *,
        after_id: int | None = None,
        limit: int = 50,
    ) -> list[Message]: ...


class MessageWriter(Protocol):
    async def create(self, draft: NewMessageDTO, sent_at: datetime) -> Message: ...

    async def mark_read(self, message_id: int) -> Message | None: ...
