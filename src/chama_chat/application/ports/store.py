from __future__ import annotations

from typing import Protocol

from chama_chat.application.dto.message import NewMessageDTO
from chama_chat.domain.entities.message import Message


class MessageStore(Protocol):
    async def create_message(self, draft: NewMessageDTO) -> Message:
        """Durably persist one message and return it with id and sent_at assigned."""
        ...
