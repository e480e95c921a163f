from __future__ import annotations

from typing import Protocol

from chama_chat.application.repositories.member import MemberReader
from chama_chat.application.repositories.message import MessageReader, MessageWriter
from chama_chat.application.repositories.notification import (
    NotificationReader,
    NotificationWriter,
)
from chama_chat.application.repositories.user import UserReader


class UnitOfWork(Protocol):
    users: UserReader
    members: MemberReader
    messages: MessageReader
    messages_w: MessageWriter
    notifications: NotificationReader
    notifications_w: NotificationWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
