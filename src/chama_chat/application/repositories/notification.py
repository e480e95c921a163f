from __future__ import annotations

from typing import Protocol

from chama_chat.application.dto.notification import NewNotificationDTO
from chama_chat.domain.entities.notification import Notification


class NotificationReader(Protocol):
    async def get_by_id(self, notification_id: int) -> Notification | None: ...

    async def list_for_user(self, user_id: int, *, limit: int = 50) -> list[Notification]:
        """Newest first."""
        ...


class NotificationWriter(Protocol):
    async def create(self, draft: NewNotificationDTO) -> Notification: ...

    async def mark_read(self, notification_id: int) -> Notification | None: ...
