from __future__ import annotations

from dataclasses import dataclass

from chama_chat.domain.value_objects.enums import NotificationType


@dataclass(frozen=True, slots=True)
class NewNotificationDTO:
    user_id: int
    title: str
    content: str
    type: str = NotificationType.ANNOUNCEMENT
    related_id: int | None = None
