from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from chama_chat.domain.value_objects.enums import NotificationType


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    type: str
    title: str
    content: str
    read: bool
    created_at: datetime
    related_id: int | None

    model_config = {"from_attributes": True}


class CreateNotificationRequest(BaseModel):
    user_id: int = Field(gt=0)
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    type: NotificationType = NotificationType.ANNOUNCEMENT
    related_id: int | None = None


class CreateNotificationResponse(BaseModel):
    notification: NotificationResponse
    delivered: bool
