from __future__ import annotations

from chama_chat.domain.entities.notification import Notification
from chama_chat.infrastructure.db.models.notification import NotificationModel


def model_to_entity(model: NotificationModel) -> Notification:
    return Notification(
        id=model.id,
        user_id=model.user_id,
        type=model.type,
        title=model.title,
        content=model.content,
        read=bool(model.read),
        created_at=model.created_at,
        related_id=model.related_id,
    )
