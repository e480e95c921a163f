from __future__ import annotations

from chama_chat.domain.entities.message import Message
from chama_chat.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        sender_id=model.sender_id,
        recipient_user_id=model.recipient_user_id,
        group_id=model.group_id,
        content=model.content,
        sent_at=model.sent_at,
        read=bool(model.read),
    )
