from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class MessageResponse(BaseModel):
    id: int
    sender_id: int
    recipient_user_id: int | None
    group_id: int | None
    content: str
    sent_at: datetime
    read: bool

    model_config = {"from_attributes": True}
