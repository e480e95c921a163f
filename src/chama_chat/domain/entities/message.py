from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Message:
    """A persisted chat message. Exactly one of recipient_user_id / group_id is set."""

    id: int
    sender_id: int
    recipient_user_id: int | None
    group_id: int | None
    content: str
    sent_at: datetime
    read: bool = False

    @property
    def is_direct(self) -> bool:
        return self.recipient_user_id is not None
