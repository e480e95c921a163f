from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NewMessageDTO:
    sender_id: int
    content: str
    recipient_user_id: int | None = None
    group_id: int | None = None
