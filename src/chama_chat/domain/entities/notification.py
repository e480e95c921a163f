from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Notification:
    id: int
    user_id: int
    type: str
    title: str
    content: str
    read: bool
    created_at: datetime
    related_id: int | None = None
