from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from chama_chat.domain.value_objects.enums import MemberRole


@dataclass(frozen=True, slots=True)
class GroupMember:
    group_id: int
    user_id: int
    role: str = MemberRole.MEMBER
    joined_at: datetime | None = None
