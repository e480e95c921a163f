from __future__ import annotations

from typing import Protocol

from chama_chat.domain.entities.group_member import GroupMember


class MemberReader(Protocol):
    async def is_member(self, group_id: int, user_id: int) -> bool: ...

    async def list_members(self, group_id: int) -> list[GroupMember]: ...
