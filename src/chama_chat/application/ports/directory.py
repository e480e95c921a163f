from __future__ import annotations

from typing import Protocol

from chama_chat.domain.entities.group_member import GroupMember
from chama_chat.domain.entities.user import User


class IdentityProvider(Protocol):
    async def get_user(self, user_id: int) -> User | None: ...


class MembershipProvider(Protocol):
    async def get_group_members(self, group_id: int) -> list[GroupMember]: ...
