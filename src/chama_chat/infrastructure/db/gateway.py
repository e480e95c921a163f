"""Database-backed collaborators for the real-time layer, one short-lived session per call."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chama_chat.application.dto.message import NewMessageDTO
from chama_chat.application.ports.clock import Clock, MonotonicUtcClock
from chama_chat.domain.entities.group_member import GroupMember
from chama_chat.domain.entities.message import Message
from chama_chat.domain.entities.user import User
from chama_chat.infrastructure.db.uow import SqlAlchemyUoW

_default_clock = MonotonicUtcClock()


class SqlAlchemyChatGateway:
    """Implements IdentityProvider, MembershipProvider and MessageStore."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Clock | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock or _default_clock

    async def get_user(self, user_id: int) -> User | None:
        async with self._session_factory() as session:
            return await SqlAlchemyUoW(session).users.get_by_id(user_id)

    async def get_group_members(self, group_id: int) -> list[GroupMember]:
        async with self._session_factory() as session:
            return await SqlAlchemyUoW(session).members.list_members(group_id)

    async def create_message(self, draft: NewMessageDTO) -> Message:
        async with self._session_factory() as session:
            async with SqlAlchemyUoW(session) as uow:
                message = await uow.messages_w.create(draft, self._clock.now())
                await uow.commit()
                return message
