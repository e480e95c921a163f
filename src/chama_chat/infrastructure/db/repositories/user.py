from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chama_chat.domain.entities.group_member import GroupMember
from chama_chat.domain.entities.user import User
from chama_chat.infrastructure.db.mappers import user as mapper
from chama_chat.infrastructure.db.models.chama import ChamaMemberModel
from chama_chat.infrastructure.db.models.user import UserModel


class UserReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: int) -> User | None:
        model = await self._session.get(UserModel, user_id)
        return mapper.model_to_entity(model) if model else None


class MemberReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def is_member(self, group_id: int, user_id: int) -> bool:
        stmt = (
            select(ChamaMemberModel.id)
            .where(
                ChamaMemberModel.chama_id == group_id,
                ChamaMemberModel.user_id == user_id,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_members(self, group_id: int) -> list[GroupMember]:
        stmt = (
            select(ChamaMemberModel)
            .where(ChamaMemberModel.chama_id == group_id)
            .order_by(ChamaMemberModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.member_to_entity(m) for m in result.scalars().all()]
