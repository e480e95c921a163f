from __future__ import annotations

from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from chama_chat.application.dto.message import NewMessageDTO
from chama_chat.domain.entities.message import Message
from chama_chat.infrastructure.db.mappers import message as mapper
from chama_chat.infrastructure.db.models.message import MessageModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, message_id: int) -> Message | None:
        model = await self._session.get(MessageModel, message_id)
        return mapper.model_to_entity(model) if model else None

    async def list_direct_for_user(
        self,
        user_id: int,
        *,
        after_id: int | None = None,
        limit: int = 50,
    ) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(
                MessageModel.recipient_user_id.is_not(None),
                or_(
                    MessageModel.sender_id == user_id,
                    MessageModel.recipient_user_id == user_id,
                ),
            )
            .order_by(MessageModel.id.asc())
            .limit(limit)
        )
        if after_id is not None:
            stmt = stmt.where(MessageModel.id > after_id)
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_for_group(
        self,
        group_id: int,
        *,
        after_id: int | None = None,
        limit: int = 50,
    ) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(MessageModel.group_id == group_id)
            .order_by(MessageModel.id.asc())
            .limit(limit)
        )
        if after_id is not None:
            stmt = stmt.where(MessageModel.id > after_id)
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, draft: NewMessageDTO, sent_at: datetime) -> Message:
        model = MessageModel(
            sender_id=draft.sender_id,
            recipient_user_id=draft.recipient_user_id,
            group_id=draft.group_id,
            content=draft.content,
            sent_at=sent_at,
            read=False,
        )
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def mark_read(self, message_id: int) -> Message | None:
        model = await self._session.get(MessageModel, message_id)
        if model is None:
            return None
        model.read = True
        await self._session.flush()
        return mapper.model_to_entity(model)
