from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chama_chat.application.dto.notification import NewNotificationDTO
from chama_chat.domain.entities.notification import Notification
from chama_chat.infrastructure.db.mappers import notification as mapper
from chama_chat.infrastructure.db.models.notification import NotificationModel


class NotificationReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, notification_id: int) -> Notification | None:
        model = await self._session.get(NotificationModel, notification_id)
        return mapper.model_to_entity(model) if model else None

    async def list_for_user(self, user_id: int, *, limit: int = 50) -> list[Notification]:
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class NotificationWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, draft: NewNotificationDTO) -> Notification:
        model = NotificationModel(
            user_id=draft.user_id,
            type=draft.type,
            title=draft.title,
            content=draft.content,
            related_id=draft.related_id,
            read=False,
            created_at=datetime.now(timezone.utc),
        )
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def mark_read(self, notification_id: int) -> Notification | None:
        model = await self._session.get(NotificationModel, notification_id)
        if model is None:
            return None
        model.read = True
        await self._session.flush()
        return mapper.model_to_entity(model)
