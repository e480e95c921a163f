from __future__ import annotations

import logging

from chama_chat.application.dto.notification import NewNotificationDTO
from chama_chat.application.dto.principal import Principal
from chama_chat.application.policies.permissions import assert_notification_owner
from chama_chat.application.ports.notifier import Notifier
from chama_chat.application.uow import UnitOfWork
from chama_chat.domain.entities.notification import Notification

logger = logging.getLogger(__name__)


async def create_and_notify(
    draft: NewNotificationDTO,
    uow: UnitOfWork,
    notifier: Notifier,
) -> tuple[Notification, bool]:
    """Persist a notification, then attempt a live push.

    Returns (notification, pushed). The stored row is committed before the
    push and survives any push failure.
    """
    notification = await uow.notifications_w.create(draft)
    await uow.commit()

    try:
        pushed = await notifier.notify(
            notification.user_id,
            notification.title,
            notification.content,
            notification.type,
        )
    except Exception:
        logger.exception("Live push failed for notification %d", notification.id)
        pushed = False
    return notification, pushed


async def list_notifications(
    principal: Principal,
    limit: int,
    uow: UnitOfWork,
) -> list[Notification]:
    return await uow.notifications.list_for_user(principal.user_id, limit=limit)


async def mark_read(
    notification_id: int,
    principal: Principal,
    uow: UnitOfWork,
) -> Notification:
    notification = await uow.notifications.get_by_id(notification_id)
    notification = assert_notification_owner(principal, notification)
    if notification.read:
        return notification

    updated = await uow.notifications_w.mark_read(notification_id)
    await uow.commit()
    return updated or notification
