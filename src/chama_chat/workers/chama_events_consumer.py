"""Turns platform events from Redis Streams into user notifications."""
from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any

import redis.asyncio as aioredis

from chama_chat.application.dto.notification import NewNotificationDTO
from chama_chat.application.ports.notifier import Notifier
from chama_chat.application.uow import UnitOfWork
from chama_chat.config import settings
from chama_chat.domain.value_objects.enums import NotificationType
from chama_chat.infrastructure.bus.redis_pubsub import PubSubNotifier, RedisPubSubPublisher
from chama_chat.infrastructure.bus.redis_streams import RedisStreamConsumer
from chama_chat.infrastructure.db.session import AsyncSessionLocal, dispose_engine
from chama_chat.infrastructure.db.uow import SqlAlchemyUoW
from chama_chat.log_config import configure_logging
from chama_chat.services import notification_service

logger = logging.getLogger(__name__)


def _optional_int(value: Any) -> int | None:
    return int(value) if value not in (None, "") else None


def drafts_for_contribution_due(fields: dict[str, Any]) -> list[NewNotificationDTO]:
    amount = fields.get("amount", "")
    due_date = fields.get("due_date", "")
    return [
        NewNotificationDTO(
            user_id=int(fields["user_id"]),
            type=NotificationType.CONTRIBUTION_DUE,
            title="Contribution Due",
            content=f"Your contribution of KES {amount} is due on {due_date}",
            related_id=_optional_int(fields.get("contribution_id")),
        )
    ]


def drafts_for_loan_approved(fields: dict[str, Any]) -> list[NewNotificationDTO]:
    return [
        NewNotificationDTO(
            user_id=int(fields["user_id"]),
            type=NotificationType.LOAN_APPROVED,
            title="Loan Approved",
            content=f"Your loan of KES {fields.get('amount', '')} has been approved",
            related_id=_optional_int(fields.get("loan_id")),
        )
    ]


async def drafts_for_meeting_scheduled(
    fields: dict[str, Any],
    uow: UnitOfWork,
) -> list[NewNotificationDTO]:
    chama_id = int(fields["chama_id"])
    title = fields.get("title", "")
    scheduled_for = fields.get("scheduled_for", "")
    members = await uow.members.list_members(chama_id)
    return [
        NewNotificationDTO(
            user_id=member.user_id,
            type=NotificationType.MEETING_SCHEDULED,
            title="New Meeting Scheduled",
            content=f'A new meeting "{title}" has been scheduled for {scheduled_for}',
            related_id=_optional_int(fields.get("meeting_id")),
        )
        for member in members
    ]


async def handle_event(
    event_type: str,
    fields: dict[str, Any],
    uow: UnitOfWork,
    notifier: Notifier,
) -> int:
    """Persist and publish the notifications for one event. Returns how many."""
    if event_type == "contribution.due":
        drafts = drafts_for_contribution_due(fields)
    elif event_type == "loan.approved":
        drafts = drafts_for_loan_approved(fields)
    elif event_type == "meeting.scheduled":
        drafts = await drafts_for_meeting_scheduled(fields, uow)
    else:
        logger.debug("Ignoring unknown event: %s", event_type)
        return 0

    for draft in drafts:
        await notification_service.create_and_notify(draft, uow, notifier)
    logger.info("Event %s produced %d notification(s)", event_type, len(drafts))
    return len(drafts)


async def run_consumer() -> None:
    redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    notifier = PubSubNotifier(RedisPubSubPublisher(redis), settings.REDIS_NOTIFICATIONS_CHANNEL)
    consumer_name = f"consumer-{uuid.uuid4().hex[:8]}"

    async def _on_event(event_type: str, fields: dict[str, Any]) -> None:
        async with AsyncSessionLocal() as session:
            async with SqlAlchemyUoW(session) as uow:
                await handle_event(event_type, fields, uow, notifier)

    consumer = RedisStreamConsumer(
        redis=redis,
        stream=settings.CHAMA_EVENTS_STREAM,
        group=settings.CHAMA_EVENTS_GROUP,
        consumer=consumer_name,
        callback=_on_event,
    )
    await consumer.start()
    logger.info("Chama events consumer started (%s)", consumer_name)

    try:
        while True:
            await asyncio.sleep(3600)
    except asyncio.CancelledError:
        pass
    finally:
        await consumer.stop()
        await redis.aclose()
        await dispose_engine()


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(run_consumer())


if __name__ == "__main__":
    main()
