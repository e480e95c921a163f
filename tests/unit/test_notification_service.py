from __future__ import annotations

import pytest

from chama_chat.application.dto.notification import NewNotificationDTO
from chama_chat.application.exceptions import NotFoundError
from chama_chat.services import notification_service
from tests.conftest import FakeNotificationReader, FakeNotifier, FakeUoW, make_notification


class ExplodingNotifier:
    async def notify(self, user_id, title, content, notification_type) -> bool:
        raise ConnectionError("redis down")


def _draft(user_id: int = 7) -> NewNotificationDTO:
    return NewNotificationDTO(
        user_id=user_id,
        title="Chama Announcement",
        content="AGM moved to Saturday",
    )


@pytest.mark.asyncio
async def test_create_persists_then_pushes():
    uow, notifier = FakeUoW(), FakeNotifier()

    notification, pushed = await notification_service.create_and_notify(_draft(), uow, notifier)

    assert pushed is True
    assert uow._commits == 1
    assert notification.type == "announcement"
    assert notifier.pushed == [(7, "Chama Announcement", "AGM moved to Saturday", "announcement")]


@pytest.mark.asyncio
async def test_create_for_offline_user_is_still_stored():
    uow, notifier = FakeUoW(), FakeNotifier(online=False)

    notification, pushed = await notification_service.create_and_notify(_draft(), uow, notifier)

    assert pushed is False
    assert await uow.notifications.get_by_id(notification.id) is not None


@pytest.mark.asyncio
async def test_push_failure_keeps_stored_row():
    uow = FakeUoW()

    notification, pushed = await notification_service.create_and_notify(
        _draft(), uow, ExplodingNotifier(),
    )

    assert pushed is False
    assert uow._committed
    assert await uow.notifications.get_by_id(notification.id) is not None


@pytest.mark.asyncio
async def test_list_returns_only_own_newest_first(user_principal):
    uow = FakeUoW(notifications=FakeNotificationReader([
        make_notification(notification_id=1, user_id=7),
        make_notification(notification_id=2, user_id=9),
        make_notification(notification_id=3, user_id=7),
    ]))

    items = await notification_service.list_notifications(user_principal, 50, uow)

    assert [n.id for n in items] == [3, 1]


@pytest.mark.asyncio
async def test_mark_read_own_notification(user_principal):
    uow = FakeUoW(notifications=FakeNotificationReader([make_notification(notification_id=1)]))

    notification = await notification_service.mark_read(1, user_principal, uow)

    assert notification.read is True
    assert uow._commits == 1


@pytest.mark.asyncio
async def test_mark_read_foreign_notification_is_not_found(user_principal):
    uow = FakeUoW(notifications=FakeNotificationReader([
        make_notification(notification_id=1, user_id=9),
    ]))

    with pytest.raises(NotFoundError):
        await notification_service.mark_read(1, user_principal, uow)


@pytest.mark.asyncio
async def test_mark_read_already_read_is_noop(user_principal):
    uow = FakeUoW(notifications=FakeNotificationReader([
        make_notification(notification_id=1, read=True),
    ]))

    notification = await notification_service.mark_read(1, user_principal, uow)

    assert notification.read is True
    assert not uow._committed
