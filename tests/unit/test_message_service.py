from __future__ import annotations

import pytest

from chama_chat.application.exceptions import ForbiddenError, NotFoundError
from chama_chat.services import message_service
from tests.conftest import FakeMemberReader, FakeMessageReader, FakeUoW, make_message


def _uow_with(*messages, members: dict[int, set[int]] | None = None) -> FakeUoW:
    return FakeUoW(
        messages=FakeMessageReader(list(messages)),
        members=FakeMemberReader(members or {}),
    )


@pytest.mark.asyncio
async def test_direct_history_includes_sent_and_received(user_principal):
    uow = _uow_with(
        make_message(message_id=1, sender_id=7, recipient_user_id=9),
        make_message(message_id=2, sender_id=9, recipient_user_id=7),
        make_message(message_id=3, sender_id=9, recipient_user_id=11),
        make_message(message_id=4, sender_id=7, recipient_user_id=None, group_id=3),
    )

    result = await message_service.list_direct_messages(user_principal, None, 50, uow)

    assert [m.id for m in result] == [1, 2]


@pytest.mark.asyncio
async def test_direct_history_after_id(user_principal):
    uow = _uow_with(
        make_message(message_id=1, sender_id=7, recipient_user_id=9),
        make_message(message_id=2, sender_id=9, recipient_user_id=7),
    )

    result = await message_service.list_direct_messages(user_principal, 1, 50, uow)

    assert [m.id for m in result] == [2]


@pytest.mark.asyncio
async def test_group_history_for_member(user_principal):
    uow = _uow_with(
        make_message(message_id=1, recipient_user_id=None, group_id=3),
        make_message(message_id=2, recipient_user_id=None, group_id=4),
        members={3: {7, 9}},
    )

    result = await message_service.list_group_messages(3, user_principal, None, 50, uow)

    assert [m.id for m in result] == [1]


@pytest.mark.asyncio
async def test_group_history_forbidden_for_outsider(user_principal):
    uow = _uow_with(members={3: {9}})

    with pytest.raises(ForbiddenError):
        await message_service.list_group_messages(3, user_principal, None, 50, uow)


@pytest.mark.asyncio
async def test_group_history_open_to_admin(admin_principal):
    uow = _uow_with(make_message(message_id=1, recipient_user_id=None, group_id=3))

    result = await message_service.list_group_messages(3, admin_principal, None, 50, uow)

    assert len(result) == 1


@pytest.mark.asyncio
async def test_recipient_marks_direct_message_read(user_principal):
    uow = _uow_with(make_message(message_id=5, sender_id=9, recipient_user_id=7))

    msg = await message_service.mark_read(5, user_principal, uow)

    assert msg.read is True
    assert uow._commits == 1


@pytest.mark.asyncio
async def test_sender_cannot_mark_direct_message_read(user_principal):
    uow = _uow_with(make_message(message_id=5, sender_id=7, recipient_user_id=9))

    with pytest.raises(ForbiddenError):
        await message_service.mark_read(5, user_principal, uow)
    assert not uow._committed


@pytest.mark.asyncio
async def test_member_marks_group_message_read(user_principal):
    uow = _uow_with(
        make_message(message_id=5, sender_id=9, recipient_user_id=None, group_id=3),
        members={3: {7, 9}},
    )

    msg = await message_service.mark_read(5, user_principal, uow)

    assert msg.read is True


@pytest.mark.asyncio
async def test_outsider_cannot_mark_group_message_read(user_principal):
    uow = _uow_with(
        make_message(message_id=5, sender_id=9, recipient_user_id=None, group_id=3),
        members={3: {9}},
    )

    with pytest.raises(ForbiddenError):
        await message_service.mark_read(5, user_principal, uow)


@pytest.mark.asyncio
async def test_mark_read_missing_message(user_principal):
    with pytest.raises(NotFoundError):
        await message_service.mark_read(404, user_principal, _uow_with())


@pytest.mark.asyncio
async def test_mark_read_twice_commits_once(user_principal):
    uow = _uow_with(make_message(message_id=5, sender_id=9, recipient_user_id=7))

    await message_service.mark_read(5, user_principal, uow)
    again = await message_service.mark_read(5, user_principal, uow)

    assert again.read is True
    assert uow._commits == 1
