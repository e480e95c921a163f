from __future__ import annotations

from chama_chat.application.dto.principal import Principal
from chama_chat.application.policies.permissions import (
    assert_can_mark_read,
    assert_group_member,
)
from chama_chat.application.uow import UnitOfWork
from chama_chat.domain.entities.message import Message


async def list_direct_messages(
    principal: Principal,
    after_id: int | None,
    limit: int,
    uow: UnitOfWork,
) -> list[Message]:
    return await uow.messages.list_direct_for_user(
        principal.user_id, after_id=after_id, limit=limit,
    )


async def list_group_messages(
    group_id: int,
    principal: Principal,
    after_id: int | None,
    limit: int,
    uow: UnitOfWork,
) -> list[Message]:
    await assert_group_member(principal, group_id, uow.members)
    return await uow.messages.list_for_group(group_id, after_id=after_id, limit=limit)


async def mark_read(
    message_id: int,
    principal: Principal,
    uow: UnitOfWork,
) -> Message:
    """Flip the read flag. Already-read messages are returned unchanged."""
    message = await uow.messages.get_by_id(message_id)
    message = await assert_can_mark_read(principal, message, uow.members)
    if message.read:
        return message

    updated = await uow.messages_w.mark_read(message_id)
    await uow.commit()
    return updated or message
