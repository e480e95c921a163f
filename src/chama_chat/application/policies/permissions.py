from __future__ import annotations

from chama_chat.application.dto.principal import Principal
from chama_chat.application.exceptions import ForbiddenError, NotFoundError
from chama_chat.application.repositories.member import MemberReader
from chama_chat.domain.entities.message import Message
from chama_chat.domain.entities.notification import Notification


async def assert_group_member(
    principal: Principal,
    group_id: int,
    members: MemberReader,
) -> None:
    """Raise unless the caller belongs to the chama (admins always pass)."""
    if principal.is_admin:
        return
    if not await members.is_member(group_id, principal.user_id):
        raise ForbiddenError("Not a member of this chama")


async def assert_can_mark_read(
    principal: Principal,
    message: Message | None,
    members: MemberReader,
) -> Message:
    if message is None:
        raise NotFoundError("Message not found")

    if message.is_direct:
        if message.recipient_user_id != principal.user_id:
            raise ForbiddenError("Only the recipient can mark this message as read")
        return message

    assert message.group_id is not None
    if not await members.is_member(message.group_id, principal.user_id):
        raise ForbiddenError("Not a member of this chama")
    return message


def assert_notification_owner(
    principal: Principal,
    notification: Notification | None,
) -> Notification:
    if notification is None or notification.user_id != principal.user_id:
        # Foreign notifications are reported as missing.
        raise NotFoundError("Notification not found")
    return notification


def assert_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise ForbiddenError("Admin access required")
