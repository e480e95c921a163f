"""Validate, persist and fan out chat messages."""
from __future__ import annotations

import logging

from chama_chat.application.dto.message import NewMessageDTO
from chama_chat.application.exceptions import (
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from chama_chat.application.ports.connection import ConnectionHandle, ConnectionRegistry
from chama_chat.application.ports.directory import IdentityProvider, MembershipProvider
from chama_chat.application.ports.store import MessageStore
from chama_chat.domain.entities.message import Message
from chama_chat.infrastructure.ws.protocol import ChatEnvelope, ChatOutbound

logger = logging.getLogger(__name__)


class MessageRouter:
    """Routes one accepted chat envelope to its live recipients.

    The message is persisted exactly once before any delivery is attempted,
    and the envelope carries the stored id and timestamp.
    Live delivery is best effort: recipients without a registered connection
    get nothing, and a failed push never affects the other recipients or the
    stored record.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        identity: IdentityProvider,
        membership: MembershipProvider,
        store: MessageStore,
    ) -> None:
        self._registry = registry
        self._identity = identity
        self._membership = membership
        self._store = store

    async def route(
        self,
        sender_id: int,
        sender_connection: ConnectionHandle,
        envelope: ChatEnvelope,
    ) -> Message:
        draft = _validate(sender_id, envelope)

        try:
            sender = await self._identity.get_user(sender_id)
        except Exception as exc:
            logger.exception("Identity lookup failed for user %d", sender_id)
            raise ServiceUnavailableError("Failed to send message") from exc
        if sender is None:
            raise NotFoundError("User not found")

        try:
            message = await self._store.create_message(draft)
        except Exception as exc:
            logger.exception("Failed to persist message from user %d", sender_id)
            raise ServiceUnavailableError("Failed to send message") from exc

        outbound = ChatOutbound(
            message_id=message.id,
            sender_id=sender.id,
            sender_display_name=sender.display_name,
            recipient_user_id=message.recipient_user_id,
            group_id=message.group_id,
            content=message.content,
            sent_at=message.sent_at,
        )
        raw = outbound.to_wire()

        if message.recipient_user_id is not None:
            await self._deliver_direct(message.recipient_user_id, sender_id, sender_connection, raw)
        else:
            assert message.group_id is not None
            await self._deliver_group(message.group_id, raw)

        return message

    async def _deliver_direct(
        self,
        recipient_id: int,
        sender_id: int,
        sender_connection: ConnectionHandle,
        raw: str,
    ) -> None:
        recipient_connection = await self._registry.lookup(recipient_id)
        if recipient_connection is not None and recipient_connection is not sender_connection:
            await _push(recipient_connection, raw, recipient_id)
        # The sender's UI learns about its own message through the same channel.
        await _push(sender_connection, raw, sender_id)

    async def _deliver_group(self, group_id: int, raw: str) -> None:
        try:
            members = await self._membership.get_group_members(group_id)
        except Exception:
            logger.exception("Membership lookup failed for chama %d, message stored only", group_id)
            return

        seen: set[int] = set()
        delivered = 0
        for member in members:
            if member.user_id in seen:
                continue
            seen.add(member.user_id)
            connection = await self._registry.lookup(member.user_id)
            if connection is None:
                continue
            if await _push(connection, raw, member.user_id):
                delivered += 1
        logger.debug("Chama %d fan-out: %d/%d members reached", group_id, delivered, len(seen))


def _validate(sender_id: int, envelope: ChatEnvelope) -> NewMessageDTO:
    content = envelope.content
    if content is None or not content.strip():
        raise ValidationError("Message content is required")

    recipient_id = envelope.recipient_user_id
    group_id = envelope.group_id
    if recipient_id is None and group_id is None:
        raise ValidationError("Message must have either recipientUserId or groupId")
    if recipient_id is not None and group_id is not None:
        raise ValidationError("Message cannot have both recipientUserId and groupId")

    return NewMessageDTO(
        sender_id=sender_id,
        content=content,
        recipient_user_id=recipient_id,
        group_id=group_id,
    )


async def _push(connection: ConnectionHandle, raw: str, user_id: int) -> bool:
    try:
        await connection.send_text(raw)
    except Exception:
        logger.warning("Live delivery to user %d failed", user_id, exc_info=True)
        return False
    return True
