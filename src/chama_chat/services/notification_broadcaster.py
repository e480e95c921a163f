from __future__ import annotations

import logging

from chama_chat.application.ports.clock import Clock, SystemClock
from chama_chat.application.ports.connection import ConnectionRegistry
from chama_chat.infrastructure.ws.protocol import NotificationOutbound

logger = logging.getLogger(__name__)


class NotificationBroadcaster:
    """Best-effort live push of one-off notifications to a connected user.

    Nothing is queued or retried: if the user has no live connection the
    notification is dropped here and only the caller's durable copy remains.
    """

    def __init__(self, registry: ConnectionRegistry, clock: Clock | None = None) -> None:
        self._registry = registry
        self._clock = clock or SystemClock()

    async def broadcast(self, notification: NotificationOutbound) -> bool:
        connection = await self._registry.lookup(notification.user_id)
        if connection is None:
            logger.debug("User %d offline, notification not pushed", notification.user_id)
            return False
        try:
            await connection.send_text(notification.to_wire())
        except Exception:
            logger.warning(
                "Notification push to user %d failed", notification.user_id, exc_info=True,
            )
            return False
        return True

    async def notify(
        self,
        user_id: int,
        title: str,
        content: str,
        notification_type: str,
    ) -> bool:
        return await self.broadcast(
            NotificationOutbound(
                user_id=user_id,
                title=title,
                content=content,
                notification_type=notification_type,
                sent_at=self._clock.now(),
            )
        )
