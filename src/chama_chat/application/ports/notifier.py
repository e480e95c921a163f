from __future__ import annotations

from typing import Protocol


class Notifier(Protocol):
    async def notify(
        self,
        user_id: int,
        title: str,
        content: str,
        notification_type: str,
    ) -> bool: ...
