"""Shared test fixtures."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from chama_chat.application.dto.message import NewMessageDTO
from chama_chat.application.dto.notification import NewNotificationDTO
from chama_chat.application.dto.principal import Principal
from chama_chat.domain.entities.group_member import GroupMember
from chama_chat.domain.entities.message import Message
from chama_chat.domain.entities.notification import Notification
from chama_chat.domain.entities.user import User
from chama_chat.domain.value_objects.enums import UserRole
from chama_chat.infrastructure.ws.registry import InMemoryConnectionRegistry


@pytest.fixture
def user_principal() -> Principal:
    return Principal(user_id=7, role=UserRole.USER)


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(user_id=1, role=UserRole.ADMIN)


@pytest.fixture
def registry() -> InMemoryConnectionRegistry:
    return InMemoryConnectionRegistry()


class StepClock:
    """Deterministic clock advancing one second per reading."""

    def __init__(self, start: datetime | None = None) -> None:
        self._current = start or datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        value = self._current
        self._current += timedelta(seconds=1)
        return value


class SendFailed(Exception):
    pass


@dataclass(eq=False)
class FakeConnection:
    """Records every frame sent to it; optionally fails every send."""

    name: str = "conn"
    fail: bool = False
    sent: list[str] = field(default_factory=list)

    async def send_text(self, data: str) -> None:
        if self.fail:
            raise SendFailed(f"{self.name} is closed")
        self.sent.append(data)

    @property
    def frames(self) -> list[dict[str, Any]]:
        return [json.loads(raw) for raw in self.sent]


def make_message(
    *,
    message_id: int = 1,
    sender_id: int = 7,
    recipient_user_id: int | None = 9,
    group_id: int | None = None,
    content: str = "hello",
    read: bool = False,
) -> Message:
    return Message(
        id=message_id,
        sender_id=sender_id,
        recipient_user_id=recipient_user_id,
        group_id=group_id,
        content=content,
        sent_at=datetime.now(timezone.utc),
        read=read,
    )


def make_notification(
    *,
    notification_id: int = 1,
    user_id: int = 7,
    read: bool = False,
) -> Notification:
    return Notification(
        id=notification_id,
        user_id=user_id,
        type="contribution_due",
        title="Contribution Due",
        content="Your contribution of KES 500 is due",
        read=read,
        created_at=datetime.now(timezone.utc),
    )


@dataclass
class FakeChatGateway:
    """In-memory IdentityProvider + MembershipProvider + MessageStore."""

    users: dict[int, User] = field(default_factory=dict)
    groups: dict[int, list[int]] = field(default_factory=dict)
    messages: list[Message] = field(default_factory=list)
    clock: StepClock = field(default_factory=StepClock)
    fail_store: bool = False
    store_calls: int = 0

    def add_user(self, user_id: int, display_name: str | None = None) -> User:
        user = User(id=user_id, display_name=display_name or f"User {user_id}")
        self.users[user_id] = user
        return user

    async def get_user(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    async def get_group_members(self, group_id: int) -> list[GroupMember]:
        return [GroupMember(group_id=group_id, user_id=uid) for uid in self.groups.get(group_id, [])]

    async def create_message(self, draft: NewMessageDTO) -> Message:
        self.store_calls += 1
        if self.fail_store:
            raise RuntimeError("database unavailable")
        message = Message(
            id=len(self.messages) + 1,
            sender_id=draft.sender_id,
            recipient_user_id=draft.recipient_user_id,
            group_id=draft.group_id,
            content=draft.content,
            sent_at=self.clock.now(),
        )
        self.messages.append(message)
        return message


@dataclass
class FakeNotifier:
    pushed: list[tuple[int, str, str, str]] = field(default_factory=list)
    online: bool = True

    async def notify(self, user_id: int, title: str, content: str, notification_type: str) -> bool:
        self.pushed.append((user_id, title, content, notification_type))
        return self.online


@dataclass
class FakeUserReader:
    _users: dict[int, User] = field(default_factory=dict)

    async def get_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)


@dataclass
class FakeMemberReader:
    _members: dict[int, set[int]] = field(default_factory=dict)

    async def is_member(self, group_id: int, user_id: int) -> bool:
        return user_id in self._members.get(group_id, set())

    async def list_members(self, group_id: int) -> list[GroupMember]:
        return [
            GroupMember(group_id=group_id, user_id=uid)
            for uid in sorted(self._members.get(group_id, set()))
        ]


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def get_by_id(self, message_id: int) -> Message | None:
        return next((m for m in self._messages if m.id == message_id), None)

    async def list_direct_for_user(
        self, user_id: int, *, after_id: int | None = None, limit: int = 50,
    ) -> list[Message]:
        return [
            m for m in self._messages
            if m.recipient_user_id is not None
            and user_id in (m.sender_id, m.recipient_user_id)
            and (after_id is None or m.id > after_id)
        ][:limit]

    async def list_for_group(
        self, group_id: int, *, after_id: int | None = None, limit: int = 50,
    ) -> list[Message]:
        return [
            m for m in self._messages
            if m.group_id == group_id and (after_id is None or m.id > after_id)
        ][:limit]


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader

    async def create(self, draft: NewMessageDTO, sent_at: datetime) -> Message:
        message = Message(
            id=len(self._reader._messages) + 1,
            sender_id=draft.sender_id,
            recipient_user_id=draft.recipient_user_id,
            group_id=draft.group_id,
            content=draft.content,
            sent_at=sent_at,
        )
        self._reader._messages.append(message)
        return message

    async def mark_read(self, message_id: int) -> Message | None:
        for i, m in enumerate(self._reader._messages):
            if m.id == message_id:
                updated = Message(
                    id=m.id,
                    sender_id=m.sender_id,
                    recipient_user_id=m.recipient_user_id,
                    group_id=m.group_id,
                    content=m.content,
                    sent_at=m.sent_at,
                    read=True,
                )
                self._reader._messages[i] = updated
                return updated
        return None


@dataclass
class FakeNotificationReader:
    _notifications: list[Notification] = field(default_factory=list)

    async def get_by_id(self, notification_id: int) -> Notification | None:
        return next((n for n in self._notifications if n.id == notification_id), None)

    async def list_for_user(self, user_id: int, *, limit: int = 50) -> list[Notification]:
        mine = [n for n in self._notifications if n.user_id == user_id]
        return sorted(mine, key=lambda n: n.id, reverse=True)[:limit]


@dataclass
class FakeNotificationWriter:
    _reader: FakeNotificationReader

    async def create(self, draft: NewNotificationDTO) -> Notification:
        notification = Notification(
            id=len(self._reader._notifications) + 1,
            user_id=draft.user_id,
            type=draft.type,
            title=draft.title,
            content=draft.content,
            read=False,
            created_at=datetime.now(timezone.utc),
            related_id=draft.related_id,
        )
        self._reader._notifications.append(notification)
        return notification

    async def mark_read(self, notification_id: int) -> Notification | None:
        for i, n in enumerate(self._reader._notifications):
            if n.id == notification_id:
                updated = Notification(
                    id=n.id,
                    user_id=n.user_id,
                    type=n.type,
                    title=n.title,
                    content=n.content,
                    read=True,
                    created_at=n.created_at,
                    related_id=n.related_id,
                )
                self._reader._notifications[i] = updated
                return updated
        return None


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    users: FakeUserReader = field(default_factory=FakeUserReader)
    members: FakeMemberReader = field(default_factory=FakeMemberReader)
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    notifications: FakeNotificationReader = field(default_factory=FakeNotificationReader)
    notifications_w: FakeNotificationWriter | None = None
    _commits: int = 0

    def __post_init__(self) -> None:
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)
        if self.notifications_w is None:
            self.notifications_w = FakeNotificationWriter(self.notifications)

    @property
    def _committed(self) -> bool:
        return self._commits > 0

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._commits += 1

    async def rollback(self) -> None:
        pass
