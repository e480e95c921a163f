"""WebSocket envelope models. JSON keys on the wire are camelCase."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from chama_chat.domain.value_objects.enums import EnvelopeKind


class _Envelope(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class InboundEnvelope(_Envelope):
    """Client → Server, parsed only far enough to dispatch on ``kind``."""

    kind: str


class AuthEnvelope(_Envelope):
    kind: Literal["auth"]
    user_id: int = Field(gt=0, strict=True)


class ChatEnvelope(_Envelope):
    kind: Literal["chat"]
    content: str | None = Field(default=None, strict=True)
    recipient_user_id: int | None = Field(default=None, gt=0, strict=True)
    group_id: int | None = Field(default=None, gt=0, strict=True)


class ChatOutbound(_Envelope):
    """Server → Client: a delivered chat message."""

    kind: EnvelopeKind = EnvelopeKind.CHAT
    message_id: int
    sender_id: int
    sender_display_name: str
    recipient_user_id: int | None = None
    group_id: int | None = None
    content: str
    sent_at: datetime


class NotificationOutbound(_Envelope):
    kind: EnvelopeKind = EnvelopeKind.NOTIFICATION
    user_id: int
    title: str
    content: str
    notification_type: str
    sent_at: datetime


class ErrorOutbound(_Envelope):
    kind: EnvelopeKind = EnvelopeKind.ERROR
    message: str
