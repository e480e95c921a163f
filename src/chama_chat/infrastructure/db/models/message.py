from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from chama_chat.infrastructure.db.base import Base


class MessageModel(Base):
    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    recipient_user_id: Mapped[int | None] = mapped_column(
        "recipient_id",
        Integer,
        ForeignKey("users.id"),
        nullable=True,
    )
    group_id: Mapped[int | None] = mapped_column(
        "chama_id",
        Integer,
        ForeignKey("chamas.id"),
        nullable=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    sent_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )
    read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    __table_args__ = (
        CheckConstraint(
            "(recipient_id IS NULL) <> (chama_id IS NULL)",
            name="ck_messages_single_target",
        ),
        Index("ix_messages_sender", "sender_id", "id"),
        Index("ix_messages_recipient", "recipient_id", "id"),
        Index("ix_messages_chama", "chama_id", "id"),
    )
