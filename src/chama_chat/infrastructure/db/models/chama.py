from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chama_chat.infrastructure.db.base import Base


class ChamaModel(Base):
    __tablename__ = "chamas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    founded: Mapped[datetime | None] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=text("now()"),
    )
    created_by: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)

    members = relationship("ChamaMemberModel", back_populates="chama", lazy="noload")


class ChamaMemberModel(Base):
    __tablename__ = "chama_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chama_id: Mapped[int] = mapped_column(Integer, ForeignKey("chamas.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="member",
        server_default=text("'member'"),
    )  # chairperson | treasurer | secretary | member
    joined_at: Mapped[datetime | None] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=text("now()"),
    )

    chama = relationship("ChamaModel", back_populates="members")

    __table_args__ = (
        UniqueConstraint("chama_id", "user_id", name="unique_membership"),
        Index("ix_chama_members_user", "user_id"),
    )
