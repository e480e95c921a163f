"""Seed development data: users, one chama with members, and a few messages."""
from __future__ import annotations

import asyncio
import logging

from chama_chat.application.dto.message import NewMessageDTO
from chama_chat.application.ports.clock import MonotonicUtcClock
from chama_chat.domain.value_objects.enums import MemberRole
from chama_chat.infrastructure.db.base import Base
from chama_chat.infrastructure.db.models import ChamaMemberModel, ChamaModel, UserModel
from chama_chat.infrastructure.db.session import AsyncSessionLocal, engine
from chama_chat.infrastructure.db.uow import SqlAlchemyUoW
from chama_chat.log_config import configure_logging

logger = logging.getLogger(__name__)

_USERS = [
    ("wanjiku", "Wanjiku Kamau", MemberRole.CHAIRPERSON),
    ("otieno", "Otieno Odhiambo", MemberRole.TREASURER),
    ("akinyi", "Akinyi Achieng", MemberRole.MEMBER),
]


async def seed() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    clock = MonotonicUtcClock()
    async with AsyncSessionLocal() as session:
        users = [
            UserModel(
                username=username,
                email=f"{username}@example.com",
                password="!",
                full_name=full_name,
            )
            for username, full_name, _role in _USERS
        ]
        session.add_all(users)
        await session.flush()

        chama = ChamaModel(name="Umoja Savers", description="Dev chama", created_by=users[0].id)
        session.add(chama)
        await session.flush()

        session.add_all(
            ChamaMemberModel(chama_id=chama.id, user_id=user.id, role=role)
            for user, (_u, _n, role) in zip(users, _USERS)
        )
        await session.flush()

        uow = SqlAlchemyUoW(session)
        drafts = [
            NewMessageDTO(sender_id=users[0].id, group_id=chama.id, content="Karibu wote! Meeting on Saturday."),
            NewMessageDTO(sender_id=users[1].id, group_id=chama.id, content="Contributions are due Friday."),
            NewMessageDTO(sender_id=users[2].id, recipient_user_id=users[1].id, content="Sent my share via M-Pesa."),
        ]
        for draft in drafts:
            await uow.messages_w.create(draft, clock.now())

        await uow.commit()
        logger.info("Seeded chama %d with %d members and %d messages", chama.id, len(users), len(drafts))


def main() -> None:
    configure_logging()
    asyncio.run(seed())


if __name__ == "__main__":
    main()
