"""One-time script: create the Redis Streams consumer group for chama events."""
from __future__ import annotations

import asyncio
import logging

import redis.asyncio as aioredis

from chama_chat.config import settings
from chama_chat.infrastructure.bus.redis_streams import ensure_consumer_group
from chama_chat.log_config import configure_logging

logger = logging.getLogger(__name__)


async def create_group() -> None:
    r = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    try:
        created = await ensure_consumer_group(
            r, settings.CHAMA_EVENTS_STREAM, settings.CHAMA_EVENTS_GROUP,
        )
        if not created:
            logger.info("Consumer group '%s' already exists", settings.CHAMA_EVENTS_GROUP)
    finally:
        await r.aclose()


def main() -> None:
    configure_logging()
    asyncio.run(create_group())


if __name__ == "__main__":
    main()
