from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from chama_chat.api.deps import ChatGatewayDep, RegistryDep
from chama_chat.api.middleware.correlation_id import correlation_id_ctx, new_correlation_id
from chama_chat.config import settings
from chama_chat.services.connection_session import ConnectionSession
from chama_chat.services.message_router import MessageRouter

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])


async def _receive_frame(websocket: WebSocket) -> str | bytes | None:
    """Next text or binary payload; raises WebSocketDisconnect on close."""
    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", status.WS_1000_NORMAL_CLOSURE))
    if message.get("text") is not None:
        return message["text"]
    return message.get("bytes")


@router.websocket(settings.WS_PATH)
async def ws_chat(
    websocket: WebSocket,
    registry: RegistryDep,
    gateway: ChatGatewayDep,
) -> None:
    token = correlation_id_ctx.set(new_correlation_id("ws-"))
    await websocket.accept()

    message_router = MessageRouter(
        registry,
        identity=gateway,
        membership=gateway,
        store=gateway,
    )
    session = ConnectionSession(websocket, registry, message_router)
    try:
        while True:
            raw = await _receive_frame(websocket)
            if raw is None:
                continue
            await session.handle_text(raw)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WS error for user %s", session.user_id)
        try:
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        except RuntimeError:
            logger.debug("Socket already closed for user %s", session.user_id)
    finally:
        await session.close()
        correlation_id_ctx.reset(token)
