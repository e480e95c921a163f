from __future__ import annotations

from fastapi import APIRouter, Query

from chama_chat.api.deps import CurrentPrincipal, UoWDep
from chama_chat.api.v1.schemas.message import MessageResponse
from chama_chat.services import message_service

router = APIRouter(prefix="/api/v1", tags=["messages"])


@router.get("/messages", response_model=list[MessageResponse])
async def list_direct_messages(
    principal: CurrentPrincipal,
    uow: UoWDep,
    after_id: int | None = Query(None, ge=0),
    limit: int = Query(50, ge=1, le=200),
) -> list[MessageResponse]:
    messages = await message_service.list_direct_messages(principal, after_id, limit, uow)
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.get("/groups/{group_id}/messages", response_model=list[MessageResponse])
async def list_group_messages(
    group_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
    after_id: int | None = Query(None, ge=0),
    limit: int = Query(50, ge=1, le=200),
) -> list[MessageResponse]:
    messages = await message_service.list_group_messages(
        group_id, principal, after_id, limit, uow,
    )
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.post("/messages/{message_id}/read", response_model=MessageResponse)
async def mark_message_read(
    message_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageResponse:
    msg = await message_service.mark_read(message_id, principal, uow)
    return MessageResponse.model_validate(msg, from_attributes=True)
