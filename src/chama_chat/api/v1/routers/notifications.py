from __future__ import annotations

from fastapi import APIRouter, Query

from chama_chat.api.deps import BroadcasterDep, CurrentAdmin, CurrentPrincipal, UoWDep
from chama_chat.api.v1.schemas.notification import (
    CreateNotificationRequest,
    CreateNotificationResponse,
    NotificationResponse,
)
from chama_chat.application.dto.notification import NewNotificationDTO
from chama_chat.services import notification_service

router = APIRouter(prefix="/api/v1", tags=["notifications"])


@router.get("/notifications", response_model=list[NotificationResponse])
async def list_notifications(
    principal: CurrentPrincipal,
    uow: UoWDep,
    limit: int = Query(50, ge=1, le=200),
) -> list[NotificationResponse]:
    items = await notification_service.list_notifications(principal, limit, uow)
    return [NotificationResponse.model_validate(n, from_attributes=True) for n in items]


@router.post("/notifications/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> NotificationResponse:
    notification = await notification_service.mark_read(notification_id, principal, uow)
    return NotificationResponse.model_validate(notification, from_attributes=True)


@router.post(
    "/admin/notifications",
    response_model=CreateNotificationResponse,
    status_code=201,
)
async def send_notification(
    body: CreateNotificationRequest,
    _admin: CurrentAdmin,
    uow: UoWDep,
    broadcaster: BroadcasterDep,
) -> CreateNotificationResponse:
    notification, delivered = await notification_service.create_and_notify(
        NewNotificationDTO(
            user_id=body.user_id,
            title=body.title,
            content=body.content,
            type=body.type.value,
            related_id=body.related_id,
        ),
        uow,
        broadcaster,
    )
    return CreateNotificationResponse(
        notification=NotificationResponse.model_validate(notification, from_attributes=True),
        delivered=delivered,
    )
