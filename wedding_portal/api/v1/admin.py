from __future__ import annotations

from fastapi import APIRouter, Depends

from wedding_portal.api.auth import require_admin_token
from wedding_portal.api.v1.errors import HANDLED_ERRORS, to_http_error
from wedding_portal.api.v1.schemas import (
    AdminReplyRequestSchema,
    AdminReplyResponseSchema,
    AdminRequestListSchema,
    BookingResponseSchema,
    StatusUpdateRequestSchema,
    booking_to_schema,
)
from wedding_portal.application.use_cases.admin_console import AdminConsoleUseCase
from wedding_portal.domain.entities.booking_request import RequestStatus
from wedding_portal.wiring.dependencies import get_admin_console

router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin_token)])


@router.get("/requests", response_model=AdminRequestListSchema)
def list_requests(
    status: RequestStatus | None = None,
    uc: AdminConsoleUseCase = Depends(get_admin_console),
):
    return AdminRequestListSchema(requests=[booking_to_schema(b) for b in uc.list_requests(status)])


@router.get("/requests/{request_id}", response_model=BookingResponseSchema)
def get_request(request_id: str, uc: AdminConsoleUseCase = Depends(get_admin_console)):
    try:
        booking = uc.get_request(request_id)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return booking_to_schema(booking)


@router.post("/requests/{request_id}/reply", response_model=AdminReplyResponseSchema)
def reply(
    request_id: str,
    req: AdminReplyRequestSchema,
    uc: AdminConsoleUseCase = Depends(get_admin_console),
):
    try:
        result = uc.reply(request_id, req.body, sent_by=req.sent_by)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return AdminReplyResponseSchema(request=booking_to_schema(result.booking), delivery=result.delivery)


@router.put("/requests/{request_id}/status", response_model=BookingResponseSchema)
def update_status(
    request_id: str,
    req: StatusUpdateRequestSchema,
    uc: AdminConsoleUseCase = Depends(get_admin_console),
):
    try:
        booking = uc.update_status(request_id, req.status)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return booking_to_schema(booking)
