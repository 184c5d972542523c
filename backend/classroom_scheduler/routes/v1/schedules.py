# backend/classroom_scheduler/routes/v1/schedules.py
"""
Schedule routes - API v1

Versioned schedule endpoints under /api/v1/schedules.
All business logic delegated to ScheduleService.

Endpoints:
    GET / - List all schedules
    POST / - Create a schedule
    POST /recurring - Create one schedule per date of a weekly pattern
    PATCH /batch/status - Set the status of many schedules
    DELETE /batch - Delete many schedules
    GET /date/{date} - Schedules on a date
    GET /user/{user_id} - Schedules assigned to a user
    GET /email/{email} - Schedules assigned to the user with this email
    GET /{schedule_id} - Schedule details
    PUT /{schedule_id} - Replace a schedule (resets status to PENDING)
    PATCH /{schedule_id}/status - Set a schedule's status
    DELETE /{schedule_id} - Delete a schedule
"""

import asyncio
from datetime import date
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ...api.dependencies import get_acting_user, get_schedule_service, require_acting_user
from ...core.exceptions import DomainException
from ...models.schedule import ScheduleStatus
from ...models.user import User
from ...schemas.schedule import (
    BatchStatusUpdateRequest,
    RecurringScheduleRequest,
    ScheduleCreate,
    ScheduleResponse,
    ScheduleUpdate,
)
from ...services.schedule_service import ScheduleService
from ._common import handle_domain_exception

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["schedules-v1"])


# ============================================================================
# SECTION 1: Static routes (no path parameters)
# ============================================================================


@router.get("", response_model=List[ScheduleResponse])
async def list_schedules(
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> List[ScheduleResponse]:
    try:
        return await asyncio.to_thread(schedule_service.get_all_schedules)
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "",
    response_model=ScheduleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "Room, user or course not found"},
        409: {"description": "Room already booked for an overlapping window"},
    },
)
async def create_schedule(
    schedule_data: ScheduleCreate = Body(...),
    acting_user: Optional[User] = Depends(get_acting_user),
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> ScheduleResponse:
    try:
        return await asyncio.to_thread(
            schedule_service.create_schedule, schedule_data, acting_user
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/recurring",
    response_model=List[ScheduleResponse],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Recurrence expands to too many dates"},
        404: {"description": "Room, user or course not found"},
        409: {"description": "At least one date conflicts; nothing was created"},
    },
)
async def create_recurring_schedule(
    request: RecurringScheduleRequest = Body(...),
    acting_user: Optional[User] = Depends(get_acting_user),
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> List[ScheduleResponse]:
    try:
        return await asyncio.to_thread(
            schedule_service.create_recurring_schedule, request, acting_user
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/batch/status", response_model=List[ScheduleResponse])
async def update_schedule_status_batch(
    request: BatchStatusUpdateRequest = Body(...),
    acting_user: User = Depends(require_acting_user),
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> List[ScheduleResponse]:
    """Unknown ids are skipped; the response lists the schedules that were updated."""
    try:
        return await asyncio.to_thread(
            schedule_service.update_schedule_status_batch,
            request.ids,
            request.status,
            acting_user,
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/batch", status_code=status.HTTP_204_NO_CONTENT)
async def delete_schedules_batch(
    schedule_ids: List[int] = Body(..., min_length=1),
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> None:
    try:
        await asyncio.to_thread(schedule_service.delete_schedules_batch, schedule_ids)
    except DomainException as e:
        handle_domain_exception(e)


# ============================================================================
# SECTION 2: Filtered lists
# ============================================================================


@router.get("/date/{target_date}", response_model=List[ScheduleResponse])
async def get_schedules_by_date(
    target_date: date,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> List[ScheduleResponse]:
    try:
        return await asyncio.to_thread(schedule_service.get_schedules_by_date, target_date)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/user/{user_id}", response_model=List[ScheduleResponse])
async def get_schedules_by_user(
    user_id: int,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> List[ScheduleResponse]:
    try:
        return await asyncio.to_thread(schedule_service.get_schedules_by_user, user_id)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/email/{email}", response_model=List[ScheduleResponse])
async def get_schedules_by_email(
    email: str,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> List[ScheduleResponse]:
    try:
        return await asyncio.to_thread(schedule_service.get_schedules_by_email, email)
    except DomainException as e:
        handle_domain_exception(e)


# ============================================================================
# SECTION 3: Dynamic routes (with path parameters - placed last)
# ============================================================================


@router.get("/{schedule_id}", response_model=ScheduleResponse)
async def get_schedule(
    schedule_id: int,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> ScheduleResponse:
    try:
        return await asyncio.to_thread(schedule_service.get_schedule_by_id, schedule_id)
    except DomainException as e:
        handle_domain_exception(e)


@router.put(
    "/{schedule_id}",
    response_model=ScheduleResponse,
    responses={
        404: {"description": "Schedule, room, user or course not found"},
        409: {"description": "Room already booked for an overlapping window"},
    },
)
async def update_schedule(
    schedule_id: int,
    schedule_data: ScheduleUpdate = Body(...),
    acting_user: Optional[User] = Depends(get_acting_user),
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> ScheduleResponse:
    try:
        return await asyncio.to_thread(
            schedule_service.update_schedule, schedule_id, schedule_data, acting_user
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{schedule_id}/status", response_model=ScheduleResponse)
async def update_schedule_status(
    schedule_id: int,
    new_status: ScheduleStatus = Query(..., alias="status"),
    acting_user: Optional[User] = Depends(get_acting_user),
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> ScheduleResponse:
    try:
        return await asyncio.to_thread(
            schedule_service.update_schedule_status, schedule_id, new_status, acting_user
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_schedule(
    schedule_id: int,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> None:
    try:
        await asyncio.to_thread(schedule_service.delete_schedule, schedule_id)
    except DomainException as e:
        handle_domain_exception(e)
