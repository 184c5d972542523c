# backend/classroom_scheduler/routes/v1/rooms.py
"""
Room routes - API v1

Endpoints:
    GET / - List rooms
    POST / - Create a room
    GET /available - Rooms free for a date and time window
    GET /{room_id} - Room details
    PUT /{room_id} - Update a room
    DELETE /{room_id} - Delete a room without schedules
"""

import asyncio
from datetime import date, time
from typing import List

from fastapi import APIRouter, Body, Depends, Query, status

from ...api.dependencies import get_room_service
from ...core.exceptions import DomainException
from ...schemas.room import RoomCreate, RoomResponse, RoomUpdate
from ...services.room_service import RoomService
from ._common import handle_domain_exception

router = APIRouter(tags=["rooms-v1"])


@router.get("", response_model=List[RoomResponse])
async def list_rooms(room_service: RoomService = Depends(get_room_service)) -> List[RoomResponse]:
    try:
        return await asyncio.to_thread(room_service.list_rooms)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    room_data: RoomCreate = Body(...),
    room_service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    try:
        return await asyncio.to_thread(room_service.create_room, room_data)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/available", response_model=List[RoomResponse])
async def find_available_rooms(
    target_date: date = Query(..., alias="date"),
    start_time: time = Query(..., description="Window start (HH:MM)"),
    end_time: time = Query(..., description="Window end (HH:MM)"),
    room_service: RoomService = Depends(get_room_service),
) -> List[RoomResponse]:
    try:
        return await asyncio.to_thread(
            room_service.find_available_rooms, target_date, start_time, end_time
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(
    room_id: int, room_service: RoomService = Depends(get_room_service)
) -> RoomResponse:
    try:
        return await asyncio.to_thread(room_service.get_room, room_id)
    except DomainException as e:
        handle_domain_exception(e)


@router.put("/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: int,
    room_data: RoomUpdate = Body(...),
    room_service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    try:
        return await asyncio.to_thread(room_service.update_room, room_id, room_data)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(room_id: int, room_service: RoomService = Depends(get_room_service)) -> None:
    try:
        await asyncio.to_thread(room_service.delete_room, room_id)
    except DomainException as e:
        handle_domain_exception(e)
