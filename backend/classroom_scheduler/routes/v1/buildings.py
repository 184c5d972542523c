# backend/classroom_scheduler/routes/v1/buildings.py
import asyncio
from typing import List

from fastapi import APIRouter, Body, Depends, status

from ...api.dependencies import get_building_service
from ...core.exceptions import DomainException
from ...schemas.room import BuildingCreate, BuildingResponse, BuildingUpdate
from ...services.building_service import BuildingService
from ._common import handle_domain_exception

router = APIRouter(tags=["buildings-v1"])


@router.get("", response_model=List[BuildingResponse])
async def list_buildings(
    building_service: BuildingService = Depends(get_building_service),
) -> List[BuildingResponse]:
    try:
        return await asyncio.to_thread(building_service.list_buildings)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("", response_model=BuildingResponse, status_code=status.HTTP_201_CREATED)
async def create_building(
    building_data: BuildingCreate = Body(...),
    building_service: BuildingService = Depends(get_building_service),
) -> BuildingResponse:
    try:
        return await asyncio.to_thread(building_service.create_building, building_data)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{building_id}", response_model=BuildingResponse)
async def get_building(
    building_id: int, building_service: BuildingService = Depends(get_building_service)
) -> BuildingResponse:
    try:
        return await asyncio.to_thread(building_service.get_building, building_id)
    except DomainException as e:
        handle_domain_exception(e)


@router.put("/{building_id}", response_model=BuildingResponse)
async def update_building(
    building_id: int,
    building_data: BuildingUpdate = Body(...),
    building_service: BuildingService = Depends(get_building_service),
) -> BuildingResponse:
    try:
        return await asyncio.to_thread(
            building_service.update_building, building_id, building_data
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{building_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_building(
    building_id: int, building_service: BuildingService = Depends(get_building_service)
) -> None:
    try:
        await asyncio.to_thread(building_service.delete_building, building_id)
    except DomainException as e:
        handle_domain_exception(e)
