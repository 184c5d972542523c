# backend/classroom_scheduler/routes/v1/departments.py
import asyncio
from typing import List

from fastapi import APIRouter, Body, Depends, status

from ...api.dependencies import get_department_service
from ...core.exceptions import DomainException
from ...schemas.academic import DepartmentCreate, DepartmentResponse, DepartmentUpdate
from ...services.department_service import DepartmentService
from ._common import handle_domain_exception

router = APIRouter(tags=["departments-v1"])


@router.get("", response_model=List[DepartmentResponse])
async def list_departments(
    department_service: DepartmentService = Depends(get_department_service),
) -> List[DepartmentResponse]:
    try:
        return await asyncio.to_thread(department_service.list_departments)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
async def create_department(
    department_data: DepartmentCreate = Body(...),
    department_service: DepartmentService = Depends(get_department_service),
) -> DepartmentResponse:
    try:
        return await asyncio.to_thread(department_service.create_department, department_data)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: int,
    department_service: DepartmentService = Depends(get_department_service),
) -> DepartmentResponse:
    try:
        return await asyncio.to_thread(department_service.get_department, department_id)
    except DomainException as e:
        handle_domain_exception(e)


@router.put("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: int,
    department_data: DepartmentUpdate = Body(...),
    department_service: DepartmentService = Depends(get_department_service),
) -> DepartmentResponse:
    try:
        return await asyncio.to_thread(
            department_service.update_department, department_id, department_data
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_department(
    department_id: int,
    department_service: DepartmentService = Depends(get_department_service),
) -> None:
    try:
        await asyncio.to_thread(department_service.delete_department, department_id)
    except DomainException as e:
        handle_domain_exception(e)
