# backend/classroom_scheduler/routes/v1/programs.py
import asyncio
from typing import List

from fastapi import APIRouter, Body, Depends, status

from ...api.dependencies import get_program_service
from ...core.exceptions import DomainException
from ...schemas.academic import ProgramCreate, ProgramResponse, ProgramUpdate
from ...services.program_service import ProgramService
from ._common import handle_domain_exception

router = APIRouter(tags=["programs-v1"])


@router.get("", response_model=List[ProgramResponse])
async def list_programs(
    program_service: ProgramService = Depends(get_program_service),
) -> List[ProgramResponse]:
    try:
        return await asyncio.to_thread(program_service.list_programs)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("", response_model=ProgramResponse, status_code=status.HTTP_201_CREATED)
async def create_program(
    program_data: ProgramCreate = Body(...),
    program_service: ProgramService = Depends(get_program_service),
) -> ProgramResponse:
    try:
        return await asyncio.to_thread(program_service.create_program, program_data)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/department/{department_id}", response_model=List[ProgramResponse])
async def get_programs_by_department(
    department_id: int,
    program_service: ProgramService = Depends(get_program_service),
) -> List[ProgramResponse]:
    try:
        return await asyncio.to_thread(program_service.get_programs_by_department, department_id)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{program_id}", response_model=ProgramResponse)
async def get_program(
    program_id: int, program_service: ProgramService = Depends(get_program_service)
) -> ProgramResponse:
    try:
        return await asyncio.to_thread(program_service.get_program, program_id)
    except DomainException as e:
        handle_domain_exception(e)


@router.put("/{program_id}", response_model=ProgramResponse)
async def update_program(
    program_id: int,
    program_data: ProgramUpdate = Body(...),
    program_service: ProgramService = Depends(get_program_service),
) -> ProgramResponse:
    try:
        return await asyncio.to_thread(program_service.update_program, program_id, program_data)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{program_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_program(
    program_id: int, program_service: ProgramService = Depends(get_program_service)
) -> None:
    try:
        await asyncio.to_thread(program_service.delete_program, program_id)
    except DomainException as e:
        handle_domain_exception(e)
