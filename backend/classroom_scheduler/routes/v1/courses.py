# backend/classroom_scheduler/routes/v1/courses.py
import asyncio
from typing import List

from fastapi import APIRouter, Body, Depends, status

from ...api.dependencies import get_course_service
from ...core.exceptions import DomainException
from ...schemas.academic import CourseCreate, CourseResponse, CourseUpdate
from ...services.course_service import CourseService
from ._common import handle_domain_exception

router = APIRouter(tags=["courses-v1"])


@router.get("", response_model=List[CourseResponse])
async def list_courses(
    course_service: CourseService = Depends(get_course_service),
) -> List[CourseResponse]:
    try:
        return await asyncio.to_thread(course_service.list_courses)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
async def create_course(
    course_data: CourseCreate = Body(...),
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    try:
        return await asyncio.to_thread(course_service.create_course, course_data)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/program/{program_id}", response_model=List[CourseResponse])
async def get_courses_by_program(
    program_id: int, course_service: CourseService = Depends(get_course_service)
) -> List[CourseResponse]:
    try:
        return await asyncio.to_thread(course_service.get_courses_by_program, program_id)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{course_id}", response_model=CourseResponse)
async def get_course(
    course_id: int, course_service: CourseService = Depends(get_course_service)
) -> CourseResponse:
    try:
        return await asyncio.to_thread(course_service.get_course, course_id)
    except DomainException as e:
        handle_domain_exception(e)


@router.put("/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: int,
    course_data: CourseUpdate = Body(...),
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    try:
        return await asyncio.to_thread(course_service.update_course, course_id, course_data)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: int, course_service: CourseService = Depends(get_course_service)
) -> None:
    try:
        await asyncio.to_thread(course_service.delete_course, course_id)
    except DomainException as e:
        handle_domain_exception(e)
