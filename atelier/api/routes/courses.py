"""
Courses API.

Paged course listing for the admin grids, in the wire format the grids'
infinite feed and pagination control consume.
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException, status

from atelier.api.deps import get_course_service, list_page_params
from atelier.api.schemas import CourseListResponse, CourseResponse, PaginationResponse
from atelier.components.catalog import (
    CatalogService,
    Course,
    GetRecordInput,
    ListPageInput,
    run_get,
    run_list_page,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=CourseListResponse)
def list_courses(
    input_data: ListPageInput = Depends(list_page_params),
    service: CatalogService[Course] = Depends(get_course_service),
) -> CourseListResponse:
    """List courses a page at a time, newest first unless sorted."""
    try:
        output = run_list_page(input_data, service)
    except sqlite3.Error as e:
        logger.exception("Error fetching courses")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch courses",
        ) from e

    if not output.success or output.result is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="; ".join(e.message for e in output.errors),
        )

    return CourseListResponse(
        courses=[CourseResponse.from_course(c) for c in output.result.records],
        pagination=PaginationResponse.from_info(output.result.pagination),
    )


@router.get("/{course_id}", response_model=CourseResponse)
def get_course(
    course_id: int,
    service: CatalogService[Course] = Depends(get_course_service),
) -> CourseResponse:
    try:
        output = run_get(GetRecordInput(record_id=course_id), service)
    except sqlite3.Error as e:
        logger.exception("Error fetching course %s", course_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch course",
        ) from e

    if output.record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

    return CourseResponse.from_course(output.record)
