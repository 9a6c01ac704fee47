"""
Job requirement endpoints.

HR raises headcount requests; an approver accepts or rejects them before any
posting can be published.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import get_acting_user_id, get_requirement_manager
from api.schemas.common import ERROR_RESPONSES
from api.schemas.requirements import (
    RequirementCreate,
    RequirementListResponse,
    RequirementReject,
    RequirementResponse,
)
from api.services.requirements import JobRequirementManager

router = APIRouter(prefix="/requirements", responses=ERROR_RESPONSES)


@router.post(
    "",
    summary="Create Job Requirement",
    status_code=status.HTTP_201_CREATED,
    response_model=RequirementResponse,
)
async def create_requirement(
    payload: RequirementCreate,
    user_id: int = Depends(get_acting_user_id),
    manager: JobRequirementManager = Depends(get_requirement_manager),
):
    """Request a new position; it starts out pending approval."""
    requirement = manager.create(
        title=payload.title,
        department=payload.department,
        budget=payload.budget,
        description=payload.description,
        positions=payload.positions,
        created_by=user_id,
    )
    return RequirementResponse(
        message="Job requirement created successfully", requirement=requirement
    )


@router.get("", summary="List Job Requirements", response_model=RequirementListResponse)
async def list_requirements(
    department: Optional[str] = Query(None, description="Filter by department"),
    status: Optional[str] = Query(None, description="Filter by status (pending, approved, rejected, closed)"),
    created_by: Optional[int] = Query(None, description="Filter by requesting user"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of results"),
    manager: JobRequirementManager = Depends(get_requirement_manager),
):
    requirements = manager.list_requirements(
        department=department, status=status, created_by=created_by
    )
    return RequirementListResponse(
        total=len(requirements), requirements=requirements[:limit]
    )


@router.get("/{requirement_id}", summary="Get Job Requirement", response_model=RequirementResponse)
async def get_requirement(
    requirement_id: int = Path(..., description="Requirement ID"),
    manager: JobRequirementManager = Depends(get_requirement_manager),
):
    return RequirementResponse(requirement=manager.get_by_id(requirement_id))


@router.put(
    "/{requirement_id}/approve",
    summary="Approve Job Requirement",
    response_model=RequirementResponse,
)
async def approve_requirement(
    requirement_id: int = Path(..., description="Requirement ID"),
    user_id: int = Depends(get_acting_user_id),
    manager: JobRequirementManager = Depends(get_requirement_manager),
):
    """Approve a requirement so postings can be published from it."""
    requirement = manager.approve(requirement_id, approved_by=user_id)
    return RequirementResponse(
        message="Job requirement approved successfully", requirement=requirement
    )


@router.put(
    "/{requirement_id}/reject",
    summary="Reject Job Requirement",
    response_model=RequirementResponse,
)
async def reject_requirement(
    requirement_id: int = Path(..., description="Requirement ID"),
    payload: Optional[RequirementReject] = None,
    manager: JobRequirementManager = Depends(get_requirement_manager),
):
    reason = payload.reason if payload else None
    requirement = manager.reject(requirement_id, reason=reason)
    return RequirementResponse(message="Job requirement rejected", requirement=requirement)
