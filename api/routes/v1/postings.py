"""
Job posting endpoints.

Postings are published from approved requirements and can be announced to a
list of subscribers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import (
    get_acting_user_id,
    get_posting_manager,
    get_workflow,
)
from api.schemas.common import ERROR_RESPONSES
from api.schemas.postings import (
    BroadcastResponse,
    PostingBroadcast,
    PostingCreate,
    PostingDetailResponse,
    PostingListResponse,
    PostingResponse,
    PostingStatusUpdate,
)
from api.services.postings import JobPostingManager
from api.services.recruitment import RecruitmentWorkflow

router = APIRouter(prefix="/postings", responses=ERROR_RESPONSES)


@router.post(
    "",
    summary="Create Job Posting",
    description="Publish a posting from an approved job requirement.",
    status_code=status.HTTP_201_CREATED,
    response_model=PostingResponse,
)
async def create_posting(
    payload: PostingCreate,
    user_id: int = Depends(get_acting_user_id),
    manager: JobPostingManager = Depends(get_posting_manager),
):
    posting = manager.create(
        requirement_id=payload.requirement_id,
        title=payload.title,
        description=payload.description,
        location=payload.location,
        salary_range=payload.salary_range,
        application_deadline=payload.application_deadline,
        created_by=user_id,
    )
    return PostingResponse(message="Job posting created successfully", posting=posting)


@router.get("", summary="List Job Postings", response_model=PostingListResponse)
async def list_postings(
    status: str = Query("open", description="Filter by status (open, closed, filled)"),
    department: Optional[str] = Query(None, description="Filter by department"),
    location: Optional[str] = Query(None, description="Filter by location"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of results"),
    manager: JobPostingManager = Depends(get_posting_manager),
):
    """List postings; only open postings unless another status is asked for."""
    postings = manager.list_postings(status=status, department=department, location=location)
    return PostingListResponse(total=len(postings), postings=postings[:limit])


@router.get(
    "/{posting_id}",
    summary="Get Job Posting",
    description="Get a posting together with per-status candidate counts.",
    response_model=PostingDetailResponse,
)
async def get_posting(
    posting_id: int = Path(..., description="Posting ID"),
    manager: JobPostingManager = Depends(get_posting_manager),
):
    return {"posting": manager.get_with_stats(posting_id)}


@router.put("/{posting_id}/status", summary="Update Posting Status", response_model=PostingResponse)
async def update_posting_status(
    payload: PostingStatusUpdate,
    posting_id: int = Path(..., description="Posting ID"),
    manager: JobPostingManager = Depends(get_posting_manager),
):
    posting = manager.update_status(posting_id, payload.status)
    return PostingResponse(message="Job posting status updated", posting=posting)


@router.post(
    "/{posting_id}/broadcast",
    summary="Announce Job Posting",
    description="Queue a new-opening e-mail to the given addresses.",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=BroadcastResponse,
)
async def broadcast_posting(
    payload: PostingBroadcast,
    posting_id: int = Path(..., description="Posting ID"),
    workflow: RecruitmentWorkflow = Depends(get_workflow),
):
    result = workflow.broadcast_posting(posting_id, payload.emails)
    return BroadcastResponse(message="Job posting notification queued", **result)
