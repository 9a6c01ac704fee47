"""
Candidate management endpoints.

Provides REST API for applying, listing, moving candidates through the
pipeline and recording interviews. Candidate e-mails are queued after each
change is saved; a failed e-mail never fails the request.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status

from api.dependencies import (
    get_candidate_manager,
    get_resume_storage,
    get_workflow,
)
from api.schemas.candidates import (
    ApplicationResponse,
    BulkStatusUpdate,
    BulkUpdateResponse,
    CandidateListResponse,
    CandidateResponse,
    CandidateStatusUpdate,
    CandidatesByPostingResponse,
    InterviewCreate,
    StatusHistoryResponse,
)
from api.schemas.common import ERROR_RESPONSES
from api.services.candidates import CandidateLifecycleManager
from api.services.recruitment import RecruitmentWorkflow
from core.config import settings
from core.exceptions import RecruitmentError, ValidationError
from core.storage.local import LocalStorage
from core.utils.validators import is_present, split_skills, validate_email

router = APIRouter(responses=ERROR_RESPONSES)


@router.post(
    "/apply",
    summary="Apply for Job",
    description="Submit an application as a multipart form with an optional resume file.",
    status_code=status.HTTP_201_CREATED,
    response_model=ApplicationResponse,
)
async def apply_for_job(
    job_posting_id: Optional[int] = Form(None),
    candidate_name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    experience: Optional[str] = Form(None),
    skills: Optional[str] = Form(None, description="Comma-separated skills"),
    linkedin_profile: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    workflow: RecruitmentWorkflow = Depends(get_workflow),
    storage: LocalStorage = Depends(get_resume_storage),
):
    if is_present(email):
        valid, detail = validate_email(email)
        if not valid:
            raise ValidationError(f"Invalid email address: {detail}")

    resume_file = None
    if resume is not None and resume.filename:
        resume_file = storage.save_resume(
            await resume.read(), resume.filename, settings.max_resume_size_bytes
        )

    try:
        candidate = workflow.apply(
            job_posting_id=job_posting_id,
            candidate_name=candidate_name,
            email=email,
            phone=phone,
            resume=resume_file,
            experience=experience,
            skills=split_skills(skills),
            linkedin_profile=linkedin_profile,
        )
    except RecruitmentError:
        if resume_file:
            storage.delete(resume_file)
        raise

    return ApplicationResponse(
        message="Application submitted successfully",
        candidate=candidate,
        resume_file=resume_file,
    )


@router.get("/candidates", summary="List Candidates", response_model=CandidateListResponse)
async def list_candidates(
    job_posting_id: Optional[int] = Query(None, description="Filter by posting"),
    status: Optional[str] = Query(None, description="Filter by status"),
    email: Optional[str] = Query(None, description="Filter by e-mail"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of results"),
    manager: CandidateLifecycleManager = Depends(get_candidate_manager),
):
    candidates = manager.list_candidates(
        job_posting_id=job_posting_id, status=status, email=email
    )
    return CandidateListResponse(total=len(candidates), candidates=candidates[:limit])


@router.get(
    "/candidates/posting/{posting_id}",
    summary="Candidates by Posting",
    description="All candidates for a posting, grouped by status.",
    response_model=CandidatesByPostingResponse,
)
async def list_candidates_by_posting(
    posting_id: int = Path(..., description="Posting ID"),
    manager: CandidateLifecycleManager = Depends(get_candidate_manager),
):
    return {"candidates": manager.list_by_posting(posting_id)}


@router.get("/candidates/{candidate_id}", summary="Get Candidate", response_model=CandidateResponse)
async def get_candidate(
    candidate_id: int = Path(..., description="Candidate ID"),
    manager: CandidateLifecycleManager = Depends(get_candidate_manager),
):
    return CandidateResponse(candidate=manager.get_by_id(candidate_id))


@router.put(
    "/candidates/{candidate_id}/status",
    summary="Update Candidate Status",
    response_model=CandidateResponse,
)
async def update_candidate_status(
    payload: CandidateStatusUpdate,
    candidate_id: int = Path(..., description="Candidate ID"),
    workflow: RecruitmentWorkflow = Depends(get_workflow),
):
    """Move a candidate and queue the shortlisted/selected/rejected e-mail."""
    candidate = workflow.update_status(candidate_id, payload.status, payload.notes)
    return CandidateResponse(
        message=f"Candidate status updated to {candidate.status.value}",
        candidate=candidate,
    )


@router.post(
    "/candidates/{candidate_id}/interview",
    summary="Record Interview",
    status_code=status.HTTP_201_CREATED,
    response_model=CandidateResponse,
)
async def add_interview(
    payload: InterviewCreate,
    candidate_id: int = Path(..., description="Candidate ID"),
    workflow: RecruitmentWorkflow = Depends(get_workflow),
):
    """Record an interview; shortlisted candidates advance to interviewed."""
    candidate = workflow.add_interview(
        candidate_id,
        date=payload.date,
        interviewer=payload.interviewer,
        rating=payload.rating,
        feedback=payload.feedback,
        location=payload.location,
    )
    return CandidateResponse(message="Interview record added successfully", candidate=candidate)


@router.get(
    "/candidates/{candidate_id}/history",
    summary="Candidate Status History",
    response_model=StatusHistoryResponse,
)
async def get_status_history(
    candidate_id: int = Path(..., description="Candidate ID"),
    manager: CandidateLifecycleManager = Depends(get_candidate_manager),
):
    history = manager.status_history(candidate_id)
    return StatusHistoryResponse(candidate_id=candidate_id, total=len(history), history=history)


@router.post("/bulk-update", summary="Bulk Update Status", response_model=BulkUpdateResponse)
async def bulk_update_status(
    payload: BulkStatusUpdate,
    workflow: RecruitmentWorkflow = Depends(get_workflow),
):
    """Update several candidates to one status; failures are reported per candidate."""
    results = workflow.bulk_update_status(payload.candidate_ids, payload.status)
    return BulkUpdateResponse(message="Bulk update completed", results=results)
