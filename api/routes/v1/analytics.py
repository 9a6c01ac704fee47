"""
Recruitment analytics endpoints.

Dashboard counts, top-rated candidates and per-candidate e-mail history.
"""

from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import get_dispatcher, get_reporter
from api.schemas.analytics import RecruitmentStats, TopCandidatesResponse
from api.schemas.candidates import EmailLogResponse
from api.services.analytics import AuditStatsReporter
from api.services.notifications import NotificationDispatcher

router = APIRouter()


@router.get("/stats", summary="Recruitment Statistics", response_model=RecruitmentStats)
async def get_recruitment_stats(
    reporter: AuditStatsReporter = Depends(get_reporter),
):
    """Per-status counts for requirements, postings and candidates plus conversion rate."""
    return reporter.recruitment_stats()


@router.get("/top-candidates", summary="Top Candidates", response_model=TopCandidatesResponse)
async def get_top_candidates(
    limit: int = Query(10, ge=1, le=100, description="Maximum number of candidates"),
    reporter: AuditStatsReporter = Depends(get_reporter),
):
    """Interviewed candidates ranked by mean interview rating."""
    candidates = reporter.top_candidates(limit)
    return TopCandidatesResponse(total=len(candidates), candidates=candidates)


@router.get(
    "/email-logs/{candidate_id}",
    summary="Candidate Email History",
    response_model=EmailLogResponse,
)
async def get_email_logs(
    candidate_id: int = Path(..., description="Candidate ID"),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    logs = dispatcher.get_email_logs(candidate_id)
    return EmailLogResponse(candidate_id=candidate_id, total=len(logs), logs=logs)
