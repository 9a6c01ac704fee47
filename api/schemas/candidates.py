"""Candidate-related Pydantic schemas."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from database.models.audit import StatusChangeLog
from database.models.candidates import Candidate
from database.models.communications import EmailLog


class CandidateStatusUpdate(BaseModel):
    """Schema for moving a candidate to a new status."""

    status: Optional[str] = Field(
        None, description="applied, shortlisted, interviewed, selected or rejected"
    )
    notes: Optional[str] = Field("", description="Note appended to the candidate; also the rejection reason")


class InterviewCreate(BaseModel):
    """Schema for recording an interview."""

    date: Optional[datetime] = Field(None, description="Interview date and time")
    interviewer: Optional[str] = Field(None, max_length=255)
    rating: Optional[int] = Field(None, description="Score from 1 to 5")
    feedback: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)


class BulkStatusUpdate(BaseModel):
    candidate_ids: list[int] = Field(default_factory=list)
    status: Optional[str] = None


class CandidateResponse(BaseModel):
    message: Optional[str] = None
    candidate: Candidate


class ApplicationResponse(BaseModel):
    message: str
    candidate: Candidate
    resume_file: Optional[str] = Field(None, description="Stored resume filename")


class CandidateListResponse(BaseModel):
    total: int = Field(ge=0, description="Matches before the limit is applied")
    candidates: list[Candidate]


class CandidatesByPosting(BaseModel):
    total: int
    by_status: dict[str, list[Candidate]]


class CandidatesByPostingResponse(BaseModel):
    candidates: CandidatesByPosting


class BulkFailure(BaseModel):
    candidate_id: int
    error: str


class BulkResults(BaseModel):
    success: list[int]
    failed: list[BulkFailure]


class BulkUpdateResponse(BaseModel):
    message: str
    results: BulkResults


class StatusHistoryResponse(BaseModel):
    candidate_id: int
    total: int
    history: list[StatusChangeLog]


class EmailLogResponse(BaseModel):
    candidate_id: int
    total: int
    logs: list[EmailLog]
