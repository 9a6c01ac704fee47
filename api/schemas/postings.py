"""Job posting request and response schemas."""

from datetime import date
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

from database.models.jobs import JobPosting


class PostingCreate(BaseModel):
    """Schema for publishing a posting from an approved requirement."""

    requirement_id: int = Field(description="Approved requirement to publish from")
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    salary_range: Optional[str] = Field(None, max_length=100)
    application_deadline: Optional[date] = None


class PostingStatusUpdate(BaseModel):
    status: Optional[str] = Field(None, description="open, closed or filled")


class PostingBroadcast(BaseModel):
    """Subscribers to announce a posting to."""

    emails: list[str] = Field(default_factory=list)

    @field_validator("emails", mode="before")
    @classmethod
    def strip_emails(cls, v: Any) -> Any:
        """Drop blank entries."""
        if isinstance(v, list):
            return [e.strip() for e in v if isinstance(e, str) and e.strip()]
        return v


class PostingResponse(BaseModel):
    message: Optional[str] = None
    posting: JobPosting


class PostingStats(BaseModel):
    """Candidate counts for one posting."""

    total: int = 0
    applied: int = 0
    shortlisted: int = 0
    interviewed: int = 0
    selected: int = 0
    rejected: int = 0


class PostingWithStats(JobPosting):
    stats: PostingStats


class PostingDetailResponse(BaseModel):
    posting: PostingWithStats


class PostingListResponse(BaseModel):
    total: int = Field(ge=0, description="Matches before the limit is applied")
    postings: list[JobPosting]


class BroadcastResponse(BaseModel):
    message: str
    posting_id: int
    recipient_count: int
    queued: bool
