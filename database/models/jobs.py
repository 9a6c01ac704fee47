"""
Jobs Module

Job requirements (budget/headcount requests awaiting approval) and the job
postings published from approved requirements.
"""

from datetime import date, datetime
from enum import Enum as PyEnum
from typing import Optional

from pydantic import BaseModel, Field

from core.utils.datetime import now


# ==================== Job Enums ===================== #
class RequirementStatus(str, PyEnum):
    """Job requirement approval status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CLOSED = "closed"


class PostingStatus(str, PyEnum):
    """Job posting status."""

    OPEN = "open"
    CLOSED = "closed"
    FILLED = "filled"


# ==================== Models ===================== #
class JobRequirement(BaseModel):
    """
    A headcount request raised by HR.

    approved_by/approved_at are only set while the requirement is approved,
    rejection_reason only while it is rejected.
    """

    id: int
    title: str
    department: str
    budget: float = Field(ge=0)
    description: Optional[str] = None
    positions: int = Field(default=1, ge=1)
    status: RequirementStatus = RequirementStatus.PENDING
    created_by: Optional[int] = None
    created_at: datetime = Field(default_factory=now)
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    filled_positions: int = Field(default=0, ge=0)


class JobPosting(BaseModel):
    """A published vacancy. applicant_count mirrors the candidates that reference it."""

    id: int
    requirement_id: int
    title: str
    description: str
    department: str
    location: str
    salary_range: Optional[str] = None
    status: PostingStatus = PostingStatus.OPEN
    application_deadline: Optional[date] = None
    created_by: Optional[int] = None
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)
    applicant_count: int = Field(default=0, ge=0)
