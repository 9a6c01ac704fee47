"""
Candidates Module

Applicants tied to exactly one job posting, with their append-only notes
and interview records.
"""

from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional

from pydantic import BaseModel, Field

from core.utils.datetime import now


# ==================== Candidate Enums ===================== #
class CandidateStatus(str, PyEnum):
    """Candidate lifecycle status."""

    APPLIED = "applied"
    SHORTLISTED = "shortlisted"
    INTERVIEWED = "interviewed"
    SELECTED = "selected"
    REJECTED = "rejected"


# ==================== Models ===================== #
class CandidateNote(BaseModel):
    """Free-text note recorded alongside a status change."""

    text: str
    timestamp: datetime = Field(default_factory=now)


class Interview(BaseModel):
    """Interview record. A rating of 0 means the interviewer gave none."""

    id: str
    date: datetime
    interviewer: str
    rating: int = Field(default=0, ge=0, le=5)
    feedback: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime = Field(default_factory=now)


class Candidate(BaseModel):
    """An application to a job posting. (job_posting_id, email) is unique."""

    id: int
    job_posting_id: int
    candidate_name: str
    email: str
    phone: Optional[str] = None
    resume: Optional[str] = None
    experience: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    linkedin_profile: Optional[str] = None
    status: CandidateStatus = CandidateStatus.APPLIED
    applied_at: datetime = Field(default_factory=now)
    updated_at: Optional[datetime] = None
    ratings: list[int] = Field(default_factory=list)
    notes: list[CandidateNote] = Field(default_factory=list)
    interviews: list[Interview] = Field(default_factory=list)
    rejection_reason: Optional[str] = None

    @property
    def average_rating(self) -> float:
        """Mean interview rating; 0.0 when there are no interviews."""
        if not self.interviews:
            return 0.0
        return sum(i.rating for i in self.interviews) / len(self.interviews)
