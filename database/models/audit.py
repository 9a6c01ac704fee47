"""Audit trail of candidate status transitions."""

from datetime import datetime

from pydantic import BaseModel, Field

from core.utils.datetime import now
from database.models.candidates import CandidateStatus


class StatusChangeLog(BaseModel):
    """One row per status update, written even when the status is unchanged."""

    id: int
    candidate_id: int
    old_status: CandidateStatus
    new_status: CandidateStatus
    timestamp: datetime = Field(default_factory=now)
