"""Candidate communication records."""

from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional

from pydantic import BaseModel, Field

from core.utils.datetime import now


class EmailType(str, PyEnum):
    """Notification templates that can be sent."""

    APPLICATION_CONFIRMATION = "application_confirmation"
    SHORTLISTED_NOTIFICATION = "shortlisted_notification"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    SELECTED_NOTIFICATION = "selected_notification"
    REJECTION_NOTIFICATION = "rejection_notification"
    JOB_POSTING_NOTIFICATION = "job_posting_notification"


class EmailStatus(str, PyEnum):
    """Outcome of a send attempt."""

    SENT = "sent"
    FAILED = "failed"


class EmailLog(BaseModel):
    """One row per send attempt. candidate_id is None for posting broadcasts."""

    id: int
    candidate_id: Optional[int] = None
    email_type: EmailType
    message_id: Optional[str] = None
    recipient_email: Optional[str] = None
    status: EmailStatus
    error: Optional[str] = None
    timestamp: datetime = Field(default_factory=now)
