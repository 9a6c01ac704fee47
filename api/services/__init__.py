"""
API Services Layer.

Recruitment managers over the shared entity store, the notification
dispatcher and the workflow that ties them together.
"""

from api.services.requirements import JobRequirementManager
from api.services.postings import JobPostingManager
from api.services.candidates import (
    CandidateLifecycleManager,
    StatusChange,
)
from api.services.notifications import NotificationDispatcher
from api.services.recruitment import RecruitmentWorkflow
from api.services.analytics import AuditStatsReporter

__all__ = [
    # Requirements & postings
    "JobRequirementManager",
    "JobPostingManager",
    # Candidates
    "CandidateLifecycleManager",
    "StatusChange",
    # Notifications
    "NotificationDispatcher",
    "RecruitmentWorkflow",
    # Analytics
    "AuditStatsReporter",
]
