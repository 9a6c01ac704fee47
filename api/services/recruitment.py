"""
Recruitment workflow.

Runs a lifecycle mutation, which is persisted before it returns, and only
then queues the matching candidate notification. Notification failures end
up in the e-mail log and never undo or fail the mutation.
"""

from typing import Any, Dict, List, Optional
import logging

from core.exceptions import RecruitmentError, ValidationError
from database.models.candidates import Candidate
from api.services.candidates import CandidateLifecycleManager
from api.services.notifications import NotificationDispatcher
from api.services.postings import JobPostingManager
from workers.notifications import NotificationQueue

logger = logging.getLogger(__name__)


class RecruitmentWorkflow:
    """Candidate operations that also notify the candidate."""

    def __init__(
        self,
        candidates: CandidateLifecycleManager,
        postings: JobPostingManager,
        dispatcher: NotificationDispatcher,
        queue: NotificationQueue,
    ):
        self.candidates = candidates
        self.postings = postings
        self.dispatcher = dispatcher
        self.queue = queue

    def apply(self, **fields: Any) -> Candidate:
        """Record an application and queue the confirmation e-mail."""
        candidate = self.candidates.apply(**fields)
        posting = self.postings.get_by_id(candidate.job_posting_id)

        self.queue.enqueue(
            "application_confirmation",
            self.dispatcher.send_application_confirmation,
            candidate.model_copy(deep=True),
            posting.model_copy(deep=True),
        )
        return candidate

    def update_status(
        self, candidate_id: int, status: Optional[str], notes: Optional[str] = ""
    ) -> Candidate:
        """Change a candidate's status and queue the matching e-mail, if any."""
        change = self.candidates.update_status(candidate_id, status, notes)
        candidate = change.candidate
        posting = self.postings.get_by_id(candidate.job_posting_id)

        self.queue.enqueue(
            f"status_{change.new_status.value}",
            self.dispatcher.notify_status_change,
            candidate.model_copy(deep=True),
            posting.model_copy(deep=True),
            change.new_status,
            notes or "",
        )
        return candidate

    def add_interview(self, candidate_id: int, **interview: Any) -> Candidate:
        """Record an interview and queue the invitation e-mail."""
        candidate = self.candidates.add_interview(candidate_id, **interview)
        posting = self.postings.get_by_id(candidate.job_posting_id)

        self.queue.enqueue(
            "interview_scheduled",
            self.dispatcher.send_interview_scheduled,
            candidate.model_copy(deep=True),
            posting.model_copy(deep=True),
            candidate.interviews[-1].model_copy(),
        )
        return candidate

    def bulk_update_status(
        self, candidate_ids: List[int], status: Optional[str]
    ) -> Dict[str, List]:
        """
        Update many candidates to one status, then queue the bulk e-mail.

        Returns:
            {"success": [ids], "failed": [{"candidate_id", "error"}]} for the
            status updates; e-mail outcomes only show up in the e-mail log
        """
        if not candidate_ids:
            raise ValidationError("Candidate IDs array is required")

        results: Dict[str, List] = {"success": [], "failed": []}

        for candidate_id in candidate_ids:
            try:
                self.candidates.update_status(candidate_id, status)
            except RecruitmentError as e:
                results["failed"].append({"candidate_id": candidate_id, "error": e.message})
                continue
            results["success"].append(candidate_id)

        if results["success"]:
            self.queue.enqueue(
                "bulk_status_update",
                self.dispatcher.send_bulk_status_update,
                list(results["success"]),
                status,
            )

        logger.info(
            f"Bulk status update to {status}: {len(results['success'])} updated, "
            f"{len(results['failed'])} failed"
        )
        return results

    def broadcast_posting(self, posting_id: int, emails: List[str]) -> Dict[str, Any]:
        """Queue a new-posting announcement to a list of addresses."""
        if not emails:
            raise ValidationError("No recipient emails provided")
        posting = self.postings.get_by_id(posting_id)
        queued = self.queue.enqueue(
            "job_posting_notification",
            self.dispatcher.send_job_posting_notification,
            posting.model_copy(deep=True),
            list(emails),
        )
        return {"posting_id": posting_id, "recipient_count": len(emails), "queued": queued}
