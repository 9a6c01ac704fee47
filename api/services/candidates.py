"""
Candidate lifecycle service.

Application intake, caller-directed status transitions, interview records
and per-posting breakdowns. Every mutation is flushed to the store before
the method returns; notifications are the caller's concern.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging
import uuid

from core.exceptions import ConflictError, NotFoundError, ValidationError, wrap_errors
from core.utils.datetime import now
from core.utils.validators import coerce_enum, is_present
from database.models.audit import StatusChangeLog
from database.models.candidates import (
    Candidate,
    CandidateNote,
    CandidateStatus,
    Interview,
)
from database.store import JsonDocumentStore
from api.services.postings import JobPostingManager

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_REASON = "No reason provided"


@dataclass
class StatusChange:
    """Result of a status update."""

    candidate: Candidate
    old_status: CandidateStatus
    new_status: CandidateStatus


class CandidateLifecycleManager:
    """
    Moves candidates through applied → shortlisted → interviewed → selected/rejected.

    Transitions are caller-directed and unguarded; the only automatic move is
    shortlisted → interviewed when an interview is recorded.
    """

    def __init__(self, store: JsonDocumentStore, postings: JobPostingManager):
        self.store = store
        self.postings = postings

    @wrap_errors("Failed to apply for job")
    def apply(
        self,
        job_posting_id: Optional[int],
        candidate_name: Optional[str],
        email: Optional[str],
        phone: Optional[str] = None,
        resume: Optional[str] = None,
        experience: Optional[str] = None,
        skills: Optional[Any] = None,
        linkedin_profile: Optional[str] = None,
    ) -> Candidate:
        """
        Record an application and bump the posting's applicant count.

        Args:
            job_posting_id: Posting applied for
            candidate_name: Applicant's full name
            email: Applicant's e-mail, unique per posting
            phone: Optional phone number
            resume: Stored resume filename
            experience: Free-text experience summary
            skills: List of skills, or a single skill
            linkedin_profile: Optional profile URL

        Returns:
            The new candidate in the applied state

        Raises:
            ValidationError: Required fields missing
            NotFoundError: Posting does not exist
            ConflictError: Same e-mail already applied to this posting
        """
        if not (is_present(job_posting_id) and is_present(candidate_name) and is_present(email)):
            raise ValidationError("Job posting ID, candidate name, and email are required")

        posting = self.postings.get_by_id(job_posting_id)

        if any(
            c.job_posting_id == job_posting_id and c.email == email
            for c in self.store.data.candidates
        ):
            raise ConflictError("You have already applied for this position")

        if skills is None:
            skills = []
        elif not isinstance(skills, (list, tuple)):
            skills = [skills]

        candidate = Candidate(
            id=self.store.next_id("candidates"),
            job_posting_id=job_posting_id,
            candidate_name=candidate_name,
            email=email,
            phone=phone,
            resume=resume,
            experience=experience,
            skills=[str(s) for s in skills],
            linkedin_profile=linkedin_profile,
        )
        self.store.data.candidates.append(candidate)
        posting.applicant_count += 1
        self.store.write()

        logger.info(f"Candidate {candidate.id} applied to posting {job_posting_id}")
        return candidate

    @wrap_errors("Failed to get candidates")
    def list_candidates(
        self,
        job_posting_id: Optional[int] = None,
        status: Optional[str] = None,
        email: Optional[str] = None,
    ) -> List[Candidate]:
        """Return candidates matching every supplied filter, in store order."""
        candidates = self.store.data.candidates

        if job_posting_id is not None:
            candidates = [c for c in candidates if c.job_posting_id == job_posting_id]
        if status:
            candidates = [c for c in candidates if c.status.value == status]
        if email:
            candidates = [c for c in candidates if c.email == email]

        return list(candidates)

    def get_by_id(self, candidate_id: int) -> Candidate:
        """Fetch a candidate or raise NotFoundError."""
        for candidate in self.store.data.candidates:
            if candidate.id == candidate_id:
                return candidate
        raise NotFoundError("Candidate not found")

    @wrap_errors("Failed to update candidate status")
    def update_status(
        self,
        candidate_id: int,
        new_status: Optional[str],
        notes: Optional[str] = "",
    ) -> StatusChange:
        """
        Move a candidate to a new status.

        A non-empty note is appended. The first rejection records a reason
        (the note, or a placeholder); later rejections keep it. A status
        change log row is always written, even if the status is unchanged.
        """
        status = coerce_enum(CandidateStatus, new_status)
        candidate = self.get_by_id(candidate_id)
        old_status = candidate.status
        timestamp = now()

        candidate.status = status
        candidate.updated_at = timestamp

        if notes:
            candidate.notes.append(CandidateNote(text=notes, timestamp=timestamp))

        if status == CandidateStatus.REJECTED and not candidate.rejection_reason:
            candidate.rejection_reason = notes or DEFAULT_REJECTION_REASON

        self.store.data.status_change_logs.append(
            StatusChangeLog(
                id=self.store.next_id("status_change_logs"),
                candidate_id=candidate_id,
                old_status=old_status,
                new_status=status,
                timestamp=timestamp,
            )
        )
        self.store.write()

        logger.info(
            f"Candidate {candidate_id} status {old_status.value} -> {status.value}"
        )
        return StatusChange(candidate=candidate, old_status=old_status, new_status=status)

    @wrap_errors("Failed to add interview")
    def add_interview(
        self,
        candidate_id: int,
        date: Optional[datetime],
        interviewer: Optional[str],
        rating: Optional[int] = None,
        feedback: Optional[str] = None,
        location: Optional[str] = None,
    ) -> Candidate:
        """
        Append an interview record.

        A shortlisted candidate advances to interviewed; other statuses are
        left alone. An omitted rating is stored as 0.

        Returns:
            The candidate, with the new interview last in its list
        """
        if not (is_present(date) and is_present(interviewer)):
            raise ValidationError("Interview date and interviewer are required")

        if rating is not None and not 1 <= rating <= 5:
            raise ValidationError("Rating must be between 1 and 5")

        candidate = self.get_by_id(candidate_id)

        interview = Interview(
            id=str(uuid.uuid4()),
            date=date,
            interviewer=interviewer,
            rating=rating if rating is not None else 0,
            feedback=feedback,
            location=location,
        )
        candidate.interviews.append(interview)

        if candidate.status == CandidateStatus.SHORTLISTED:
            candidate.status = CandidateStatus.INTERVIEWED
            candidate.updated_at = interview.created_at

        self.store.write()

        logger.info(f"Interview {interview.id} recorded for candidate {candidate_id}")
        return candidate

    @wrap_errors("Failed to get candidates by posting")
    def list_by_posting(self, job_posting_id: int) -> Dict[str, Any]:
        """
        Partition a posting's candidates by current status.

        Returns:
            {"total": n, "by_status": {status: [candidates]}} with one bucket
            per status, each candidate in exactly one bucket
        """
        candidates = self.list_candidates(job_posting_id=job_posting_id)
        by_status: Dict[str, List[Candidate]] = {s.value: [] for s in CandidateStatus}
        for candidate in candidates:
            by_status[candidate.status.value].append(candidate)

        return {"total": len(candidates), "by_status": by_status}

    def status_history(self, candidate_id: int) -> List[StatusChangeLog]:
        """Status change log rows for one candidate, oldest first."""
        self.get_by_id(candidate_id)
        return [
            log for log in self.store.data.status_change_logs
            if log.candidate_id == candidate_id
        ]
