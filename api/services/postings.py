"""Job posting service functions."""

from datetime import date
from typing import Any, Dict, Optional
import logging

from core.exceptions import NotFoundError, ValidationError, wrap_errors
from core.utils.datetime import now
from core.utils.validators import coerce_enum, is_present
from database.models.candidates import CandidateStatus
from database.models.jobs import JobPosting, PostingStatus, RequirementStatus
from database.store import JsonDocumentStore
from api.services.requirements import JobRequirementManager

logger = logging.getLogger(__name__)


class JobPostingManager:
    """Publishes postings from approved requirements."""

    def __init__(self, store: JsonDocumentStore, requirements: JobRequirementManager):
        self.store = store
        self.requirements = requirements

    @wrap_errors("Failed to create job posting")
    def create(
        self,
        requirement_id: int,
        title: Optional[str],
        description: Optional[str],
        location: Optional[str],
        salary_range: Optional[str] = None,
        application_deadline: Optional[date] = None,
        created_by: Optional[int] = None,
    ) -> JobPosting:
        """
        Create an open posting from an approved requirement.

        Args:
            requirement_id: Requirement the posting is published from
            title: Posting title
            description: Job description
            location: Work location
            salary_range: Optional display salary range
            application_deadline: Optional closing date
            created_by: User ID of the publisher

        Returns:
            The stored posting, department inherited from the requirement
        """
        requirement = self.requirements.get_by_id(requirement_id)
        if requirement.status != RequirementStatus.APPROVED:
            raise ValidationError("Can only create posting from approved requirement")

        if not (is_present(title) and is_present(description) and is_present(location)):
            raise ValidationError("Title, description, and location are required")

        timestamp = now()
        posting = JobPosting(
            id=self.store.next_id("job_postings"),
            requirement_id=requirement_id,
            title=title,
            description=description,
            department=requirement.department,
            location=location,
            salary_range=salary_range,
            application_deadline=application_deadline,
            created_by=created_by,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self.store.data.job_postings.append(posting)
        self.store.write()

        logger.info(f"Job posting {posting.id} published from requirement {requirement_id}")
        return posting

    @wrap_errors("Failed to get job postings")
    def list_postings(
        self,
        status: Optional[str] = None,
        department: Optional[str] = None,
        location: Optional[str] = None,
    ) -> list[JobPosting]:
        """Return postings matching every supplied filter, in store order."""
        postings = self.store.data.job_postings

        if status:
            postings = [p for p in postings if p.status.value == status]
        if department:
            postings = [p for p in postings if p.department == department]
        if location:
            postings = [p for p in postings if p.location == location]

        return list(postings)

    def get_by_id(self, posting_id: int) -> JobPosting:
        """Fetch a posting or raise NotFoundError."""
        for posting in self.store.data.job_postings:
            if posting.id == posting_id:
                return posting
        raise NotFoundError("Job posting not found")

    def candidate_stats(self, posting_id: int) -> Dict[str, int]:
        """Count candidates referencing a posting, per status and in total."""
        candidates = [c for c in self.store.data.candidates if c.job_posting_id == posting_id]

        stats = {"total": len(candidates)}
        for status in CandidateStatus:
            stats[status.value] = sum(1 for c in candidates if c.status == status)
        return stats

    def get_with_stats(self, posting_id: int) -> Dict[str, Any]:
        """Posting fields plus a derived ``stats`` breakdown of its candidates."""
        posting = self.get_by_id(posting_id)
        return {**posting.model_dump(mode="json"), "stats": self.candidate_stats(posting_id)}

    @wrap_errors("Failed to update job posting")
    def update_status(self, posting_id: int, status: Optional[str]) -> JobPosting:
        """Overwrite a posting's status (open, closed or filled)."""
        new_status = coerce_enum(PostingStatus, status)
        posting = self.get_by_id(posting_id)

        posting.status = new_status
        posting.updated_at = now()
        self.store.write()

        logger.info(f"Job posting {posting_id} marked {new_status.value}")
        return posting
