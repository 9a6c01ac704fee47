"""Job requirement service: create, approve and reject headcount requests."""

from typing import Optional
import logging

from core.exceptions import NotFoundError, ValidationError, wrap_errors
from core.utils.datetime import now
from core.utils.validators import is_present
from database.models.jobs import JobRequirement, RequirementStatus
from database.store import JsonDocumentStore

logger = logging.getLogger(__name__)


class JobRequirementManager:
    """Owns the job requirement collection of the store."""

    def __init__(self, store: JsonDocumentStore):
        self.store = store

    @wrap_errors("Failed to create job requirement")
    def create(
        self,
        title: Optional[str],
        department: Optional[str],
        budget: Optional[float],
        description: Optional[str] = None,
        positions: int = 1,
        created_by: Optional[int] = None,
    ) -> JobRequirement:
        """
        Create a pending job requirement.

        Args:
            title: Position title
            department: Owning department
            budget: Approved budget, must be >= 0
            description: Optional free-text description
            positions: Number of openings, must be >= 1
            created_by: User ID of the requester

        Returns:
            The stored requirement
        """
        if not (is_present(title) and is_present(department) and is_present(budget)):
            raise ValidationError("Title, department, and budget are required")
        if budget < 0:
            raise ValidationError("Budget must be positive")
        if positions is None or positions < 1:
            raise ValidationError("Positions must be at least 1")

        requirement = JobRequirement(
            id=self.store.next_id("job_requirements"),
            title=title,
            department=department,
            budget=budget,
            description=description,
            positions=positions,
            created_by=created_by,
        )
        self.store.data.job_requirements.append(requirement)
        self.store.write()

        logger.info(f"Job requirement {requirement.id} created for {department}")
        return requirement

    @wrap_errors("Failed to get job requirements")
    def list_requirements(
        self,
        department: Optional[str] = None,
        status: Optional[str] = None,
        created_by: Optional[int] = None,
    ) -> list[JobRequirement]:
        """Return requirements matching every supplied filter, in store order."""
        requirements = self.store.data.job_requirements

        if department:
            requirements = [r for r in requirements if r.department == department]
        if status:
            requirements = [r for r in requirements if r.status.value == status]
        if created_by is not None:
            requirements = [r for r in requirements if r.created_by == created_by]

        return list(requirements)

    def get_by_id(self, requirement_id: int) -> JobRequirement:
        """Fetch a requirement or raise NotFoundError."""
        for requirement in self.store.data.job_requirements:
            if requirement.id == requirement_id:
                return requirement
        raise NotFoundError("Job requirement not found")

    @wrap_errors("Failed to approve job requirement")
    def approve(self, requirement_id: int, approved_by: Optional[int]) -> JobRequirement:
        """
        Approve a requirement so postings can be created from it.

        No transition guard: a rejected or closed requirement can be approved.
        """
        requirement = self.get_by_id(requirement_id)

        requirement.status = RequirementStatus.APPROVED
        requirement.approved_by = approved_by
        requirement.approved_at = now()
        requirement.rejection_reason = None
        self.store.write()

        logger.info(f"Job requirement {requirement_id} approved by {approved_by}")
        return requirement

    @wrap_errors("Failed to reject job requirement")
    def reject(self, requirement_id: int, reason: Optional[str]) -> JobRequirement:
        """Reject a requirement, recording the reason."""
        requirement = self.get_by_id(requirement_id)

        requirement.status = RequirementStatus.REJECTED
        requirement.rejection_reason = reason if is_present(reason) else "No reason provided"
        requirement.approved_by = None
        requirement.approved_at = None
        self.store.write()

        logger.info(f"Job requirement {requirement_id} rejected")
        return requirement
