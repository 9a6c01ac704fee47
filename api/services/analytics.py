"""
Recruitment analytics service.

Read-only dashboard aggregates over the entity store. Nothing is cached;
every call recomputes from the current collections.
"""

from typing import Any, Dict, List, Optional, Union
import logging

from core.utils.formatting import format_percentage
from database.models.audit import StatusChangeLog
from database.models.candidates import Candidate, CandidateStatus
from database.models.communications import EmailLog
from database.models.jobs import PostingStatus, RequirementStatus
from database.store import JsonDocumentStore

logger = logging.getLogger(__name__)


def _count_by_status(records: List[Any], statuses) -> Dict[str, int]:
    counts = {"total": len(records)}
    for status in statuses:
        counts[status.value] = sum(1 for r in records if r.status == status)
    return counts


class AuditStatsReporter:
    """Dashboard counts, conversion rate, top candidates and audit trails."""

    def __init__(self, store: JsonDocumentStore):
        self.store = store

    def recruitment_stats(self) -> Dict[str, Any]:
        """
        Per-status counts for requirements, postings and candidates.

        Returns:
            Dictionary with "requirements", "postings", "candidates" count
            blocks and the overall "conversion_rate"
        """
        data = self.store.data
        return {
            "requirements": _count_by_status(data.job_requirements, RequirementStatus),
            "postings": _count_by_status(data.job_postings, PostingStatus),
            "candidates": _count_by_status(data.candidates, CandidateStatus),
            "conversion_rate": self.conversion_rate(),
        }

    def conversion_rate(self) -> Union[int, str]:
        """
        Percentage of candidates that were selected.

        Returns:
            0 when there are no candidates, otherwise the percentage as a
            two-decimal string, e.g. "50.00"
        """
        candidates = self.store.data.candidates
        if not candidates:
            return 0
        selected = sum(1 for c in candidates if c.status == CandidateStatus.SELECTED)
        return format_percentage(selected, len(candidates))

    def top_candidates(self, limit: int = 10) -> List[Candidate]:
        """
        Interviewed candidates ranked by mean interview rating.

        Candidates without interviews are excluded. Ties keep store order.
        """
        interviewed = [c for c in self.store.data.candidates if c.interviews]
        ranked = sorted(interviewed, key=lambda c: c.average_rating, reverse=True)
        return ranked[:limit]

    def status_change_logs(self, candidate_id: Optional[int] = None) -> List[StatusChangeLog]:
        logs = self.store.data.status_change_logs
        if candidate_id is not None:
            logs = [log for log in logs if log.candidate_id == candidate_id]
        return list(logs)

    def email_logs(self, candidate_id: Optional[int] = None) -> List[EmailLog]:
        logs = self.store.data.email_logs
        if candidate_id is not None:
            logs = [log for log in logs if log.candidate_id == candidate_id]
        return list(logs)
