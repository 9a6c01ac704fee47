"""Tests for the recruitment workflow: persist first, notify after."""

import pytest
import pytest_asyncio

from core.exceptions import NotFoundError, ValidationError
from database.models.candidates import CandidateStatus
from database.models.communications import EmailStatus, EmailType
from api.services.notifications import NotificationDispatcher
from api.services.recruitment import RecruitmentWorkflow
from workers.notifications import NotificationQueue


@pytest_asyncio.fixture
async def queue():
    queue = NotificationQueue()
    await queue.start()
    yield queue
    await queue.stop()


@pytest.fixture
def workflow(candidates, postings, dispatcher, queue):
    return RecruitmentWorkflow(candidates, postings, dispatcher, queue)


@pytest.fixture
def failing_workflow(store, candidates, postings, failing_transport, queue):
    dispatcher = NotificationDispatcher(
        store, failing_transport, "noreply@hrms.test", "HRMS Company", "https://careers.hrms.test"
    )
    return RecruitmentWorkflow(candidates, postings, dispatcher, queue)


class TestRecruitmentWorkflow:

    @pytest.mark.asyncio
    async def test_apply_queues_confirmation(self, workflow, queue, transport, open_posting):
        candidate = workflow.apply(
            job_posting_id=open_posting.id,
            candidate_name="Ada Lovelace",
            email="ada@example.com",
        )
        assert transport.sent == []

        await queue.join()

        assert transport.sent[0]["to"] == "ada@example.com"
        assert candidate.status == CandidateStatus.APPLIED

    @pytest.mark.asyncio
    async def test_failed_email_does_not_undo_status_change(
        self, failing_workflow, queue, store, candidates, applicant
    ):
        candidate = failing_workflow.update_status(applicant.id, "shortlisted", "Great fit")
        await queue.join()

        assert candidate.status == CandidateStatus.SHORTLISTED
        assert candidates.get_by_id(applicant.id).status == CandidateStatus.SHORTLISTED
        [log] = store.data.email_logs
        assert log.status == EmailStatus.FAILED
        assert queue.failed == 1

    @pytest.mark.asyncio
    async def test_update_status_without_template_sends_nothing(
        self, workflow, queue, transport, applicant
    ):
        workflow.update_status(applicant.id, "interviewed")
        await queue.join()

        assert transport.sent == []

    @pytest.mark.asyncio
    async def test_failed_mutation_queues_nothing(self, workflow, queue, transport):
        with pytest.raises(NotFoundError):
            workflow.update_status(404, "selected")
        await queue.join()

        assert transport.sent == []

    @pytest.mark.asyncio
    async def test_add_interview_queues_invitation(
        self, workflow, queue, store, candidates, applicant, interview_date
    ):
        candidates.update_status(applicant.id, "shortlisted")

        candidate = workflow.add_interview(
            applicant.id, date=interview_date, interviewer="Alan", rating=5
        )
        await queue.join()

        assert candidate.status == CandidateStatus.INTERVIEWED
        assert store.data.email_logs[-1].email_type == EmailType.INTERVIEW_SCHEDULED

    @pytest.mark.asyncio
    async def test_bulk_update_reports_each_candidate(
        self, workflow, queue, transport, candidates, applicant, open_posting
    ):
        other = candidates.apply(
            job_posting_id=open_posting.id, candidate_name="Bob", email="bob@example.com"
        )

        results = workflow.bulk_update_status([applicant.id, 999, other.id], "rejected")
        await queue.join()

        assert results["success"] == [applicant.id, other.id]
        assert results["failed"] == [
            {"candidate_id": 999, "error": "Failed to update candidate status: Candidate not found"}
        ]
        assert sorted(m["to"] for m in transport.sent) == ["ada@example.com", "bob@example.com"]

    @pytest.mark.asyncio
    async def test_bulk_update_requires_ids(self, workflow):
        with pytest.raises(ValidationError, match="Candidate IDs array is required"):
            workflow.bulk_update_status([], "rejected")

    @pytest.mark.asyncio
    async def test_broadcast_posting(self, workflow, queue, transport, open_posting):
        result = workflow.broadcast_posting(open_posting.id, ["a@example.com"])
        await queue.join()

        assert result == {"posting_id": open_posting.id, "recipient_count": 1, "queued": True}
        assert transport.sent[0]["subject"] == "New Job Opening - Backend Engineer"

    @pytest.mark.asyncio
    async def test_broadcast_requires_recipients(self, workflow, open_posting):
        with pytest.raises(ValidationError, match="No recipient emails provided"):
            workflow.broadcast_posting(open_posting.id, [])
