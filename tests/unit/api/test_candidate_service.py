"""Tests for the candidate lifecycle manager."""

import pytest

from core.exceptions import ConflictError, NotFoundError, ValidationError
from database.models.candidates import CandidateStatus


class TestApply:

    def test_application_starts_in_applied_state(self, candidates, open_posting, store):
        candidate = candidates.apply(
            job_posting_id=open_posting.id,
            candidate_name="Grace Hopper",
            email="grace@example.com",
            resume="1700000000000-42.pdf",
            skills=["cobol"],
            linkedin_profile="https://linkedin.com/in/grace",
        )

        assert candidate.status == CandidateStatus.APPLIED
        assert candidate.ratings == []
        assert candidate.notes == []
        assert candidate.interviews == []
        assert candidate.rejection_reason is None
        assert candidate.resume == "1700000000000-42.pdf"
        assert store.data.candidates == [candidate]

    def test_applicant_count_tracks_applications(self, candidates, postings, open_posting):
        for n in range(4):
            candidates.apply(
                job_posting_id=open_posting.id,
                candidate_name=f"Candidate {n}",
                email=f"candidate{n}@example.com",
            )

        assert postings.get_by_id(open_posting.id).applicant_count == 4

    @pytest.mark.parametrize("skills,expected", [
        (None, []),
        ("python", ["python"]),
        (["go", "rust"], ["go", "rust"]),
        (5, ["5"]),
    ])
    def test_skills_are_normalized_to_a_list(self, candidates, open_posting, skills, expected):
        candidate = candidates.apply(
            job_posting_id=open_posting.id,
            candidate_name="Linus",
            email="linus@example.com",
            skills=skills,
        )
        assert candidate.skills == expected

    @pytest.mark.parametrize("fields", [
        {"job_posting_id": None, "candidate_name": "A", "email": "a@example.com"},
        {"job_posting_id": 1, "candidate_name": "", "email": "a@example.com"},
        {"job_posting_id": 1, "candidate_name": "A", "email": None},
    ])
    def test_required_fields(self, candidates, open_posting, fields):
        with pytest.raises(ValidationError, match="Job posting ID, candidate name, and email are required"):
            candidates.apply(**fields)

    def test_unknown_posting(self, candidates):
        with pytest.raises(NotFoundError) as exc_info:
            candidates.apply(job_posting_id=3, candidate_name="A", email="a@example.com")

        assert exc_info.value.message == "Failed to apply for job: Job posting not found"

    def test_duplicate_application_is_a_conflict(self, candidates, postings, applicant, open_posting):
        with pytest.raises(ConflictError, match="You have already applied for this position"):
            candidates.apply(
                job_posting_id=open_posting.id,
                candidate_name="Ada again",
                email=applicant.email,
            )

        assert postings.get_by_id(open_posting.id).applicant_count == 1

    def test_same_email_may_apply_to_another_posting(
        self, candidates, postings, approved_requirement, applicant
    ):
        other = postings.create(
            requirement_id=approved_requirement.id,
            title="Platform Engineer",
            description="Infra",
            location="Remote",
        )

        candidate = candidates.apply(
            job_posting_id=other.id, candidate_name="Ada", email=applicant.email
        )

        assert candidate.job_posting_id == other.id


class TestUpdateStatus:

    def test_transition_records_log_and_note(self, candidates, applicant, store):
        change = candidates.update_status(applicant.id, "shortlisted", "Strong resume")

        assert change.old_status == CandidateStatus.APPLIED
        assert change.new_status == CandidateStatus.SHORTLISTED
        assert change.candidate.updated_at is not None
        assert [n.text for n in change.candidate.notes] == ["Strong resume"]

        [log] = store.data.status_change_logs
        assert (log.candidate_id, log.old_status, log.new_status) == (
            applicant.id, CandidateStatus.APPLIED, CandidateStatus.SHORTLISTED,
        )

    def test_empty_notes_are_not_recorded(self, candidates, applicant):
        change = candidates.update_status(applicant.id, "shortlisted")
        assert change.candidate.notes == []

    def test_same_status_still_logged(self, candidates, applicant, store):
        candidates.update_status(applicant.id, "applied")

        [log] = store.data.status_change_logs
        assert log.old_status == log.new_status == CandidateStatus.APPLIED

    def test_first_rejection_reason_is_kept(self, candidates, applicant):
        candidates.update_status(applicant.id, "rejected", "Position filled")
        change = candidates.update_status(applicant.id, "rejected", "Second thoughts")

        assert change.candidate.rejection_reason == "Position filled"
        assert len(change.candidate.notes) == 2

    def test_rejection_without_notes_uses_placeholder(self, candidates, applicant):
        change = candidates.update_status(applicant.id, "rejected")
        assert change.candidate.rejection_reason == "No reason provided"

    def test_terminal_states_can_be_left(self, candidates, applicant):
        candidates.update_status(applicant.id, "selected")
        change = candidates.update_status(applicant.id, "interviewed")

        assert change.old_status == CandidateStatus.SELECTED
        assert change.candidate.status == CandidateStatus.INTERVIEWED

    def test_invalid_status(self, candidates, applicant, store):
        with pytest.raises(ValidationError, match="Invalid status"):
            candidates.update_status(applicant.id, "hired")

        assert store.data.status_change_logs == []

    def test_unknown_candidate(self, candidates):
        with pytest.raises(NotFoundError) as exc_info:
            candidates.update_status(999, "shortlisted")

        assert exc_info.value.message == (
            "Failed to update candidate status: Candidate not found"
        )


class TestAddInterview:

    def test_shortlisted_candidate_advances(self, candidates, applicant, interview_date):
        candidates.update_status(applicant.id, "shortlisted")

        candidate = candidates.add_interview(
            applicant.id, date=interview_date, interviewer="Alan", rating=4, feedback="Good"
        )

        assert candidate.status == CandidateStatus.INTERVIEWED
        [interview] = candidate.interviews
        assert interview.rating == 4
        assert interview.interviewer == "Alan"
        assert len(interview.id) == 36

    def test_applied_candidate_is_not_advanced(self, candidates, applicant, interview_date):
        candidate = candidates.add_interview(applicant.id, date=interview_date, interviewer="Alan")

        assert candidate.status == CandidateStatus.APPLIED
        assert len(candidate.interviews) == 1

    def test_omitted_rating_is_stored_as_zero(self, candidates, applicant, interview_date):
        candidate = candidates.add_interview(applicant.id, date=interview_date, interviewer="Alan")
        assert candidate.interviews[0].rating == 0

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_explicit_rating_out_of_range(self, candidates, applicant, interview_date, rating):
        with pytest.raises(ValidationError, match="Rating must be between 1 and 5"):
            candidates.add_interview(
                applicant.id, date=interview_date, interviewer="Alan", rating=rating
            )

        assert candidates.get_by_id(applicant.id).interviews == []

    def test_date_and_interviewer_required(self, candidates, applicant, interview_date):
        with pytest.raises(ValidationError, match="Interview date and interviewer are required"):
            candidates.add_interview(applicant.id, date=interview_date, interviewer="")

        with pytest.raises(ValidationError):
            candidates.add_interview(applicant.id, date=None, interviewer="Alan")

    def test_interview_ids_are_unique(self, candidates, applicant, interview_date):
        candidates.add_interview(applicant.id, date=interview_date, interviewer="A")
        candidate = candidates.add_interview(applicant.id, date=interview_date, interviewer="B")

        assert len({i.id for i in candidate.interviews}) == 2


class TestCandidateQueries:

    def test_list_by_posting_partitions_every_candidate(self, candidates, open_posting):
        statuses = ["applied", "shortlisted", "rejected", "selected", "shortlisted"]
        for n, status in enumerate(statuses):
            candidate = candidates.apply(
                job_posting_id=open_posting.id,
                candidate_name=f"C{n}",
                email=f"c{n}@example.com",
            )
            candidates.update_status(candidate.id, status)

        result = candidates.list_by_posting(open_posting.id)

        assert result["total"] == 5
        grouped = result["by_status"]
        assert set(grouped) == {s.value for s in CandidateStatus}
        assert sum(len(bucket) for bucket in grouped.values()) == 5
        assert len(grouped["shortlisted"]) == 2
        assert grouped["interviewed"] == []
        ids = [c.id for bucket in grouped.values() for c in bucket]
        assert len(ids) == len(set(ids))

    def test_list_filters(self, candidates, applicant, open_posting):
        candidates.apply(
            job_posting_id=open_posting.id, candidate_name="Bob", email="bob@example.com"
        )
        candidates.update_status(applicant.id, "shortlisted")

        assert candidates.list_candidates(status="shortlisted") == [applicant]
        assert [c.candidate_name for c in candidates.list_candidates(email="bob@example.com")] == ["Bob"]
        assert len(candidates.list_candidates(job_posting_id=open_posting.id)) == 2
        assert candidates.list_candidates(job_posting_id=999) == []

    def test_unknown_status_filter_matches_nothing(self, candidates, applicant):
        assert candidates.list_candidates(status="hired") == []

    def test_status_history(self, candidates, applicant):
        candidates.update_status(applicant.id, "shortlisted")
        candidates.update_status(applicant.id, "selected")

        history = candidates.status_history(applicant.id)

        assert [(h.old_status.value, h.new_status.value) for h in history] == [
            ("applied", "shortlisted"),
            ("shortlisted", "selected"),
        ]

    def test_status_history_for_unknown_candidate(self, candidates):
        with pytest.raises(NotFoundError):
            candidates.status_history(42)
