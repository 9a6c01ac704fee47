"""Shared fixtures and utilities for tests."""

import os
from datetime import datetime, timezone

# Settings are read at import time; keep tests off real SMTP and disk paths
os.environ.setdefault("EMAIL_BACKEND", "console")
os.environ.setdefault("JSON_LOGS", "false")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest
from fastapi.testclient import TestClient

from core.exceptions import TransportError
from core.storage.local import LocalStorage
from database.store import JsonDocumentStore
from api.dependencies import build_services
from api.services.candidates import CandidateLifecycleManager
from api.services.notifications import NotificationDispatcher
from api.services.postings import JobPostingManager
from api.services.requirements import JobRequirementManager


class RecordingTransport:
    """Mail transport that keeps every message in memory."""

    def __init__(self):
        self.sent: list[dict] = []

    async def send(self, from_email, to, subject, html) -> dict:
        message_id = f"<test-{len(self.sent) + 1}@hrms.test>"
        self.sent.append({
            "from_email": from_email,
            "to": to,
            "subject": subject,
            "html": html,
            "message_id": message_id,
        })
        return {"message_id": message_id}

    async def verify(self) -> bool:
        return True


class FailingTransport:
    """Mail transport whose server always refuses the message."""

    def __init__(self, error: str = "Connection refused"):
        self.error = error
        self.attempts = 0

    async def send(self, from_email, to, subject, html) -> dict:
        self.attempts += 1
        raise TransportError(self.error)

    async def verify(self) -> bool:
        return False


@pytest.fixture
def store():
    """Empty in-memory entity store."""
    return JsonDocumentStore()


@pytest.fixture
def requirements(store):
    return JobRequirementManager(store)


@pytest.fixture
def postings(store, requirements):
    return JobPostingManager(store, requirements)


@pytest.fixture
def candidates(store, postings):
    return CandidateLifecycleManager(store, postings)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def failing_transport():
    return FailingTransport()


@pytest.fixture
def dispatcher(store, transport):
    return NotificationDispatcher(
        store,
        transport,
        from_email="noreply@hrms.test",
        company_name="HRMS Company",
        company_website="https://careers.hrms.test",
    )


@pytest.fixture
def approved_requirement(requirements):
    """An approved Engineering requirement."""
    requirement = requirements.create(
        title="Backend Engineer",
        department="Engineering",
        budget=120000,
        positions=2,
        created_by=1,
    )
    return requirements.approve(requirement.id, approved_by=2)


@pytest.fixture
def open_posting(postings, approved_requirement):
    """An open posting published from the approved requirement."""
    return postings.create(
        requirement_id=approved_requirement.id,
        title="Backend Engineer",
        description="Build and run the HR platform APIs",
        location="Remote",
        salary_range="100k-130k",
        created_by=1,
    )


@pytest.fixture
def applicant(candidates, open_posting):
    """A candidate who just applied to the open posting."""
    return candidates.apply(
        job_posting_id=open_posting.id,
        candidate_name="Ada Lovelace",
        email="ada@example.com",
        phone="555-0100",
        skills=["python", "fastapi"],
    )


@pytest.fixture
def interview_date():
    return datetime(2026, 11, 3, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def resume_storage(tmp_path):
    return LocalStorage(str(tmp_path / "resumes"))


@pytest.fixture
def services(store, transport, resume_storage):
    """Service graph around the in-memory store and recording transport."""
    return build_services(
        store=store,
        transport=transport,
        resumes=resume_storage,
        from_email="noreply@hrms.test",
        company_name="HRMS Company",
        company_website="https://careers.hrms.test",
    )


@pytest.fixture
def client(services):
    """Test client with the lifespan (and notification queue) running."""
    from api.main import create_app

    app = create_app(services)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def drain_notifications(client, services):
    """Block until every queued notification has been sent."""

    def drain():
        client.portal.call(services.queue.join)

    return drain
