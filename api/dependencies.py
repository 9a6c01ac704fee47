"""FastAPI dependencies for dependency injection."""

from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request, status

from core.config import Settings
from core.integrations.email import MailTransport, build_transport
from core.storage.local import LocalStorage
from database.store import JsonDocumentStore
from api.services.analytics import AuditStatsReporter
from api.services.candidates import CandidateLifecycleManager
from api.services.notifications import NotificationDispatcher
from api.services.postings import JobPostingManager
from api.services.recruitment import RecruitmentWorkflow
from api.services.requirements import JobRequirementManager
from workers.notifications import NotificationQueue

DEFAULT_USER_ID = 1


@dataclass
class RecruitmentServices:
    """Everything the routes need, wired around one shared store."""

    store: JsonDocumentStore
    requirements: JobRequirementManager
    postings: JobPostingManager
    candidates: CandidateLifecycleManager
    dispatcher: NotificationDispatcher
    queue: NotificationQueue
    workflow: RecruitmentWorkflow
    reporter: AuditStatsReporter
    resumes: LocalStorage


def build_services(
    store: JsonDocumentStore,
    transport: MailTransport,
    resumes: LocalStorage,
    from_email: str,
    company_name: str,
    company_website: str,
) -> RecruitmentServices:
    """
    Wire the managers, dispatcher and notification queue together.

    Args:
        store: Entity store shared by every manager
        transport: Mail transport for candidate notifications
        resumes: Storage for uploaded resumes
        from_email: Sender address for notifications
        company_name: Company name used in e-mail templates
        company_website: Link used in posting broadcasts
    """
    requirements = JobRequirementManager(store)
    postings = JobPostingManager(store, requirements)
    candidates = CandidateLifecycleManager(store, postings)
    dispatcher = NotificationDispatcher(
        store, transport, from_email, company_name, company_website
    )
    queue = NotificationQueue()

    return RecruitmentServices(
        store=store,
        requirements=requirements,
        postings=postings,
        candidates=candidates,
        dispatcher=dispatcher,
        queue=queue,
        workflow=RecruitmentWorkflow(candidates, postings, dispatcher, queue),
        reporter=AuditStatsReporter(store),
        resumes=resumes,
    )


def build_services_from_settings(settings: Settings) -> RecruitmentServices:
    """Build the production service graph from configuration."""
    transport = build_transport(
        backend=settings.email_backend,
        smtp_host=settings.smtp_host,
        smtp_port=settings.smtp_port,
        smtp_user=settings.smtp_user,
        smtp_password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        timeout=settings.smtp_timeout,
    )
    return build_services(
        store=JsonDocumentStore(settings.data_file),
        transport=transport,
        resumes=LocalStorage(settings.upload_dir),
        from_email=settings.from_email,
        company_name=settings.company_name,
        company_website=settings.company_website,
    )


def get_services(request: Request) -> RecruitmentServices:
    """Service graph built by the application lifespan."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return services


def get_requirement_manager(
    services: RecruitmentServices = Depends(get_services),
) -> JobRequirementManager:
    return services.requirements


def get_posting_manager(
    services: RecruitmentServices = Depends(get_services),
) -> JobPostingManager:
    return services.postings


def get_candidate_manager(
    services: RecruitmentServices = Depends(get_services),
) -> CandidateLifecycleManager:
    return services.candidates


def get_dispatcher(
    services: RecruitmentServices = Depends(get_services),
) -> NotificationDispatcher:
    return services.dispatcher


def get_workflow(
    services: RecruitmentServices = Depends(get_services),
) -> RecruitmentWorkflow:
    return services.workflow


def get_reporter(
    services: RecruitmentServices = Depends(get_services),
) -> AuditStatsReporter:
    return services.reporter


def get_resume_storage(
    services: RecruitmentServices = Depends(get_services),
) -> LocalStorage:
    return services.resumes


async def get_acting_user_id(
    x_user_id: Optional[int] = Header(None, alias="X-User-Id"),
) -> int:
    """
    ID of the user performing the request.

    Authentication lives outside this service; callers identify themselves
    with an ``X-User-Id`` header, defaulting to user 1.
    """
    return x_user_id if x_user_id is not None else DEFAULT_USER_ID
