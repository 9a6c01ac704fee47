"""
Candidate notification dispatcher.

Renders the template for a lifecycle event, hands it to the mail transport
and records every attempt in the e-mail log. A failed send is logged and
re-raised; it never touches the candidate record that triggered it.
"""

from typing import Any, Dict, List, Optional
import logging

from core.exceptions import RecruitmentError, TransportError, ValidationError
from core.integrations.email import EmailTemplates, MailTransport
from core.utils.formatting import mask_email
from core.utils.validators import coerce_enum
from database.models.candidates import Candidate, CandidateStatus, Interview
from database.models.communications import EmailLog, EmailStatus, EmailType
from database.models.jobs import JobPosting
from database.store import JsonDocumentStore

logger = logging.getLogger(__name__)

BULK_NOTIFIABLE_STATUSES = (
    CandidateStatus.SHORTLISTED,
    CandidateStatus.SELECTED,
    CandidateStatus.REJECTED,
)


class NotificationDispatcher:
    """Maps lifecycle events to e-mail templates and logs each send."""

    def __init__(
        self,
        store: JsonDocumentStore,
        transport: MailTransport,
        from_email: str,
        company_name: str,
        company_website: str,
    ):
        """
        Initialize the dispatcher.

        Args:
            store: Entity store the e-mail log is written to
            transport: Mail transport used for delivery
            from_email: Sender address
            company_name: Company name shown in templates
            company_website: Link used in posting broadcasts
        """
        self.store = store
        self.transport = transport
        self.from_email = from_email
        self.company_name = company_name
        self.company_website = company_website

    async def _deliver(
        self,
        email_type: EmailType,
        template: dict,
        to: str | List[str],
        candidate_id: Optional[int] = None,
    ) -> str:
        """Send a rendered template and append the outcome to the e-mail log."""
        recipient = ",".join(to) if isinstance(to, list) else to
        try:
            result = await self.transport.send(
                from_email=self.from_email,
                to=to,
                subject=template["subject"],
                html=template["html"],
            )
        except Exception as e:
            logger.error(
                f"Error sending {email_type.value} for candidate {candidate_id}: {e}"
            )
            self._log(
                email_type,
                candidate_id=candidate_id,
                recipient_email=recipient,
                status=EmailStatus.FAILED,
                error=str(e),
            )
            if isinstance(e, TransportError):
                raise
            raise TransportError(str(e)) from e

        message_id = result.get("message_id")
        self._log(
            email_type,
            candidate_id=candidate_id,
            recipient_email=recipient,
            status=EmailStatus.SENT,
            message_id=message_id,
        )
        return message_id

    def _log(self, email_type: EmailType, status: EmailStatus, **fields: Any) -> EmailLog:
        log = EmailLog(
            id=self.store.next_id("email_logs"),
            email_type=email_type,
            status=status,
            **fields,
        )
        self.store.data.email_logs.append(log)
        self.store.write()
        return log

    async def send_application_confirmation(
        self, candidate: Candidate, posting: JobPosting
    ) -> Dict[str, Any]:
        """Confirm receipt of an application."""
        template = EmailTemplates.application_confirmation(
            candidate.candidate_name, posting.title, self.company_name
        )
        message_id = await self._deliver(
            EmailType.APPLICATION_CONFIRMATION, template, candidate.email, candidate.id
        )
        return {"success": True, "message_id": message_id}

    async def send_shortlisted_notification(
        self, candidate: Candidate, posting: JobPosting, next_steps: str = ""
    ) -> Dict[str, Any]:
        """Tell a candidate they were shortlisted."""
        template = EmailTemplates.shortlisted_notification(
            candidate.candidate_name, posting.title, self.company_name, next_steps
        )
        message_id = await self._deliver(
            EmailType.SHORTLISTED_NOTIFICATION, template, candidate.email, candidate.id
        )
        return {"success": True, "message_id": message_id}

    async def send_interview_scheduled(
        self, candidate: Candidate, posting: JobPosting, interview: Interview
    ) -> Dict[str, Any]:
        """Invite a candidate to a recorded interview."""
        template = EmailTemplates.interview_scheduled(
            candidate.candidate_name,
            posting.title,
            interview.date,
            interview.interviewer,
            interview.location,
            self.company_name,
        )
        message_id = await self._deliver(
            EmailType.INTERVIEW_SCHEDULED, template, candidate.email, candidate.id
        )
        return {"success": True, "message_id": message_id}

    async def send_selected_notification(
        self, candidate: Candidate, posting: JobPosting, next_steps: str = ""
    ) -> Dict[str, Any]:
        """Tell a candidate they were selected."""
        template = EmailTemplates.selected_notification(
            candidate.candidate_name, posting.title, self.company_name, next_steps
        )
        message_id = await self._deliver(
            EmailType.SELECTED_NOTIFICATION, template, candidate.email, candidate.id
        )
        return {"success": True, "message_id": message_id}

    async def send_rejection_notification(
        self, candidate: Candidate, posting: JobPosting, reason: str = ""
    ) -> Dict[str, Any]:
        """Tell a candidate they were not selected."""
        template = EmailTemplates.rejection_notification(
            candidate.candidate_name, posting.title, self.company_name, reason
        )
        message_id = await self._deliver(
            EmailType.REJECTION_NOTIFICATION, template, candidate.email, candidate.id
        )
        return {"success": True, "message_id": message_id}

    async def send_job_posting_notification(
        self, posting: JobPosting, emails: List[str]
    ) -> Dict[str, Any]:
        """
        Announce a posting to a list of subscribers in a single message.

        Raises:
            ValidationError: If no recipients are given
        """
        if not emails:
            raise ValidationError("No recipient emails provided")

        template = EmailTemplates.job_posting_notification(
            posting.title, posting.department, posting.location, self.company_website
        )
        message_id = await self._deliver(
            EmailType.JOB_POSTING_NOTIFICATION, template, list(emails)
        )
        return {"success": True, "recipient_count": len(emails), "message_id": message_id}

    async def notify_status_change(
        self,
        candidate: Candidate,
        posting: JobPosting,
        status: CandidateStatus,
        notes: str = "",
    ) -> Optional[Dict[str, Any]]:
        """
        Send the template matching a new status.

        Only shortlisted, selected and rejected have templates; other
        statuses send nothing and return None.
        """
        if status == CandidateStatus.SHORTLISTED:
            return await self.send_shortlisted_notification(candidate, posting, notes)
        if status == CandidateStatus.SELECTED:
            return await self.send_selected_notification(candidate, posting, notes)
        if status == CandidateStatus.REJECTED:
            return await self.send_rejection_notification(candidate, posting, notes)
        return None

    async def send_bulk_status_update(
        self, candidate_ids: List[int], status: str
    ) -> Dict[str, List]:
        """
        Send the status template to each candidate in turn.

        Returns:
            {"success": [ids], "failed": [{"candidate_id", "reason"}]}. An
            unsupported status fails every item; a missing candidate or
            posting, or a transport error, fails only that item.
        """
        results: Dict[str, List] = {"success": [], "failed": []}

        try:
            target = coerce_enum(CandidateStatus, status)
        except ValidationError:
            target = None
        if target not in BULK_NOTIFIABLE_STATUSES:
            reason = f"Unsupported status: {status}"
            results["failed"] = [{"candidate_id": cid, "reason": reason} for cid in candidate_ids]
            return results

        candidates = {c.id: c for c in self.store.data.candidates}
        postings = {p.id: p for p in self.store.data.job_postings}

        for candidate_id in candidate_ids:
            candidate = candidates.get(candidate_id)
            posting = postings.get(candidate.job_posting_id) if candidate else None
            if candidate is None or posting is None:
                results["failed"].append(
                    {"candidate_id": candidate_id, "reason": "Candidate or posting not found"}
                )
                continue

            try:
                await self.notify_status_change(candidate, posting, target)
            except RecruitmentError as e:
                results["failed"].append({"candidate_id": candidate_id, "reason": e.message})
                continue

            results["success"].append(candidate_id)

        logger.info(
            f"Bulk {target.value} notification: {len(results['success'])} sent, "
            f"{len(results['failed'])} failed"
        )
        return results

    def get_email_logs(self, candidate_id: int) -> List[EmailLog]:
        """E-mail log rows for one candidate, oldest first."""
        return [log for log in self.store.data.email_logs if log.candidate_id == candidate_id]

    async def verify(self) -> bool:
        """Report whether the transport is reachable."""
        return await self.transport.verify()

    async def send_test_email(self, email: str) -> Dict[str, Any]:
        """Send an application confirmation for a placeholder posting to an address."""
        if not email:
            raise ValidationError("Email address required")

        template = EmailTemplates.application_confirmation(
            "Test", "Test Position", self.company_name
        )
        message_id = await self._deliver(
            EmailType.APPLICATION_CONFIRMATION, template, email
        )
        logger.info(f"Test email sent to {mask_email(email)}")
        return {"success": True, "message_id": message_id}
