"""Email integration utilities for sending candidate notifications."""

import asyncio
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import make_msgid
from html import escape
from typing import Optional, List, Protocol
import logging

from core.exceptions import TransportError
from core.utils.datetime import format_interview_time
from core.utils.formatting import mask_recipients

logger = logging.getLogger(__name__)


class MailTransport(Protocol):
    """Anything that can accept a rendered message for delivery."""

    async def send(
        self,
        from_email: str,
        to: str | List[str],
        subject: str,
        html: str,
    ) -> dict:
        """Send a message, returning {"message_id": ...}; raise TransportError on failure."""
        ...

    async def verify(self) -> bool:
        """Check that the transport is reachable and accepts our credentials."""
        ...


class SMTPTransport:
    """Mail transport that delivers over SMTP with STARTTLS."""

    def __init__(
        self,
        smtp_host: str,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ):
        """
        Initialize SMTP transport.

        Args:
            smtp_host: SMTP server host
            smtp_port: SMTP server port
            smtp_user: SMTP username
            smtp_password: SMTP password
            use_tls: Whether to upgrade the connection with STARTTLS
            timeout: Socket timeout in seconds
        """
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.use_tls = use_tls
        self.timeout = timeout

    async def send(
        self,
        from_email: str,
        to: str | List[str],
        subject: str,
        html: str,
    ) -> dict:
        """
        Send an HTML email.

        Args:
            from_email: Sender address
            to: Recipient email address(es)
            subject: Email subject
            html: HTML body

        Returns:
            {"message_id": <Message-ID header>}

        Raises:
            TransportError: If the SMTP server does not accept the message
        """
        recipients = list(to) if isinstance(to, list) else [to]

        msg = MIMEMultipart()
        msg['From'] = from_email
        msg['To'] = ", ".join(recipients)
        msg['Subject'] = subject
        msg['Message-ID'] = make_msgid()
        msg.attach(MIMEText(html, 'html'))

        try:
            await asyncio.to_thread(self._deliver, msg, from_email, recipients)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {mask_recipients(recipients)}: {e}")
            raise TransportError(str(e)) from e

        logger.info(f"Email sent to {mask_recipients(recipients)}")
        return {"message_id": msg['Message-ID']}

    def _deliver(self, msg: MIMEMultipart, from_email: str, recipients: List[str]) -> None:
        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.smtp_user and self.smtp_password:
                server.login(self.smtp_user, self.smtp_password)
            server.send_message(msg, from_addr=from_email, to_addrs=recipients)

    async def verify(self) -> bool:
        """Connect, optionally log in, and report whether it worked."""
        try:
            await asyncio.to_thread(self._noop)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Email transporter verification failed: {e}")
            return False
        logger.info("Email transporter verified successfully")
        return True

    def _noop(self) -> None:
        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.smtp_user and self.smtp_password:
                server.login(self.smtp_user, self.smtp_password)
            server.noop()


class ConsoleTransport:
    """Development transport: logs messages instead of delivering them."""

    async def send(
        self,
        from_email: str,
        to: str | List[str],
        subject: str,
        html: str,
    ) -> dict:
        message_id = make_msgid()
        logger.info(
            f"[console email] {message_id} from={from_email} "
            f"to={mask_recipients(to)} subject={subject!r}"
        )
        logger.debug(html)
        return {"message_id": message_id}

    async def verify(self) -> bool:
        return True


_FOOTER = """
        <hr>
        <p style="font-size: 12px; color: #999;">
            This is an automated email. Please do not reply to this address.
        </p>
"""


# Pre-configured email templates
class EmailTemplates:
    """Candidate notification templates. Interpolated values are HTML-escaped."""

    @staticmethod
    def application_confirmation(candidate_name: str, job_title: str, company_name: str) -> dict:
        """Application received confirmation email."""
        return {
            'subject': f'Application Confirmation - {job_title}',
            'html': f"""
                <h2>Application Received</h2>
                <p>Dear {escape(candidate_name)},</p>
                <p>Thank you for applying for the <strong>{escape(job_title)}</strong> position at {escape(company_name)}.</p>
                <p>We have received your application and will review it carefully. If your profile matches our requirements, we will contact you for the next steps.</p>
                <p>Application Status: <strong style="color: #4CAF50;">Applied</strong></p>
                <p>Best regards,<br>{escape(company_name)} Recruitment Team</p>
                {_FOOTER}
            """,
        }

    @staticmethod
    def shortlisted_notification(
        candidate_name: str,
        job_title: str,
        company_name: str,
        next_steps: Optional[str] = None,
    ) -> dict:
        """Shortlisted notification email."""
        next_steps = next_steps or (
            'Our team will contact you shortly to schedule an interview. '
            'Please keep your contact information updated.'
        )
        return {
            'subject': f"Great News! You've Been Shortlisted - {job_title}",
            'html': f"""
                <h2>Congratulations!</h2>
                <p>Dear {escape(candidate_name)},</p>
                <p>We are excited to inform you that you have been <strong>shortlisted</strong> for the {escape(job_title)} position!</p>
                <p>Your profile stood out among other applicants, and we would like to learn more about you.</p>
                <p><strong>Next Steps:</strong></p>
                <p>{escape(next_steps)}</p>
                <p>Application Status: <strong style="color: #2196F3;">Shortlisted</strong></p>
                <p>Best regards,<br>{escape(company_name)} Recruitment Team</p>
                {_FOOTER}
            """,
        }

    @staticmethod
    def interview_scheduled(
        candidate_name: str,
        job_title: str,
        interview_date,
        interviewer: str,
        location: Optional[str],
        company_name: str,
    ) -> dict:
        """Interview invitation email."""
        when = format_interview_time(interview_date)
        return {
            'subject': f'Interview Scheduled - {job_title}',
            'html': f"""
                <h2>Interview Invitation</h2>
                <p>Dear {escape(candidate_name)},</p>
                <p>You are invited to interview for the <strong>{escape(job_title)}</strong> position.</p>
                <p><strong>Interview Details:</strong></p>
                <ul>
                    <li><strong>Date &amp; Time:</strong> {escape(when)}</li>
                    <li><strong>Interviewer:</strong> {escape(interviewer)}</li>
                    <li><strong>Location:</strong> {escape(location or 'To be confirmed')}</li>
                </ul>
                <p>Please confirm your attendance by replying to this email or contacting us at the number provided.</p>
                <p>Application Status: <strong style="color: #FF9800;">Interview Scheduled</strong></p>
                <p>Best regards,<br>{escape(company_name)} Recruitment Team</p>
                {_FOOTER}
            """,
        }

    @staticmethod
    def selected_notification(
        candidate_name: str,
        job_title: str,
        company_name: str,
        next_steps: Optional[str] = None,
    ) -> dict:
        """Selection email."""
        next_steps = next_steps or (
            'Our HR team will contact you with the offer details and onboarding information.'
        )
        return {
            'subject': f"Congratulations! You're Selected - {job_title}",
            'html': f"""
                <h2>Excellent News!</h2>
                <p>Dear {escape(candidate_name)},</p>
                <p>We are delighted to inform you that you have been <strong>selected</strong> for the {escape(job_title)} position!</p>
                <p>Your skills and experience impressed our team, and we are confident that you will be a great addition to our company.</p>
                <p><strong>Next Steps:</strong></p>
                <p>{escape(next_steps)}</p>
                <p>Application Status: <strong style="color: #4CAF50;">Selected</strong></p>
                <p>Best regards,<br>{escape(company_name)} Recruitment Team</p>
                {_FOOTER}
            """,
        }

    @staticmethod
    def rejection_notification(
        candidate_name: str,
        job_title: str,
        company_name: str,
        reason: Optional[str] = None,
    ) -> dict:
        """Rejection email. The feedback paragraph only appears with a reason."""
        feedback = f'<p><strong>Feedback:</strong> {escape(reason)}</p>' if reason else ''
        return {
            'subject': f'Application Status Update - {job_title}',
            'html': f"""
                <h2>Application Status</h2>
                <p>Dear {escape(candidate_name)},</p>
                <p>Thank you for your interest in the {escape(job_title)} position at {escape(company_name)}.</p>
                <p>After careful review of your application, we have decided to move forward with other candidates whose profile closely matches our current requirements.</p>
                {feedback}
                <p>We appreciate your time and effort in applying. We encourage you to apply for other positions that match your skills in the future.</p>
                <p>Application Status: <strong style="color: #F44336;">Not Selected</strong></p>
                <p>Best regards,<br>{escape(company_name)} Recruitment Team</p>
                {_FOOTER}
            """,
        }

    @staticmethod
    def job_posting_notification(
        job_title: str,
        department: str,
        location: str,
        link: str,
    ) -> dict:
        """New job opening broadcast."""
        return {
            'subject': f'New Job Opening - {job_title}',
            'html': f"""
                <h2>New Job Opportunity</h2>
                <p>Dear Candidate,</p>
                <p>We are excited to announce a new job opening for the position of <strong>{escape(job_title)}</strong>.</p>
                <p><strong>Position Details:</strong></p>
                <ul>
                    <li><strong>Department:</strong> {escape(department)}</li>
                    <li><strong>Location:</strong> {escape(location)}</li>
                </ul>
                <p>If you are interested in this opportunity, please click the link below to view more details and apply:</p>
                <p><a href="{escape(link, quote=True)}" style="background-color: #4CAF50; color: white; padding: 10px 20px; text-decoration: none; border-radius: 5px; display: inline-block;">View Job &amp; Apply</a></p>
                <p>Application Deadline: Check the job posting for details.</p>
                <p>Best regards,<br>Recruitment Team</p>
                {_FOOTER}
            """,
        }


def build_transport(
    backend: str,
    smtp_host: str,
    smtp_port: int,
    smtp_user: Optional[str],
    smtp_password: Optional[str],
    use_tls: bool,
    timeout: float,
) -> MailTransport:
    """Create the configured mail transport."""
    if backend == "console":
        return ConsoleTransport()
    return SMTPTransport(
        smtp_host=smtp_host,
        smtp_port=smtp_port,
        smtp_user=smtp_user,
        smtp_password=smtp_password,
        use_tls=use_tls,
        timeout=timeout,
    )
