"""
Email administration endpoints.

Check that the mail transport is reachable and send a test message.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_dispatcher
from api.schemas.common import (
    EmailVerifyResponse,
    SendTestEmailRequest,
    SendTestEmailResponse,
)
from api.services.notifications import NotificationDispatcher
from core.exceptions import ValidationError
from core.utils.validators import validate_email

router = APIRouter(prefix="/email")


@router.post("/verify", summary="Verify Mail Transport", response_model=EmailVerifyResponse)
async def verify_transport(
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    verified = await dispatcher.verify()
    message = "Email service is ready" if verified else "Email service is not reachable"
    return EmailVerifyResponse(verified=verified, message=message)


@router.post("/test", summary="Send Test Email", response_model=SendTestEmailResponse)
async def send_test_email(
    payload: SendTestEmailRequest,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """Send a sample application confirmation; transport failures return 502."""
    if payload.email:
        valid, detail = validate_email(payload.email)
        if not valid:
            raise ValidationError(f"Invalid email address: {detail}")

    result = await dispatcher.send_test_email(payload.email)
    return SendTestEmailResponse(
        message="Test email sent successfully", message_id=result["message_id"]
    )
