"""Contact form router for pet sitting inquiries."""

from fastapi import APIRouter, Depends, Request
from loguru import logger

from helpers.rate_limiter import limiter
from helpers.request_utils import get_request_metadata
from models.config import settings
from models.schemas import MailerRequest, MailerResponse
from services.contact_service import SUCCESS_MESSAGE, ContactService
from services.email_service import EmailProvider, get_email_provider
from services.recaptcha_service import RecaptchaService, get_recaptcha_service

router = APIRouter(prefix="/mail", tags=["mail"])


@router.post("/send", response_model=MailerResponse)
@limiter.limit(settings.CONTACT_RATE_LIMIT)
async def send_mail(
    request: Request,
    form: MailerRequest,
    gate: RecaptchaService = Depends(get_recaptcha_service),
    provider: EmailProvider = Depends(get_email_provider),
) -> MailerResponse:
    """Submit the contact form.

    Verifies the reCAPTCHA token, then emails the operator and sends a
    confirmation to the submitter. No authentication required - public endpoint.
    Rate limited per client IP (CONTACT_RATE_LIMIT).

    Args:
        request: FastAPI request object (required for rate limiter)
        form: Contact form data
        gate: reCAPTCHA verification service
        provider: Configured email provider

    Returns:
        Generic success acknowledgment

    Raises:
        DomainException subclasses, mapped to 400/401/500 by main.py handlers
    """
    metadata = get_request_metadata(request)
    client_ip = metadata["ip_address"]
    logger.bind(user_agent=metadata["user_agent"]).info(
        f"Contact form submission from IP: {client_ip}"
    )

    await ContactService.submit_contact_form(
        form, gate, provider, client_ip=client_ip
    )

    return MailerResponse(success=True, message=SUCCESS_MESSAGE)
