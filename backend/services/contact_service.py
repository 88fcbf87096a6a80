"""Contact form service for handling pet sitting inquiries.

This module verifies contact form submissions, then emails the operator and
sends a confirmation to the submitter.
"""

import asyncio

from loguru import logger

from helpers.ip_utils import hash_email_for_audit
from models.config import settings
from models.exceptions import (
    ConfigurationException,
    EmailDeliveryException,
    SecurityVerificationRequiredException,
    VerificationFailedException,
)
from models.schemas import EmailMessage, MailerRequest
from services.email_service import EmailProvider, get_email_provider
from services.recaptcha_service import RecaptchaService

SUCCESS_MESSAGE = (
    "Your message has been sent successfully. We will get back to you soon!"
)


class ContactService:
    """Service for handling contact form submissions."""

    @classmethod
    def _get_admin_email(cls) -> str:
        """Get the operator address from ADMIN_EMAIL."""
        if not settings.ADMIN_EMAIL:
            raise ConfigurationException("ADMIN_EMAIL")
        return settings.ADMIN_EMAIL

    @classmethod
    def build_admin_email(
        cls, form: MailerRequest, admin_email: str, sender: str
    ) -> EmailMessage:
        """Build the operator notification listing every submitted detail."""
        body = f"""New contact form submission received:

Contact Information:
- Name: {form.full_name}
- Email: {form.email}
- Phone: {form.phone}

Booking Details:
- Pet Type: {form.pet_type}
- Dates: {form.dates}

Message:
{form.message}

Please respond to the customer within 24 hours.
"""
        return EmailMessage(
            to_email=admin_email,
            from_email=sender,
            subject=f"New Contact Form Submission - {form.full_name}",
            body=body,
        )

    @classmethod
    def build_confirmation_email(cls, form: MailerRequest, sender: str) -> EmailMessage:
        """Build the acknowledgment sent back to the submitter."""
        body = f"""Hi {form.full_name},

Thank you for reaching out to us regarding pet sitting services. We have received your message and will get back to you within 24 hours.

Best regards,
{settings.SITE_NAME}

---
This is an automated confirmation email. Please do not reply to this message.
"""
        return EmailMessage(
            to_email=form.email,
            from_email=sender,
            subject="Confirmation: Your message has been received",
            body=body,
        )

    @staticmethod
    def _send_failed(result: object) -> bool:
        return isinstance(result, BaseException) or not result

    @classmethod
    async def dispatch(
        cls,
        provider: EmailProvider,
        admin_message: EmailMessage,
        user_message: EmailMessage,
    ) -> None:
        """Send both emails concurrently and classify the outcomes.

        Raises:
            EmailDeliveryException: If the operator notification failed
        """
        admin_result, user_result = await asyncio.gather(
            asyncio.to_thread(provider.send_message, admin_message),
            asyncio.to_thread(provider.send_message, user_message),
            return_exceptions=True,
        )

        if cls._send_failed(user_result):
            # Operator still got the inquiry, so the submission stands
            logger.warning(
                f"Failed to send confirmation email to "
                f"{hash_email_for_audit(user_message.to_email)}: {user_result!r}"
            )

        if cls._send_failed(admin_result):
            logger.error(
                f"Failed to send admin notification email to "
                f"{admin_message.to_email}: {admin_result!r}"
            )
            raise EmailDeliveryException()

        logger.info(f"Contact form notification sent to admin: {admin_message.to_email}")

    @classmethod
    async def submit_contact_form(
        cls,
        form: MailerRequest,
        gate: RecaptchaService,
        provider: EmailProvider | None = None,
        client_ip: str = "unknown",
    ) -> None:
        """Process a contact form submission.

        Verifies the reCAPTCHA token, then sends the notification to the
        operator and the confirmation to the submitter.

        Args:
            form: The validated contact form data
            gate: reCAPTCHA verification service
            provider: Email provider (defaults to the configured one)
            client_ip: Client address, for logging only

        Raises:
            SecurityVerificationRequiredException: If the token is missing
            VerificationFailedException: If the token does not verify
            ConfigurationException: If ADMIN_EMAIL is not set
            EmailDeliveryException: If the admin notification fails to send
        """
        if not form.recaptcha_token:
            logger.warning(f"Missing reCAPTCHA token from IP: {client_ip}")
            raise SecurityVerificationRequiredException()

        is_human = await gate.verify(
            form.recaptcha_token,
            settings.RECAPTCHA_EXPECTED_ACTION,
            settings.RECAPTCHA_MIN_SCORE,
        )
        if not is_human:
            logger.warning(f"reCAPTCHA verification failed from IP: {client_ip}")
            raise VerificationFailedException()

        admin_email = cls._get_admin_email()
        sender = settings.sender_email
        admin_message = cls.build_admin_email(form, admin_email, sender)
        user_message = cls.build_confirmation_email(form, sender)

        await cls.dispatch(provider or get_email_provider(), admin_message, user_message)

        logger.info(
            f"Contact form successfully sent for {hash_email_for_audit(form.email)} "
            f"from IP: {client_ip}"
        )
