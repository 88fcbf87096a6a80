"""Email service for sending contact form emails.

This module provides a unified interface for sending plain-text emails through
various providers. Supports:
- console: Logs emails to console (development)
- smtp: Standard SMTP delivery
- sendgrid: SendGrid API

Every provider makes a single delivery attempt and reports the outcome as a
boolean; retries are left to the caller.
"""

import smtplib
from abc import ABC, abstractmethod
from email.mime.text import MIMEText
from email.utils import formataddr

from loguru import logger

from helpers.ip_utils import hash_email_for_audit
from models.config import settings
from models.schemas import EmailMessage


class EmailProvider(ABC):
    """Abstract base class for email providers."""

    @abstractmethod
    def send(
        self,
        to_email: str,
        from_email: str,
        subject: str,
        text_body: str,
    ) -> bool:
        """Send an email."""
        pass

    def send_message(self, message: EmailMessage) -> bool:
        """Send a composed EmailMessage."""
        return self.send(
            message.to_email, message.from_email, message.subject, message.body
        )


class SMTPProvider(EmailProvider):
    """SMTP email provider."""

    def __init__(self) -> None:
        """Initialize SMTP provider with settings."""
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.user = settings.SMTP_USER
        self.password = settings.SMTP_PASSWORD
        self.from_name = settings.SMTP_FROM_NAME
        self.use_tls = settings.SMTP_USE_TLS
        self.use_ssl = settings.SMTP_USE_SSL
        self.timeout = settings.SMTP_TIMEOUT_SECONDS

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            # Implicit SSL (port 465) - connection is encrypted from start
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)

        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        if self.use_tls:
            # STARTTLS (port 587) - upgrade to TLS after connection
            server.starttls()
        return server

    def send(
        self,
        to_email: str,
        from_email: str,
        subject: str,
        text_body: str,
    ) -> bool:
        """Send email via SMTP.

        Supports both:
        - Implicit SSL (port 465): use SMTP_USE_SSL=true
        - STARTTLS (port 587): use SMTP_USE_TLS=true
        """
        recipient = hash_email_for_audit(to_email)
        try:
            logger.info(
                f"SMTP: Connecting to {self.host}:{self.port} "
                f"(SSL={self.use_ssl}, TLS={self.use_tls})"
            )

            msg = MIMEText(text_body, "plain", "utf-8")
            msg["Subject"] = subject
            msg["From"] = formataddr((self.from_name, from_email))
            msg["To"] = to_email

            server = self._connect()
            try:
                if self.user and self.password:
                    logger.debug("SMTP: Authenticating...")
                    server.login(self.user, self.password)

                server.sendmail(from_email, [to_email], msg.as_string())
            finally:
                server.quit()

            logger.info(f"Email sent successfully to {recipient}")
            return True

        except smtplib.SMTPRecipientsRefused as e:
            logger.error(f"SMTP: Recipients refused - {list(e.recipients)}")
            return False
        except smtplib.SMTPSenderRefused as e:
            logger.error(f"SMTP: Sender refused - {e.smtp_code}: {e.smtp_error!r}")
            return False
        except smtplib.SMTPDataError as e:
            logger.error(f"SMTP: Data error - {e.smtp_code}: {e.smtp_error!r}")
            return False
        except smtplib.SMTPAuthenticationError as e:
            logger.error(
                f"SMTP: Authentication failed - {e.smtp_code}: {e.smtp_error!r}"
            )
            return False
        except Exception as e:
            logger.error(f"Failed to send email to {recipient}: {e!r}")
            return False


class ConsoleProvider(EmailProvider):
    """Console email provider for development/testing."""

    def send(
        self,
        to_email: str,
        from_email: str,
        subject: str,
        text_body: str,
    ) -> bool:
        """Log email to console."""
        logger.info(
            f"\n{'=' * 60}\n"
            f"EMAIL (Console Provider - Development Mode)\n"
            f"{'=' * 60}\n"
            f"From: {from_email}\n"
            f"To: {to_email}\n"
            f"Subject: {subject}\n"
            f"{'-' * 60}\n"
            f"{text_body}\n"
            f"{'=' * 60}\n"
        )
        return True


class SendGridProvider(EmailProvider):
    """SendGrid email provider."""

    def __init__(self) -> None:
        """Initialize SendGrid provider."""
        self.api_key = settings.SENDGRID_API_KEY
        self.from_name = settings.SMTP_FROM_NAME

    def send(
        self,
        to_email: str,
        from_email: str,
        subject: str,
        text_body: str,
    ) -> bool:
        """Send email via SendGrid API."""
        from sendgrid import SendGridAPIClient
        from sendgrid.helpers.mail import Content, Email, Mail, To

        try:
            message = Mail(
                from_email=Email(from_email, self.from_name),
                to_emails=To(to_email),
                subject=subject,
            )
            message.content = [Content("text/plain", text_body)]

            sg = SendGridAPIClient(self.api_key)
            response = sg.send(message)

            if response.status_code in (200, 202):
                logger.info(
                    f"Email sent to {hash_email_for_audit(to_email)} via SendGrid"
                )
                return True
            else:
                logger.error(f"SendGrid returned status {response.status_code}")
                return False

        except Exception as e:
            logger.error(f"Failed to send email via SendGrid: {e!r}")
            return False


def get_email_provider() -> EmailProvider:
    """Get the configured email provider."""
    provider_name = settings.EMAIL_PROVIDER.lower()

    if provider_name == "smtp":
        return SMTPProvider()
    elif provider_name == "sendgrid":
        return SendGridProvider()
    elif provider_name == "console":
        return ConsoleProvider()
    else:
        logger.warning(f"Unknown email provider '{provider_name}', using console")
        return ConsoleProvider()
