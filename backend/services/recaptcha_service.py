"""
reCAPTCHA Enterprise verification service.

Creates an assessment for the token sent by the frontend and decides whether
the submission came from a human. Verification fails closed: network errors,
unexpected responses, action mismatches and low scores all reject the token.

Documentation: https://cloud.google.com/recaptcha/docs/create-assessment-website
"""

from typing import Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from helpers.sanitization import mask_token
from models.config import Settings, settings
from models.exceptions import (
    ConfigurationException,
    SecurityVerificationRequiredException,
)
from models.schemas import Assessment

DEFAULT_ACTION = "submit"


class RecaptchaService:
    """
    Verifies reCAPTCHA Enterprise tokens.

    Usage:
        service = RecaptchaService()
        is_human = await service.verify(token, "contact_form", 0.5)
    """

    def __init__(self, config: Settings | None = None) -> None:
        config = config or settings

        self.project_id = config.RECAPTCHA_PROJECT_ID
        self.api_key = config.RECAPTCHA_API_KEY
        self.site_key = config.RECAPTCHA_SITE_KEY
        self.timeout = config.RECAPTCHA_TIMEOUT_SECONDS
        self.assessment_url = (
            f"{config.RECAPTCHA_API_URL.rstrip('/')}"
            f"/projects/{self.project_id}/assessments"
        )

    def _require_credentials(self) -> None:
        """Raise ConfigurationException if the project ID or API key is missing."""
        if not self.project_id:
            raise ConfigurationException("RECAPTCHA_PROJECT_ID")
        if not self.api_key:
            raise ConfigurationException("RECAPTCHA_API_KEY")

    async def _create_assessment(
        self, token: str, expected_action: Optional[str] = None
    ) -> Assessment:
        """
        Call the assessments endpoint and parse the response.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
            ValueError: If the body is not JSON or lacks token properties
        """
        event: dict[str, str] = {"token": token, "siteKey": self.site_key}
        if expected_action:
            event["expectedAction"] = expected_action

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.assessment_url,
                params={"key": self.api_key},
                json={"event": event},
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()

        return Assessment.model_validate(response.json())

    async def verify(
        self,
        token: Optional[str],
        expected_action: Optional[str] = None,
        min_score: float = 0.5,
    ) -> bool:
        """
        Verify a reCAPTCHA Enterprise token.

        Args:
            token: The reCAPTCHA token from the client
            expected_action: Action the token must have been issued for
            min_score: Minimum acceptable risk score (0.0 to 1.0)

        Returns:
            True if the token is valid, matches the action and scores high enough

        Raises:
            SecurityVerificationRequiredException: If no token was supplied
            ConfigurationException: If the project ID or API key is not set
        """
        if not token:
            raise SecurityVerificationRequiredException()

        self._require_credentials()
        masked = mask_token(token)

        try:
            assessment = await self._create_assessment(
                token, expected_action or DEFAULT_ACTION
            )
        except httpx.TimeoutException:
            logger.error(f"reCAPTCHA assessment timed out (token={masked})")
            return False
        except httpx.HTTPStatusError as e:
            # str(e) would include the request URL and therefore the API key
            logger.error(
                f"reCAPTCHA API error: status={e.response.status_code} "
                f"body={e.response.text[:200]!r}"
            )
            return False
        except httpx.HTTPError as e:
            logger.error(f"reCAPTCHA network error: {type(e).__name__}")
            return False
        except (ValidationError, ValueError) as e:
            logger.error(f"reCAPTCHA returned a malformed assessment: {e!r}")
            return False

        result = assessment.to_result()

        if not result.valid:
            logger.warning(
                f"reCAPTCHA token invalid: "
                f"reason={assessment.token_properties.invalid_reason} "
                f"token={masked}"
            )
            return False

        if expected_action and result.action != expected_action:
            logger.warning(
                f"reCAPTCHA action mismatch: expected={expected_action} "
                f"actual={result.action}"
            )
            return False

        if result.score < min_score:
            logger.warning(
                f"reCAPTCHA score too low: score={result.score} "
                f"min_score={min_score} "
                f"reasons={assessment.risk_analysis.reasons}"
            )
            return False

        logger.info(
            f"reCAPTCHA verification successful: score={result.score} "
            f"action={result.action} "
            f"hostname={assessment.token_properties.hostname}"
        )
        return True

    async def get_assessment(self, token: Optional[str]) -> Optional[Assessment]:
        """
        Get the full assessment for a token (useful for debugging).

        Returns:
            The parsed assessment, or None if it could not be obtained

        Raises:
            ConfigurationException: If the project ID or API key is not set
        """
        if not token:
            logger.warning("reCAPTCHA assessment requested without a token")
            return None

        self._require_credentials()

        try:
            return await self._create_assessment(token)
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            logger.error(
                f"Error getting reCAPTCHA assessment: {type(e).__name__} "
                f"(token={mask_token(token)})"
            )
            return None


def get_recaptcha_service() -> RecaptchaService:
    """Get a verification service built from the current settings."""
    return RecaptchaService()
