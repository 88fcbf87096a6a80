import re
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from helpers.sanitization import sanitize_plain_text

# Digits with the usual separators: "+1 (555) 123-4567", "555.1234"
PHONE_PATTERN = r"^\+?[0-9\s\-().]{7,20}$"
PHONE_MIN_DIGITS = 7
EMAIL_MAX_LENGTH = 254


# Contact Form Schemas
class MailerRequest(BaseModel):
    """Contact form submission as posted by the frontend (camelCase JSON).

    Text fields are trimmed and stripped of markup, the email is lower-cased.
    The reCAPTCHA token is optional here so that a missing token can be
    reported as a security verification problem rather than a field error.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
        extra="ignore",
    )

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    phone: str = Field(..., min_length=7, max_length=20, pattern=PHONE_PATTERN)
    pet_type: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("petType", "serviceDetail"),
        serialization_alias="petType",
    )
    dates: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=5000)
    recaptcha_token: Optional[str] = Field(
        default=None,
        max_length=4096,
        validation_alias=AliasChoices("recaptchaToken", "token"),
        serialization_alias="recaptchaToken",
    )

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        """Trim and lower-case the address before format validation."""
        if isinstance(v, str):
            v = v.strip().lower()
            if len(v) > EMAIL_MAX_LENGTH:
                raise ValueError(
                    f"must be at most {EMAIL_MAX_LENGTH} characters"
                )
        return v

    @field_validator("first_name", "last_name", "pet_type", "dates", "message")
    @classmethod
    def strip_markup(cls, v: str) -> str:
        cleaned = sanitize_plain_text(v)
        if not cleaned:
            raise ValueError("must contain text, not only markup")
        return cleaned

    @field_validator("phone")
    @classmethod
    def check_phone_digits(cls, v: str) -> str:
        if len(re.sub(r"\D", "", v)) < PHONE_MIN_DIGITS:
            raise ValueError(f"must contain at least {PHONE_MIN_DIGITS} digits")
        return v

    @field_validator("recaptcha_token", mode="before")
    @classmethod
    def blank_token_is_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class MailerResponse(BaseModel):
    success: bool
    message: str


class EmailMessage(BaseModel):
    """A single outbound plain-text email."""

    model_config = ConfigDict(frozen=True)

    to_email: str
    from_email: str
    subject: str
    body: str


# reCAPTCHA Enterprise Schemas
class TokenProperties(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    valid: bool = False
    invalid_reason: Optional[str] = None
    hostname: Optional[str] = None
    action: Optional[str] = None
    create_time: Optional[str] = None


class RiskAnalysis(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    score: float = Field(default=0.0, ge=0.0, le=1.0)
    reasons: List[str] = Field(default_factory=list)


class Assessment(BaseModel):
    """Subset of a reCAPTCHA Enterprise assessment response."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    name: Optional[str] = None
    token_properties: TokenProperties
    risk_analysis: RiskAnalysis = Field(default_factory=RiskAnalysis)

    def to_result(self) -> "VerificationResult":
        return VerificationResult(
            valid=self.token_properties.valid,
            action=self.token_properties.action or "",
            score=self.risk_analysis.score,
        )


class VerificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    action: str
    score: float = Field(ge=0.0, le=1.0)
