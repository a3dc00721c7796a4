"""
Pydantic models for the outbound email request.

JSON keys follow the public wire format (from / to / subject / content,
content items as type / value). Python attribute names follow the domain:
sender, recipient, content_parts, mime_type.

Every model is frozen and rejects unknown keys. Strings must arrive as JSON
strings (no coercion) and must be non-empty.
"""

from typing import Annotated, List

import email_validator
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]

# Stands in for a special-use top-level label (test, local, invalid, ...)
# so the rest of the address still goes through full syntax checking.
_NEUTRAL_TLD = "com"


def _is_special_use(domain: str) -> bool:
    name = domain.lower().rstrip(".")
    return any(
        name == reserved or name.endswith("." + reserved)
        for reserved in email_validator.SPECIAL_USE_DOMAIN_NAMES
    )


def check_address(value: str) -> str:
    """
    Check local-part@domain syntax and return the address unchanged.

    No top-level suffix is required to be registered: special-use and
    internal domains (example.test, host.local, corp.internal) pass. The
    domain still needs at least two labels.
    """
    local, at, domain = value.rpartition("@")
    if at and "." not in domain:
        raise ValueError("The part after the @-sign must contain a period.")

    candidate = value
    if at and _is_special_use(domain):
        candidate = f"{local}@{domain.rstrip('.').rsplit('.', 1)[0]}.{_NEUTRAL_TLD}"

    try:
        validate_email(
            candidate,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
        )
    except EmailNotValidError as exc:
        raise ValueError(str(exc)) from exc

    return value


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Sender(_WireModel):
    """The From identity shown to the recipient."""

    email: NonEmptyStr
    name: NonEmptyStr

    @field_validator("email")
    @classmethod
    def _valid_address(cls, v: str) -> str:
        return check_address(v)


class Recipient(_WireModel):
    """The single addressed recipient."""

    email: NonEmptyStr

    @field_validator("email")
    @classmethod
    def _valid_address(cls, v: str) -> str:
        return check_address(v)


class ContentPart(_WireModel):
    """One body part, e.g. text/plain or text/html."""

    mime_type: NonEmptyStr = Field(alias="type")
    value: NonEmptyStr


class EmailRequest(_WireModel):
    """
    A fully validated send request.

    Instances only exist once every field has passed validation; use
    app.services.email_payload.validate_email_request to build one from
    untrusted input.
    """

    sender: Sender = Field(alias="from")
    # Required: a request without a recipient is rejected up front rather
    # than failing later at the provider.
    recipient: Recipient = Field(alias="to")
    subject: NonEmptyStr
    content_parts: List[ContentPart] = Field(alias="content", min_length=1)
