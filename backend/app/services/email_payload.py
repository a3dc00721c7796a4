"""
Parse and validate the POST /email request body.

The raw body goes through two steps, each with its own failure kind:

  decode_json            bytes -> untyped JSON value   ("invalid_json")
  validate_email_request JSON value -> EmailRequest    ("validation_error")

Both raise PayloadError, whose to_dict() is returned verbatim to the client
as the 400 response body. Submitted values are never echoed back.
"""

import json
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from app.models.email import EmailRequest

INVALID_JSON = "invalid_json"
VALIDATION_ERROR = "validation_error"

# Built once at import time and shared by every request.
_EMAIL_REQUEST_ADAPTER: TypeAdapter[EmailRequest] = TypeAdapter(EmailRequest)


class PayloadError(Exception):
    """A request body that could not be turned into an EmailRequest."""

    def __init__(self, kind: str, message: str, details: Optional[list[dict]] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or []

    def to_dict(self) -> dict:
        return {
            "error": self.kind,
            "message": self.message,
            "details": self.details,
        }


def decode_json(body: bytes) -> Any:
    """
    Decode a request body as JSON.

    Raises:
        PayloadError: kind "invalid_json" if the body is not UTF-8 JSON or
            is nested too deeply to decode
    """
    try:
        return json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise PayloadError(
            INVALID_JSON,
            "Request body is not valid JSON",
            [{"loc": [], "msg": str(exc), "type": INVALID_JSON}],
        ) from exc


def _describe(exc: ValidationError) -> list[dict]:
    """Reduce pydantic errors to loc/msg/type, dropping the offending input."""
    return [
        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in exc.errors(include_url=False)
    ]


def validate_email_request(raw: Any) -> EmailRequest:
    """
    Validate an untyped JSON value against the email request shape.

    Pure and deterministic: no I/O, same input gives the same outcome.

    Raises:
        PayloadError: kind "validation_error" listing every violation
    """
    try:
        return _EMAIL_REQUEST_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise PayloadError(
            VALIDATION_ERROR,
            "Request body does not match the email schema",
            _describe(exc),
        ) from exc


def parse_email_request(body: bytes) -> EmailRequest:
    """Decode and validate a raw request body in one step."""
    return validate_email_request(decode_json(body))
