"""
Outbound delivery through the MailChannels transactional API.

dispatch() runs as a background task after the HTTP response has already
been sent, so it never raises: provider rejections and transport errors are
logged with the recipient address and swallowed. There are no retries.

Only the recipient address is ever logged; subject and content are not.
"""

import logging

import httpx

from app.config import Settings
from app.models.email import EmailRequest

logger = logging.getLogger(__name__)


def build_provider_payload(email: EmailRequest) -> dict:
    """
    Map an EmailRequest onto the MailChannels /tx/v1/send body.

    One personalization with a single recipient; content parts keep their
    order and values verbatim.
    """
    return {
        "personalizations": [
            {"to": [{"email": email.recipient.email}]},
        ],
        "from": {
            "email": email.sender.email,
            "name": email.sender.name,
        },
        "subject": email.subject,
        "content": [
            {"type": part.mime_type, "value": part.value}
            for part in email.content_parts
        ],
    }


def _build_headers(settings: Settings) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if settings.provider_api_key:
        headers["X-Api-Key"] = settings.provider_api_key
    return headers


def _build_client(settings: Settings) -> httpx.AsyncClient:
    """Return a fresh client bounded by the configured timeout."""
    return httpx.AsyncClient(timeout=settings.provider_timeout)


async def dispatch(email: EmailRequest, settings: Settings) -> None:
    """
    Send one email through the provider with a single POST.

    Never raises; failures are only visible in the logs.
    """
    recipient = email.recipient.email
    try:
        async with _build_client(settings) as client:
            response = await client.post(
                settings.provider_url,
                json=build_provider_payload(email),
                headers=_build_headers(settings),
            )
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.error(f"Failed to send mail to {recipient}: {exc!r}")
        return

    if not response.is_success:
        logger.error(
            f"MailChannels API responded {response.status_code} "
            f"when sending mail to {recipient}"
        )
        return

    logger.info(f"Mail sent to {recipient} (status {response.status_code})")
