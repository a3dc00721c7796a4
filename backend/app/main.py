"""
Mail Relay API
FastAPI application that accepts authenticated send requests and hands them
to MailChannels in the background.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.routers import email

# Configure logging to output to console
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mail Relay API",
    description="Authenticated relay from a JSON endpoint to MailChannels",
    version="0.1.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    # "/email/" is a different path, not a redirect to "/email"
    redirect_slashes=False,
)

# Include routers
app.include_router(email.router, tags=["email"])


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """
    Answer every unrouted request with a plain 404.

    Unknown paths raise 404 and known paths hit with another method raise
    405; both become "Not found.", whatever the method.
    """
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not found.", status_code=404)
    return await http_exception_handler(request, exc)


@app.on_event("startup")
async def log_startup_config() -> None:
    """
    Log where mail is relayed and which credentials are configured.

    Secret values are never logged, only whether they are set.
    """
    settings = get_settings()
    if not settings.auth_secret:
        logger.warning(
            "AUTH_SECRET is not configured; every POST /email will be rejected with 401"
        )
    logger.info(
        "Mail Relay API relaying to %s (provider key %s, timeout %ss)",
        settings.provider_url,
        "configured" if settings.provider_api_key else "not configured",
        settings.provider_timeout,
    )
