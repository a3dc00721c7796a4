"""
Email send endpoint.

POST /email
  Authorization: Bearer <AUTH_SECRET>
  Body: {"from": {"email", "name"}, "to": {"email"}, "subject",
         "content": [{"type", "value"}, ...]}

Responses:
  200 "mail sent"               accepted, delivery scheduled (not guaranteed)
  401 "Could not authenticate"  missing or invalid credential
  400 (empty)                   body could not be read
  400 JSON PayloadError         body is not JSON or fails validation

Delivery runs as a FastAPI background task: the response goes out first and
the request lifecycle awaits the task afterwards. Provider failures are
logged by the mailer and never reach the client.
"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.requests import ClientDisconnect

from app.auth import authenticate
from app.config import Settings, get_settings
from app.services.email_payload import PayloadError, parse_email_request
from app.services.mailer import dispatch

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/email")
async def send_email(
    request: Request,
    background_tasks: BackgroundTasks,
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
):
    """Authenticate, validate and schedule delivery of one email."""
    if authenticate(authorization, settings) is None:
        return PlainTextResponse("Could not authenticate", status_code=401)

    try:
        body = await request.body()
    except ClientDisconnect:
        logger.warning("Client disconnected before the request body was read")
        return Response(status_code=400)

    try:
        email = parse_email_request(body)
    except PayloadError as exc:
        logger.info(f"Rejected email request: {exc.kind}")
        return JSONResponse(exc.to_dict(), status_code=400)

    background_tasks.add_task(dispatch, email, settings)
    return PlainTextResponse("mail sent")
