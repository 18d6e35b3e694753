# app/routers/submit.py
import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.core.mailer import MailMessage, MailRelay, get_mail_relay
from app.core.settings import settings
from app.lib.email_template import render_request_email
from app.lib.validation import validate_submission

router = APIRouter(prefix="/api", tags=["submit"])
log = logging.getLogger("uvicorn.error")


def _invalid(fields: dict) -> JSONResponse:
    return JSONResponse(status_code=422, content={"error": "Invalid submission", "fields": fields})


@router.post("/submit")
async def submit_request(request: Request, relay: MailRelay = Depends(get_mail_relay)):
    try:
        data = await request.json()
    except ValueError:
        return _invalid({})
    if not isinstance(data, dict):
        return _invalid({})

    result = validate_submission(data)
    if not result.ok:
        log.info(f"[submit] rejected fields={sorted(result.errors)}")
        return _invalid({name: err.as_dict() for name, err in result.errors.items()})

    try:
        message = MailMessage(
            sender=settings.sender or "",
            recipient=settings.recipient or "",
            subject=settings.mail_subject,
            html=render_request_email(result.request),
        )
        # smtplib blocks; keep it off the event loop
        await asyncio.to_thread(relay.send, message)
    except Exception as exc:
        log.exception("[submit] Error sending email: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Failed to send email"})

    log.info(f"[submit] request email sent grade={result.request.grade!r}")
    return {"success": True}
