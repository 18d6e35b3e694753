# app/routers/form.py
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.core.settings import settings
from app.lib.validation import GRADE_CHOICES

router = APIRouter(tags=["form"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


@router.get("/", response_class=HTMLResponse)
async def request_form(request: Request):
    return templates.TemplateResponse(
        request,
        "request_form.html",
        {
            "grades": GRADE_CHOICES,
            "amount": settings.payment_amount,
            "currency": settings.payment_currency,
            "paypal_client_id": settings.paypal_client_id or "",
        },
    )
