# app/lib/form_session.py
import logging
from typing import Any, Dict, Mapping, Optional, Protocol

import httpx

from app.core.settings import settings
from app.lib.notifications import Toaster
from app.lib.payment_gate import PaymentGate
from app.lib.validation import FieldError, SubmissionRequest, validate_submission

log = logging.getLogger("uvicorn.error")

PAYMENT_REQUIRED_MESSAGE = "Please complete the payment first"
SUBMIT_SUCCESS_MESSAGE = (
    "Thank you! Your request has been received. We'll process it and email you within 24 hours."
)
SUBMIT_FAILED_MESSAGE = "Failed to submit form. Please try again."


class PaymentNotCompleted(Exception):
    pass


class SubmitTransport(Protocol):
    async def post_submission(self, payload: Dict[str, Any]) -> int:
        """Send the record, return the HTTP status code."""
        ...


class HttpSubmitTransport:
    # No timeout on purpose: the form waits for the relay however long it takes.
    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    async def post_submission(self, payload: Dict[str, Any]) -> int:
        async with httpx.AsyncClient(base_url=self.base_url, timeout=None, transport=self._transport) as client:
            response = await client.post("/api/submit", json=payload)
        return response.status_code


class FormSession:
    def __init__(self, transport: SubmitTransport, payment: Optional[PaymentGate] = None, toaster: Optional[Toaster] = None):
        self.transport = transport
        self.toaster = toaster if toaster is not None else Toaster()
        self.payment = payment if payment is not None else PaymentGate(
            settings.payment_amount, settings.payment_currency, toaster=self.toaster
        )
        self.is_submitting = False
        self.values: Dict[str, Any] = {}
        self.errors: Dict[str, FieldError] = {}

    @property
    def can_submit(self) -> bool:
        return self.payment.completed and not self.is_submitting

    def set_values(self, values: Mapping[str, Any]) -> None:
        self.values.update(values)

    def _require_payment(self) -> None:
        if not self.payment.completed:
            raise PaymentNotCompleted(PAYMENT_REQUIRED_MESSAGE)

    async def submit(self, values: Optional[Mapping[str, Any]] = None) -> bool:
        """Run one submit attempt. Returns True only when the relay accepted it."""
        if self.is_submitting:
            return False
        if values is not None:
            self.set_values(values)

        result = validate_submission(self.values)
        self.errors = dict(result.errors)
        if not result.ok:
            return False

        try:
            self._require_payment()
        except PaymentNotCompleted as exc:
            self.toaster.error(str(exc))
            return False

        return await self._send(result.request)

    async def _send(self, req: SubmissionRequest) -> bool:
        self.is_submitting = True
        try:
            status = await self.transport.post_submission(req.model_dump())
            if not 200 <= status < 300:
                raise RuntimeError(f"submit returned HTTP {status}")
        except (httpx.HTTPError, RuntimeError) as exc:
            log.warning(f"[form] submission failed: {exc}")
            self.toaster.error(SUBMIT_FAILED_MESSAGE)
            return False
        finally:
            self.is_submitting = False

        self.toaster.success(SUBMIT_SUCCESS_MESSAGE)
        self.values = {}
        self.payment.reset()
        return True
