# app/lib/payment_gate.py
import logging
from enum import Enum
from typing import Any, Dict, Optional, Protocol

from app.core.paypal import PayPalClient, PayPalError
from app.lib.notifications import Toaster

log = logging.getLogger("uvicorn.error")

PAYMENT_SUCCESS_MESSAGE = "Payment completed successfully!"
PAYMENT_FAILED_MESSAGE = "Payment failed. Please try again."


class PaymentStatus(str, Enum):
    NOT_STARTED = "not_started"
    APPROVED = "approved"
    COMPLETED = "completed"


class PaymentCaptureError(Exception):
    pass


class OrderActions(Protocol):
    async def capture(self) -> Dict[str, Any]: ...


def build_order_descriptor(amount: str, currency: str) -> Dict[str, Any]:
    return {
        "intent": "CAPTURE",
        "purchase_units": [
            {"amount": {"value": amount, "currency_code": currency}},
        ],
    }


class PayPalOrderActions:
    """Captures an approved order through the REST API."""

    def __init__(self, client: PayPalClient, order_id: str):
        self.client = client
        self.order_id = order_id

    async def capture(self) -> Dict[str, Any]:
        try:
            result = await self.client.capture_order(self.order_id)
        except PayPalError as e:
            raise PaymentCaptureError(str(e)) from e
        if result.get("status") != "COMPLETED":
            raise PaymentCaptureError(f"order {self.order_id} capture status {result.get('status')!r}")
        return result


class PaymentGate:
    """
    NotStarted -> Approved -> Completed; a capture failure or widget error goes
    back to NotStarted. Completed holds until reset().
    """

    def __init__(self, amount: str = "10", currency: str = "USD", toaster: Optional[Toaster] = None):
        self.amount = amount
        self.currency = currency
        self.toaster = toaster if toaster is not None else Toaster()
        self.status = PaymentStatus.NOT_STARTED

    @property
    def completed(self) -> bool:
        return self.status is PaymentStatus.COMPLETED

    def create_order(self) -> Dict[str, Any]:
        return build_order_descriptor(self.amount, self.currency)

    async def on_approve(self, order: Optional[OrderActions]) -> None:
        if order is None:
            return
        if self.completed:
            log.info("[payment] approval ignored, payment already completed")
            return
        self.status = PaymentStatus.APPROVED
        try:
            await order.capture()
        except Exception as exc:
            self.on_error(exc)
            return
        self.status = PaymentStatus.COMPLETED
        self.toaster.success(PAYMENT_SUCCESS_MESSAGE)

    def on_error(self, err: BaseException) -> None:
        log.error(f"[payment] PayPal error: {err}")
        if not self.completed:
            self.status = PaymentStatus.NOT_STARTED
        self.toaster.error(PAYMENT_FAILED_MESSAGE)

    def reset(self) -> None:
        self.status = PaymentStatus.NOT_STARTED
