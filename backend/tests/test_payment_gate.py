import httpx
import pytest

from app.core.paypal import PayPalClient
from app.lib.payment_gate import (
    PAYMENT_FAILED_MESSAGE,
    PAYMENT_SUCCESS_MESSAGE,
    PaymentCaptureError,
    PaymentGate,
    PaymentStatus,
    PayPalOrderActions,
)


class FakeOrder:
    def __init__(self, fail=False):
        self.fail = fail
        self.captures = 0

    async def capture(self):
        self.captures += 1
        if self.fail:
            raise PaymentCaptureError("INSTRUMENT_DECLINED")
        return {"id": "ORDER-1", "status": "COMPLETED"}


def test_create_order_describes_fixed_capture():
    gate = PaymentGate()
    assert gate.create_order() == {
        "intent": "CAPTURE",
        "purchase_units": [{"amount": {"value": "10", "currency_code": "USD"}}],
    }
    assert gate.status is PaymentStatus.NOT_STARTED


@pytest.mark.asyncio
async def test_approval_captures_and_completes():
    gate = PaymentGate()
    order = FakeOrder()

    await gate.on_approve(order)

    assert order.captures == 1
    assert gate.completed
    assert gate.toaster.last.level == "success"
    assert gate.toaster.last.message == PAYMENT_SUCCESS_MESSAGE


@pytest.mark.asyncio
async def test_capture_failure_returns_to_not_started():
    gate = PaymentGate()

    await gate.on_approve(FakeOrder(fail=True))

    assert gate.status is PaymentStatus.NOT_STARTED
    assert not gate.completed
    assert gate.toaster.last.message == PAYMENT_FAILED_MESSAGE

    # the widget may be retried
    await gate.on_approve(FakeOrder())
    assert gate.completed


@pytest.mark.asyncio
async def test_approval_without_order_actions_is_ignored():
    gate = PaymentGate()
    await gate.on_approve(None)
    assert gate.status is PaymentStatus.NOT_STARTED
    assert gate.toaster.items == []


def test_widget_error_keeps_gate_locked():
    gate = PaymentGate()
    gate.on_error(RuntimeError("popup closed"))
    assert not gate.completed
    assert gate.toaster.last.level == "error"


@pytest.mark.asyncio
async def test_completed_is_terminal_until_reset():
    gate = PaymentGate()
    await gate.on_approve(FakeOrder())
    second = FakeOrder()

    await gate.on_approve(second)
    gate.on_error(RuntimeError("late widget error"))

    assert second.captures == 0
    assert gate.completed
    gate.reset()
    assert gate.status is PaymentStatus.NOT_STARTED


def _paypal(handler):
    return PayPalClient(
        client_id="cid",
        client_secret="secret",
        base_url="https://paypal.test",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_paypal_order_actions_require_completed_status():
    def handler(request):
        if request.url.path == "/v1/oauth2/token":
            return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})
        return httpx.Response(201, json={"id": "ORDER-1", "status": "PAYER_ACTION_REQUIRED"})

    with pytest.raises(PaymentCaptureError):
        await PayPalOrderActions(_paypal(handler), "ORDER-1").capture()


@pytest.mark.asyncio
async def test_paypal_order_actions_unlock_gate():
    def handler(request):
        if request.url.path == "/v1/oauth2/token":
            return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})
        return httpx.Response(201, json={"id": "ORDER-1", "status": "COMPLETED"})

    gate = PaymentGate()
    await gate.on_approve(PayPalOrderActions(_paypal(handler), "ORDER-1"))
    assert gate.completed
