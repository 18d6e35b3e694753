# app/routers/payments.py
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.paypal import PayPalClient, PayPalError, get_paypal_client
from app.core.settings import settings
from app.lib.payment_gate import PaymentCaptureError, PayPalOrderActions, build_order_descriptor

router = APIRouter(prefix="/api", tags=["payments"])
log = logging.getLogger("uvicorn.error")


@router.get("/payments/config")
async def payment_config():
    # what the browser SDK loader needs; the secret never leaves the server
    return {
        "client_id": settings.paypal_client_id,
        "currency": settings.payment_currency,
        "intent": "capture",
        "amount": settings.payment_amount,
    }


@router.post("/orders")
async def create_order(client: PayPalClient = Depends(get_paypal_client)):
    descriptor = build_order_descriptor(settings.payment_amount, settings.payment_currency)
    try:
        order = await client.create_order(descriptor)
    except PayPalError as e:
        log.error(f"[payment] create order failed: {e} {e.details}")
        return JSONResponse(status_code=502, content={"error": "Failed to create order"})
    return {"id": order.get("id"), "status": order.get("status")}


@router.post("/orders/{order_id}/capture")
async def capture_order(order_id: str, client: PayPalClient = Depends(get_paypal_client)):
    try:
        capture = await PayPalOrderActions(client, order_id).capture()
    except PaymentCaptureError as e:
        log.error(f"[payment] capture failed order_id={order_id}: {e}")
        return JSONResponse(status_code=502, content={"error": "Failed to capture payment"})
    return {"id": capture.get("id", order_id), "status": capture.get("status")}
