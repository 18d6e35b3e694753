# app/core/paypal.py
import logging
import time
from typing import Any, Dict, Optional

import httpx

from app.core.settings import settings

log = logging.getLogger("uvicorn.error")


class PayPalError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details or {}


class PayPalClient:
    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.client_id = client_id or settings.paypal_client_id or ""
        self.client_secret = client_secret or settings.paypal_client_secret or ""
        self.base_url = (base_url or settings.paypal_base_url).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout_seconds, transport=self._transport)

    @staticmethod
    def _raise_for(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        try:
            details = response.json()
        except ValueError:
            details = {"body": response.text}
        raise PayPalError(f"PayPal {action} failed with HTTP {response.status_code}", response.status_code, details)

    async def get_access_token(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token
        if not self.client_id or not self.client_secret:
            raise PayPalError("PAYPAL_CLIENT_ID / PAYPAL_CLIENT_SECRET are not configured.")

        async with self._client() as client:
            response = await client.post(
                "/v1/oauth2/token",
                data={"grant_type": "client_credentials"},
                auth=(self.client_id, self.client_secret),
            )
        self._raise_for(response, "token request")
        data = response.json()
        self._token = data["access_token"]
        # refresh a minute early
        self._token_expires_at = time.monotonic() + max(int(data.get("expires_in", 0)) - 60, 0)
        return self._token

    async def _post(self, path: str, payload: Optional[Dict[str, Any]], action: str) -> Dict[str, Any]:
        token = await self.get_access_token()
        headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}
        async with self._client() as client:
            response = await client.post(path, json=payload if payload is not None else {}, headers=headers)
        self._raise_for(response, action)
        return response.json() if response.content else {}

    async def create_order(self, descriptor: Dict[str, Any]) -> Dict[str, Any]:
        order = await self._post("/v2/checkout/orders", descriptor, "create order")
        log.info(f"[paypal] order created id={order.get('id')} status={order.get('status')}")
        return order

    async def capture_order(self, order_id: str) -> Dict[str, Any]:
        capture = await self._post(f"/v2/checkout/orders/{order_id}/capture", None, "capture")
        log.info(f"[paypal] order captured id={order_id} status={capture.get('status')}")
        return capture


_client: Optional[PayPalClient] = None


def get_paypal_client() -> PayPalClient:
    global _client
    if _client is None:
        _client = PayPalClient()
    return _client
