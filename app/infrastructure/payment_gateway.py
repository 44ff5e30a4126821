"""Client for the Razorpay-compatible payment provider."""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any, Dict

import httpx

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)


class PaymentGatewayError(RuntimeError):
    """The provider rejected the request or could not be reached."""


class PaymentGatewayConfigurationError(PaymentGatewayError):
    """Provider credentials are missing."""


class RazorpayGateway:
    """Thin wrapper around the provider REST API.

    - order creation (``POST /orders``, HTTP basic auth)
    - checkout signature verification (``HMAC-SHA256(secret, order|payment)``)
    """

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        *,
        base_url: str = "https://api.razorpay.com/v1",
        timeout: float = 10.0,
    ) -> None:
        if not key_id or not key_secret:
            raise PaymentGatewayConfigurationError(
                "Payment provider credentials are not configured"
            )
        self._key_id = key_id
        self._key_secret = key_secret
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def key_id(self) -> str:
        return self._key_id

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.status_code in (401, 403):
            raise PaymentGatewayError(
                "Payment provider refused the credentials. Check RAZORPAY_KEY_ID."
            )
        if response.status_code >= 400:
            raise PaymentGatewayError(
                f"Payment provider error: {response.status_code} {response.text}"
            )

    def create_order(
        self, *, amount_minor: int, currency: str, receipt: str
    ) -> Dict[str, Any]:
        """Create an order for ``amount_minor`` (paise, cents, ...) and return it."""

        payload = {
            "amount": amount_minor,
            "currency": currency,
            "receipt": receipt,
            "payment_capture": 1,
        }
        try:
            response = httpx.post(
                f"{self._base_url}/orders",
                json=payload,
                auth=(self._key_id, self._key_secret),
                timeout=self._timeout,
            )
        except httpx.RequestError as exc:
            raise PaymentGatewayError(f"Failed to reach payment provider: {exc}") from exc

        self._raise_for_status(response)

        try:
            order = response.json()
        except ValueError as exc:
            raise PaymentGatewayError("Payment provider returned invalid JSON") from exc
        if not isinstance(order, dict) or not order.get("id"):
            raise PaymentGatewayError("Unexpected payment provider response: missing order id")

        logger.info("Created provider order %s for receipt %s", order["id"], receipt)
        return order

    def verify_signature(self, *, order_id: str, payment_id: str, signature: str) -> bool:
        expected = sign_payment(self._key_secret, order_id=order_id, payment_id=payment_id)
        return hmac.compare_digest(expected, signature or "")


def sign_payment(secret: str, *, order_id: str, payment_id: str) -> str:
    """Return the hex signature the provider issues for a captured payment."""

    body = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def build_payment_gateway(settings: Settings | None = None) -> RazorpayGateway:
    settings = settings or get_settings()
    return RazorpayGateway(
        settings.razorpay_key_id or "",
        settings.razorpay_key_secret or "",
        base_url=settings.razorpay_api_base_url,
        timeout=settings.payment_timeout_seconds,
    )


__all__ = [
    "PaymentGatewayConfigurationError",
    "PaymentGatewayError",
    "RazorpayGateway",
    "build_payment_gateway",
    "sign_payment",
]
