from __future__ import annotations

import httpx
import pytest

from app.config import Settings
from app.infrastructure.payment_gateway import (
    PaymentGatewayConfigurationError,
    PaymentGatewayError,
    RazorpayGateway,
    build_payment_gateway,
    sign_payment,
)


@pytest.fixture()
def gateway() -> RazorpayGateway:
    return RazorpayGateway("key_id", "key_secret", base_url="https://pay.example.com/v1/")


def test_create_order_posts_amount_in_minor_units(monkeypatch, gateway):
    captured = {}

    def fake_post(url, **kwargs):
        captured["url"] = url
        captured.update(kwargs)
        return httpx.Response(
            200,
            json={"id": "order_123", "amount": 50000, "currency": "INR"},
            request=httpx.Request("POST", url),
        )

    monkeypatch.setattr(httpx, "post", fake_post)

    order = gateway.create_order(amount_minor=50000, currency="INR", receipt="rcpt_1")

    assert order["id"] == "order_123"
    assert captured["url"] == "https://pay.example.com/v1/orders"
    assert captured["auth"] == ("key_id", "key_secret")
    assert captured["json"] == {
        "amount": 50000,
        "currency": "INR",
        "receipt": "rcpt_1",
        "payment_capture": 1,
    }


@pytest.mark.parametrize("status_code", [400, 401, 500])
def test_create_order_rejects_error_responses(monkeypatch, gateway, status_code):
    monkeypatch.setattr(
        httpx,
        "post",
        lambda url, **kwargs: httpx.Response(
            status_code, json={"error": "nope"}, request=httpx.Request("POST", url)
        ),
    )

    with pytest.raises(PaymentGatewayError):
        gateway.create_order(amount_minor=100, currency="INR", receipt="rcpt_2")


def test_create_order_wraps_transport_errors(monkeypatch, gateway):
    def fake_post(url, **kwargs):
        raise httpx.ConnectError("connection refused", request=httpx.Request("POST", url))

    monkeypatch.setattr(httpx, "post", fake_post)

    with pytest.raises(PaymentGatewayError):
        gateway.create_order(amount_minor=100, currency="INR", receipt="rcpt_3")


def test_create_order_requires_an_order_id(monkeypatch, gateway):
    monkeypatch.setattr(
        httpx,
        "post",
        lambda url, **kwargs: httpx.Response(
            200, json={"status": "created"}, request=httpx.Request("POST", url)
        ),
    )

    with pytest.raises(PaymentGatewayError):
        gateway.create_order(amount_minor=100, currency="INR", receipt="rcpt_4")


def test_signature_verification(gateway):
    signature = sign_payment("key_secret", order_id="order_1", payment_id="pay_1")

    assert gateway.verify_signature(order_id="order_1", payment_id="pay_1", signature=signature)
    assert not gateway.verify_signature(
        order_id="order_1", payment_id="pay_2", signature=signature
    )
    assert not gateway.verify_signature(order_id="order_1", payment_id="pay_1", signature="")


def test_missing_credentials_are_a_configuration_error():
    settings = Settings(
        database_url="sqlite://",
        secret_key="secret",
        razorpay_key_id=None,
        razorpay_key_secret=None,
    )

    with pytest.raises(PaymentGatewayConfigurationError):
        build_payment_gateway(settings)


def test_half_configured_credentials_are_rejected():
    with pytest.raises(ValueError):
        Settings(
            database_url="sqlite://",
            secret_key="secret",
            razorpay_key_id="only-id",
            razorpay_key_secret=None,
        )
