from __future__ import annotations

import hashlib
import hmac
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest
import requests

from storefront.core.crypto import hmac_hash, signature_payload, signatures_match
from storefront.integrations.payment import RazorpayError, RazorpayGateway


@dataclass
class FakeResponse:
    status_code: int
    payload: Dict[str, Any]

    def json(self) -> Dict[str, Any]:
        return self.payload


@dataclass
class FakeSession:
    """Stands in for the requests.Session the Razorpay SDK sends through."""

    response: Optional[FakeResponse] = None
    error: Optional[Exception] = None
    calls: List[Dict[str, Any]] = field(default_factory=list)
    closed: bool = False

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        self.closed = True


def _body(call: Dict[str, Any]) -> Dict[str, Any]:
    body = call.get("json") or call.get("data")
    return json.loads(body) if isinstance(body, str) else body


def _gateway(session: FakeSession) -> RazorpayGateway:
    return RazorpayGateway(
        key_id="rzp_test_key",
        key_secret="secret",
        base_url="https://api.razorpay.test/",
        session=session,
    )


def test_create_order_goes_through_sdk() -> None:
    session = FakeSession(FakeResponse(200, {"id": "order_ABC", "amount": 5000, "currency": "INR",
                                             "receipt": "r1", "status": "created"}))

    order = _gateway(session).create_order(amount=5000, currency="INR", receipt="r1")

    assert order["id"] == "order_ABC"
    (call,) = session.calls
    assert call["url"] == "https://api.razorpay.test/v1/orders"
    assert call["auth"] == ("rzp_test_key", "secret")
    assert _body(call) == {"amount": 5000, "currency": "INR", "receipt": "r1", "payment_capture": 1}


@pytest.mark.parametrize("code", ["BAD_REQUEST_ERROR", "GATEWAY_ERROR", "SERVER_ERROR"])
def test_create_order_raises_with_gateway_description(code) -> None:
    session = FakeSession(FakeResponse(400, {"error": {
        "code": code,
        "description": "Order amount less than minimum amount allowed",
    }}))

    with pytest.raises(RazorpayError) as exc:
        _gateway(session).create_order(amount=1, currency="INR", receipt="r1")

    assert exc.value.description == "Order amount less than minimum amount allowed"
    assert exc.value.code == code


def test_create_order_network_error() -> None:
    session = FakeSession(error=requests.ConnectionError("connection refused"))

    with pytest.raises(RazorpayError, match="connection refused"):
        _gateway(session).create_order(amount=100, currency="INR", receipt="r1")


def test_close_closes_sdk_session() -> None:
    session = FakeSession()
    gw = _gateway(session)
    assert gw.configured
    gw.close()
    assert session.closed is True


def test_expected_signature_is_hex_hmac_sha256() -> None:
    gw = _gateway(FakeSession())
    # reference value: HMAC-SHA256(key="secret", msg="order_1|pay_1")
    ref = hmac.new(b"secret", b"order_1|pay_1", hashlib.sha256).hexdigest()
    assert gw.expected_signature("order_1", "pay_1") == ref
    assert hmac_hash("secret", "order_1", "pay_1") == ref
    assert signature_payload("order_1", "pay_1") == "order_1|pay_1"


def test_signatures_match_is_exact() -> None:
    sig = hmac_hash("secret", "o", "p")
    assert signatures_match(sig, sig)
    assert not signatures_match(sig, sig.upper())
    assert not signatures_match(sig, sig + " ")
    assert not signatures_match(sig, None)
