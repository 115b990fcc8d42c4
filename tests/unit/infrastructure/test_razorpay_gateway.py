"""Unit tests for the Razorpay gateway adapter (HTTP session faked)."""
import aiohttp
import pytest

from core.domain.exceptions import PaymentGatewayError, PaymentGatewayUnavailableError
from core.infrastructure.adapters.payments.razorpay_gateway import RazorpayGateway
from core.infrastructure.security import hmac_sha256_hex
from core.settings.modules.payment_settings import RazorpaySettings


class FakeResponse:
    def __init__(self, status, body=None, text=""):
        self.status = status
        self._body = body or {}
        self._text = text

    async def json(self):
        return self._body

    async def text(self):
        return self._text


class FakeRequest:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error

    async def __aenter__(self):
        if self._error is not None:
            raise self._error
        return self._response

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    closed = False

    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return FakeRequest(self._response, self._error)


@pytest.fixture
def settings():
    return RazorpaySettings(
        enabled=True,
        key_id="rzp_test_key",
        key_secret="rzp_secret",
        api_base="https://api.example.test/v1/",
    )


@pytest.mark.asyncio
async def test_create_order_posts_minor_units(settings):
    session = FakeSession(FakeResponse(200, {"id": "order_123", "amount": 119000, "currency": "INR"}))
    gateway = RazorpayGateway(settings, session=session)

    order = await gateway.create_order(119000, "INR", receipt="order_rcpt_1", notes={"order_id": "1"})

    assert order.id == "order_123"
    assert order.amount == 119000
    url, kwargs = session.calls[0]
    assert url == "https://api.example.test/v1/orders"
    assert kwargs["json"]["amount"] == 119000
    assert kwargs["json"]["receipt"] == "order_rcpt_1"
    assert kwargs["auth"].login == "rzp_test_key"


@pytest.mark.asyncio
async def test_server_error_is_unavailable(settings):
    gateway = RazorpayGateway(settings, session=FakeSession(FakeResponse(503, text="maintenance")))

    with pytest.raises(PaymentGatewayUnavailableError) as exc_info:
        await gateway.create_order(100, "INR", receipt="r")

    assert exc_info.value.retryable is True


@pytest.mark.asyncio
async def test_client_error_is_rejection(settings):
    gateway = RazorpayGateway(settings, session=FakeSession(FakeResponse(400, text="bad currency")))

    with pytest.raises(PaymentGatewayError) as exc_info:
        await gateway.create_order(100, "XXX", receipt="r")

    assert exc_info.value.status_code == 400
    assert exc_info.value.retryable is False


@pytest.mark.asyncio
async def test_connection_error_is_unavailable(settings):
    session = FakeSession(error=aiohttp.ClientConnectionError("refused"))
    gateway = RazorpayGateway(settings, session=session)

    with pytest.raises(PaymentGatewayUnavailableError) as exc_info:
        await gateway.create_order(100, "INR", receipt="r")

    assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)


@pytest.mark.asyncio
async def test_non_positive_amount_rejected_without_call(settings):
    session = FakeSession(FakeResponse(200))
    gateway = RazorpayGateway(settings, session=session)

    with pytest.raises(PaymentGatewayError):
        await gateway.create_order(0, "INR", receipt="r")

    assert session.calls == []


def test_verify_signature_uses_key_secret(settings):
    gateway = RazorpayGateway(settings, session=FakeSession())
    signature = hmac_sha256_hex("rzp_secret", "order_1|pay_1")

    assert gateway.verify_signature("order_1|pay_1", signature)
    assert not gateway.verify_signature("order_1|pay_2", signature)
    assert gateway.key_id == "rzp_test_key"
