"""Unit tests for the refund admin API client"""

import httpx
import pytest
from refund_gateway.domain.exceptions import RefundAdminAPIError, RefundNotFoundError
from refund_gateway.infrastructure.clients.refund_admin import RefundAdminClient

BASE_URL = "http://refund-admin.test/api/v1"


def make_client(handler, token: str | None = "secret") -> RefundAdminClient:
    return RefundAdminClient(
        base_url=BASE_URL,
        timeout=1.0,
        token=token,
        transport=httpx.MockTransport(handler),
    )


async def test_get_refund_returns_document():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["authorization"] = request.headers.get("Authorization")
        return httpx.Response(
            200,
            json={
                "publicId": "TDV-001",
                "status": "SUBMITTED",
                "calculationSnapshot": {"insuranceToEvaluate": "ambos", "totalAmount": 5_000_000},
            },
        )

    refund = await make_client(handler).get_refund("TDV-001")

    assert seen["url"] == f"{BASE_URL}/refund-requests/admin/detail/TDV-001"
    assert seen["authorization"] == "Bearer secret"
    assert refund["status"] == "SUBMITTED"
    assert refund["calculationSnapshot"]["totalAmount"] == 5_000_000


async def test_get_refund_not_found():
    client = make_client(lambda request: httpx.Response(404, json={"message": "not found"}))

    with pytest.raises(RefundNotFoundError):
        await client.get_refund("TDV-404")


async def test_get_refund_http_error():
    client = make_client(lambda request: httpx.Response(500, json={"message": "boom"}))

    with pytest.raises(RefundAdminAPIError, match="500"):
        await client.get_refund("TDV-001")


async def test_get_refund_invalid_json():
    client = make_client(lambda request: httpx.Response(200, content=b"<html>"))

    with pytest.raises(RefundAdminAPIError, match="Invalid refund data"):
        await client.get_refund("TDV-001")


async def test_get_refund_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RefundAdminAPIError, match="timeout"):
        await make_client(handler).get_refund("TDV-001")


async def test_get_refund_without_token_sends_no_authorization():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["authorization"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"status": "PAID"})

    await RefundAdminClient(base_url=BASE_URL, transport=httpx.MockTransport(handler)).get_refund("TDV-002")

    assert seen["authorization"] is None
