"""Refund admin API HTTP client for fetching persisted refund requests"""

import httpx
from typing import Any, Dict
from refund_gateway.domain.exceptions import RefundAdminAPIError, RefundNotFoundError
from refund_gateway.config import settings


class RefundAdminClient:
    """Client for the refund administration backend"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.refund_admin_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.token = token or settings.refund_admin_api_token
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def get_refund(self, public_id: str) -> Dict[str, Any]:
        """
        Fetch one refund request, including its calculationSnapshot.

        Raises:
            RefundNotFoundError: When the backend has no refund with that id
            RefundAdminAPIError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/refund-requests/admin/detail/{public_id}",
                    headers=self._headers(),
                )
                if response.status_code == 404:
                    raise RefundNotFoundError(f"Refund {public_id} not found")
                response.raise_for_status()
                data = response.json()
                if not isinstance(data, dict):
                    raise RefundAdminAPIError("Invalid refund data from admin API: expected an object")

                return data

            except httpx.TimeoutException as e:
                raise RefundAdminAPIError(f"Refund admin API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise RefundAdminAPIError(f"Refund admin API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise RefundAdminAPIError(f"Refund admin API unreachable: {e}") from e
            except ValueError as e:
                raise RefundAdminAPIError(f"Invalid refund data from admin API: {e}") from e
