# tracker/client/api.py
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api/v1"


class ClientError(Exception):
    """An error envelope returned by the API"""

    def __init__(self, status_code: int, message: str, errors: Optional[list] = None):
        self.status_code = status_code
        self.message = message
        self.errors = errors
        super().__init__(f"{status_code}: {message}")


class TrackerClient:
    """
    Async client for the Track Expense API.

    The session cookie set by ``login`` lives in the underlying httpx cookie
    jar, so later calls are authenticated without handling the token.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "TrackerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._client.request(method, path, json=json)
        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error or not body.get("success", False):
            message = body.get("message") or response.reason_phrase or "Request failed"
            if response.status_code == 401:
                logger.info(f"{method} {path} rejected: {message}")
            raise ClientError(response.status_code, message, body.get("errors"))
        return body.get("data")

    async def register(self, username: str, email: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/users/register",
            json={"username": username, "email": email, "password": password},
        )

    async def login(self, password: str, email: Optional[str] = None, username: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"password": password}
        if email:
            payload["email"] = email
        if username:
            payload["username"] = username
        return await self._request("POST", "/users/login", json=payload)

    async def logout(self) -> None:
        await self._request("POST", "/users/logout")
        self._client.cookies.clear()

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/users/me")

    async def list_transactions(self) -> Dict[str, Any]:
        return await self._request("GET", "/transactions")

    async def add_transaction(self, **fields: Any) -> Dict[str, Any]:
        payload = {k: v for k, v in fields.items() if v is not None}
        return await self._request("POST", "/transactions", json=payload)

    async def delete_transaction(self, transaction_id: str) -> None:
        await self._request("DELETE", f"/transactions/{transaction_id}")
