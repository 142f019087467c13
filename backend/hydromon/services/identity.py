"""Admin client for the managed backend's identity service (GoTrue-style API)."""
from typing import Any, Optional

import httpx

from hydromon.errors import IdentityServiceError


class IdentityClient:
    def __init__(
        self,
        base_url: str,
        service_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base = f"{base_url.rstrip('/')}/auth/v1/admin/users"
        self._headers = {
            "apikey": service_key,
            "Authorization": f"Bearer {service_key}",
        }
        self._timeout = timeout
        self._transport = transport

    async def _request(self, method: str, url: str, payload: Optional[dict[str, Any]] = None) -> dict:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, headers=self._headers, transport=self._transport
            ) as client:
                resp = await client.request(method, url, json=payload)
        except httpx.HTTPError as exc:
            raise IdentityServiceError("Identity service unreachable", details=str(exc)) from exc

        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            message = body.get("msg") or body.get("message") or body.get("error_description") or "Identity service error"
            raise IdentityServiceError(message, status_code=resp.status_code, details=resp.text)
        if not resp.content:
            return {}
        return resp.json()

    async def create_user(self, email: str, password: str) -> dict:
        return await self._request(
            "POST", self._base, {"email": email, "password": password, "email_confirm": True}
        )

    async def update_user(self, user_id: str, email: str, password: Optional[str] = None) -> dict:
        payload: dict[str, Any] = {"email": email}
        if password:
            payload["password"] = password
        return await self._request("PUT", f"{self._base}/{user_id}", payload)

    async def delete_user(self, user_id: str) -> None:
        await self._request("DELETE", f"{self._base}/{user_id}")
