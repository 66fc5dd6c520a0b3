# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""HTTP client for a GoTrue-compatible admin API (e.g. Supabase Auth).

Endpoints used:
- POST   /auth/v1/admin/users       create a user (email_confirm supported)
- DELETE /auth/v1/admin/users/{id}  delete a user
- GET    /auth/v1/admin/users       list users, paginated

The service role key is sent both as ``apikey`` and as bearer token. It must
never reach a browser.

Example:
    provider = GoTrueIdentityProvider(
        base_url="https://project.supabase.co",
        service_role_key="...",
    )
    user_id = await provider.create_credential("op@example.org", "secret123")
"""

import logging
from typing import Any

import httpx

from lscmis.infrastructure.identity.base import CredentialRecord, IdentityProviderError

logger = logging.getLogger(__name__)

ADMIN_USERS_PATH = "/auth/v1/admin/users"
LIST_PAGE_SIZE = 200


class GoTrueIdentityProvider:
    """Identity provider backed by a remote GoTrue admin API.

    Attributes:
        base_url: Root URL of the auth server.
        _client: Shared async HTTP client.
    """

    def __init__(
        self,
        base_url: str,
        service_role_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root URL of the auth server.
            service_role_key: Admin key for the auth server.
            timeout: Request timeout in seconds.
            transport: Optional transport override (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "apikey": service_role_key,
                "Authorization": f"Bearer {service_role_key}",
                "Content-Type": "application/json",
            },
        )

    async def create_credential(
        self, email: str, password: str, email_confirmed: bool = True
    ) -> str:
        response = await self._request(
            "POST",
            ADMIN_USERS_PATH,
            "Create user",
            json={"email": email, "password": password, "email_confirm": email_confirmed},
        )
        data = self._handle_response(response, "Create user")

        # Older servers wrap the user object
        user = data.get("user", data)
        user_id = user.get("id")
        if not user_id:
            raise IdentityProviderError("Identity provider returned no user id")

        logger.info("Credential created: %s", user_id)
        return str(user_id)

    async def delete_credential(self, user_id: str) -> None:
        response = await self._request(
            "DELETE", f"{ADMIN_USERS_PATH}/{user_id}", "Delete user"
        )
        self._handle_response(response, "Delete user")
        logger.info("Credential deleted: %s", user_id)

    async def list_credentials(self) -> list[CredentialRecord]:
        records: list[CredentialRecord] = []
        page = 1

        while True:
            response = await self._request(
                "GET",
                ADMIN_USERS_PATH,
                "List users",
                params={"page": page, "per_page": LIST_PAGE_SIZE},
            )
            data = self._handle_response(response, "List users")
            users = data.get("users", [])
            records.extend(
                CredentialRecord(id=str(user["id"]), email=user.get("email")) for user in users
            )
            if len(users) < LIST_PAGE_SIZE:
                return records
            page += 1

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(
        self, method: str, path: str, operation: str, **kwargs: Any
    ) -> httpx.Response:
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("Connection error to identity provider during %s: %s", operation, e)
            raise IdentityProviderError(
                f"Identity provider not available: {e.__class__.__name__}", status_code=503
            ) from e

    @staticmethod
    def _handle_response(response: httpx.Response, operation: str) -> dict[str, Any]:
        """Return the JSON body or raise with the provider's own message."""
        if response.status_code < 400:
            if not response.content:
                return {}
            return response.json()

        try:
            body = response.json()
            message = (
                body.get("msg")
                or body.get("message")
                or body.get("error_description")
                or body.get("error")
                or str(body)
            )
        except ValueError:
            message = response.text or f"{operation} failed"

        logger.warning(
            "%s rejected by identity provider: status=%s message=%s",
            operation,
            response.status_code,
            message,
        )
        raise IdentityProviderError(message, status_code=response.status_code)
