"""Credential store: abstract interface plus a GoTrue (Supabase Auth) HTTP adapter."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from whitelist_api.config import Settings

logger = logging.getLogger(__name__)


class CredentialStoreError(Exception):
    """The credential store could not be reached or answered unexpectedly."""


class InvalidCredentialsError(CredentialStoreError):
    """Email/password pair rejected by the credential store."""


def _json(resp: httpx.Response) -> dict:
    try:
        data = resp.json()
    except ValueError as e:
        raise CredentialStoreError(f"non-JSON reply from {resp.request.url.path}") from e
    if not isinstance(data, dict):
        raise CredentialStoreError(f"unexpected reply from {resp.request.url.path}")
    return data


class CredentialStore(ABC):
    """Abstract interface for the external identity provider."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> dict:
        """Return ``{"user": ..., "session": ...}`` or raise InvalidCredentialsError."""
        ...

    @abstractmethod
    async def sign_out(self, token: str | None = None) -> None:
        """Revoke every session of the token's user. No token, nothing to revoke."""
        ...

    @abstractmethod
    async def get_user(self, token: str) -> dict | None:
        """Resolve a bearer token to a user, or None when the token is rejected."""
        ...

    async def aclose(self) -> None:
        pass


class SupabaseCredentialStore(CredentialStore):
    """Talks to the GoTrue REST API exposed by Supabase under ``/auth/v1``."""

    def __init__(self, url: str, anon_key: str, client: httpx.AsyncClient | None = None,
                 timeout: float = 10.0):
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self, token: str | None = None) -> dict:
        headers = {"apikey": self.anon_key, "Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self.client.request(method, f"{self.url}/auth/v1{path}", **kwargs)
        except httpx.HTTPError as e:
            raise CredentialStoreError(f"{method} {path} failed: {e}") from e

    async def sign_in(self, email: str, password: str) -> dict:
        resp = await self._request(
            "POST", "/token",
            params={"grant_type": "password"},
            headers=self._headers(),
            json={"email": email, "password": password},
        )
        if resp.status_code in (400, 401, 403, 422):
            raise InvalidCredentialsError(resp.text)
        if resp.status_code != 200:
            raise CredentialStoreError(f"sign-in returned {resp.status_code}")

        data = _json(resp)
        return {"user": data.get("user"), "session": data}

    async def sign_out(self, token: str | None = None) -> None:
        if not token:
            return
        resp = await self._request(
            "POST", "/logout", params={"scope": "global"}, headers=self._headers(token),
        )
        # Expired or unknown tokens are already signed out
        if resp.status_code in (200, 204, 401, 403, 404):
            return
        raise CredentialStoreError(f"sign-out returned {resp.status_code}")

    async def get_user(self, token: str) -> dict | None:
        resp = await self._request("GET", "/user", headers=self._headers(token))
        if resp.status_code == 200:
            return _json(resp)
        if 400 <= resp.status_code < 500:
            return None
        raise CredentialStoreError(f"user lookup returned {resp.status_code}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()


def build_credential_store(settings: Settings) -> CredentialStore:
    if not settings.supabase_url or not settings.supabase_anon_key:
        logger.warning("SUPABASE_URL/SUPABASE_ANON_KEY not set; login and protected routes will fail")
    return SupabaseCredentialStore(
        settings.supabase_url,
        settings.supabase_anon_key,
        timeout=settings.store_timeout_seconds,
    )
