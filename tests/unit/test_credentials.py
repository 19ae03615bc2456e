import json

import httpx
import pytest

from whitelist_api.services.credentials import (
    CredentialStoreError, InvalidCredentialsError, SupabaseCredentialStore,
)

URL = "https://project.supabase.co"
KEY = "anon-key"


def _store(handler) -> SupabaseCredentialStore:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SupabaseCredentialStore(URL, KEY, client=client)


async def test_sign_in_posts_password_grant():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["grant"] = request.url.params["grant_type"]
        seen["apikey"] = request.headers["apikey"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "access_token": "jwt", "token_type": "bearer",
            "user": {"id": "u1", "email": "a@b.com"},
        })

    data = await _store(handler).sign_in("a@b.com", "pw")
    assert seen == {
        "path": "/auth/v1/token",
        "grant": "password",
        "apikey": KEY,
        "body": {"email": "a@b.com", "password": "pw"},
    }
    assert data["user"]["email"] == "a@b.com"
    assert data["session"]["access_token"] == "jwt"


async def test_sign_in_rejected():
    store = _store(lambda r: httpx.Response(400, json={"error": "invalid_grant"}))
    with pytest.raises(InvalidCredentialsError):
        await store.sign_in("a@b.com", "wrong")


async def test_sign_in_server_error():
    store = _store(lambda r: httpx.Response(503))
    with pytest.raises(CredentialStoreError) as exc_info:
        await store.sign_in("a@b.com", "pw")
    assert not isinstance(exc_info.value, InvalidCredentialsError)


async def test_get_user_sends_bearer_token():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/auth/v1/user"
        assert request.headers["Authorization"] == "Bearer jwt"
        return httpx.Response(200, json={"id": "u1", "email": "a@b.com"})

    user = await _store(handler).get_user("jwt")
    assert user["id"] == "u1"


async def test_get_user_rejected_token_returns_none():
    store = _store(lambda r: httpx.Response(401, json={"msg": "invalid JWT"}))
    assert await store.get_user("bad") is None


async def test_network_failure_is_store_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(CredentialStoreError):
        await _store(handler).get_user("jwt")


async def test_sign_out_without_token_skips_request():
    def handler(request):
        raise AssertionError("no request expected")

    await _store(handler).sign_out(None)


async def test_sign_out_uses_global_scope():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["scope"] = request.url.params["scope"]
        return httpx.Response(204)

    await _store(handler).sign_out("jwt")
    assert seen["scope"] == "global"


async def test_sign_out_server_error():
    store = _store(lambda r: httpx.Response(500))
    with pytest.raises(CredentialStoreError):
        await store.sign_out("jwt")


async def test_non_json_reply_is_store_error():
    store = _store(lambda r: httpx.Response(200, text="<html>gateway</html>"))
    with pytest.raises(CredentialStoreError):
        await store.get_user("jwt")
    with pytest.raises(CredentialStoreError):
        await store.sign_in("a@b.com", "pw")
