"""Shared fixtures: in-memory record store and an in-process credential store."""

from __future__ import annotations

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from whitelist_api.config import Settings
from whitelist_api.db.engine import build_engine, build_session_factory, create_tables
from whitelist_api.main import create_app
from whitelist_api.services.credentials import (
    CredentialStore, CredentialStoreError, InvalidCredentialsError,
)

VALID_TOKEN = "valid-token"
ADMIN = {"id": "user-1", "email": "admin@example.com", "role": "authenticated"}


class FakeCredentialStore(CredentialStore):
    """Accepts one account and one bearer token; ``fail`` simulates an outage."""

    def __init__(self):
        self.accounts = {ADMIN["email"]: "s3nha-forte"}
        self.tokens = {VALID_TOKEN: ADMIN}
        self.signed_out: list[str | None] = []
        self.fail = False

    async def sign_in(self, email: str, password: str) -> dict:
        if self.fail:
            raise CredentialStoreError("auth service down")
        if self.accounts.get(email) != password:
            raise InvalidCredentialsError("invalid_grant")
        return {
            "user": ADMIN,
            "session": {"access_token": VALID_TOKEN, "token_type": "bearer", "user": ADMIN},
        }

    async def sign_out(self, token: str | None = None) -> None:
        if self.fail:
            raise CredentialStoreError("auth service down")
        self.signed_out.append(token)
        self.tokens.pop(token, None)

    async def get_user(self, token: str) -> dict | None:
        if self.fail:
            raise CredentialStoreError("auth service down")
        return self.tokens.get(token)


def make_settings(**overrides) -> Settings:
    values = {"database_url": "sqlite+aiosqlite:///:memory:", "log_level": "WARNING"}
    values.update(overrides)
    return Settings(**values)


@pytest_asyncio.fixture
async def engine():
    eng = build_engine(make_settings())
    await create_tables(eng)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine):
    async with build_session_factory(engine)() as session:
        yield session


@pytest_asyncio.fixture
async def credential_store():
    return FakeCredentialStore()


def build_client(engine, credential_store, **settings) -> AsyncClient:
    app = create_app(
        make_settings(**settings),
        session_factory=build_session_factory(engine),
        credential_store=credential_store,
    )
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def client(engine, credential_store):
    async with build_client(engine, credential_store) as ac:
        yield ac


@pytest_asyncio.fixture
async def auth_headers():
    return {"Authorization": f"Bearer {VALID_TOKEN}"}


@pytest_asyncio.fixture
async def client_factory(engine, credential_store):
    """Build a client for an app with non-default settings."""
    def _factory(**settings) -> AsyncClient:
        return build_client(engine, credential_store, **settings)
    return _factory


@pytest_asyncio.fixture
async def client_for_sessions(credential_store):
    """Build a client whose record-store sessions come from ``session_factory``."""
    def _factory(session_factory, **settings) -> AsyncClient:
        app = create_app(
            make_settings(**settings),
            session_factory=session_factory,
            credential_store=credential_store,
        )
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    return _factory
