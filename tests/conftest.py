from __future__ import annotations

import pytest
from fake_ledger import TEST_EMAIL, TEST_PASSWORD, create_fake_ledger

from invierte_ya_web.api_client import InvierteYaAPIClient
from invierte_ya_web.config import get_settings
from invierte_ya_web.session.manager import SessionManager
from invierte_ya_web.session.store import MemoryTokenStore


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; tests that patch env need a clean slate."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def ledger_app():
    """In-process fake of the remote ledger service."""
    return create_fake_ledger()


@pytest.fixture
def ledger(ledger_app):
    return ledger_app.state.ledger


@pytest.fixture
def registered_user(ledger):
    return ledger.add_user(TEST_EMAIL, TEST_PASSWORD, balance=100_000)


@pytest.fixture
def token_store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
async def api_client(ledger_app, token_store):
    """InvierteYaAPIClient wired to the fake ledger through ASGITransport."""
    from httpx import ASGITransport, AsyncClient

    async with AsyncClient(
        transport=ASGITransport(app=ledger_app), base_url="http://test"
    ) as c:
        yield InvierteYaAPIClient("http://test", token_store=token_store, client=c)


@pytest.fixture
def session(api_client) -> SessionManager:
    return SessionManager(api_client)


@pytest.fixture
async def logged_in(session, registered_user) -> SessionManager:
    await session.login(TEST_EMAIL, TEST_PASSWORD)
    return session
