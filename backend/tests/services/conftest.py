"""Service test fixtures - fresh in-process store + FastAPI test client.

Invariants:
    - get_store dependency overridden to a per-test DocumentStore
    - Route-level BoardService uses the deterministic clock fixture, so
      bump order follows request order
    - Module-level store singleton restored after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

import messageboard.infrastructure.document_store as store_module
from messageboard.api.dependencies import get_board_service
from messageboard.config import get_settings
from messageboard.infrastructure.document_store import get_store
from messageboard.main import app
from messageboard.services.board_service import BoardService


@pytest.fixture
def service(threads, clock):
    return BoardService(threads, page_size=10, preview_size=3, clock=clock)


@pytest.fixture
async def client(store, clock):
    """FastAPI test client with store and service dependencies overridden."""
    settings = get_settings()

    def override_get_store():
        return store

    def override_get_board_service():
        return BoardService(
            store.collection(settings.threads_collection),
            page_size=settings.threads_page_size,
            preview_size=settings.reply_preview_size,
            clock=clock,
        )

    app.dependency_overrides[get_store] = override_get_store
    app.dependency_overrides[get_board_service] = override_get_board_service

    previous_store = store_module.store
    store_module.store = store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    store_module.store = previous_store
