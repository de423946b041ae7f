"""Service test fixtures — fresh conversation store + FastAPI test client.

Invariants:
    - Every test gets an empty InMemoryConversationStore
    - get_conversation_store dependency overridden to return that store

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises middleware and error handlers
      without a running server
"""

import pytest
from httpx import ASGITransport, AsyncClient

from kbchat.infrastructure.conversation_store import (
    InMemoryConversationStore, get_conversation_store,
)
from kbchat.main import app


@pytest.fixture
def store():
    return InMemoryConversationStore(max_conversations=100)


@pytest.fixture
async def client(store):
    """FastAPI test client with the conversation store overridden."""
    app.dependency_overrides[get_conversation_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
