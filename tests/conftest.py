import os
from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

# Never touch a real database from tests
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/credit_reset_test")
os.environ["CRON_SECRET_TOKEN"] = "test-cron-secret-token"
os.environ["ENV"] = "test"

CRON_TOKEN = os.environ["CRON_SECRET_TOKEN"]


def user_document(**fields: Any) -> dict[str, Any]:
    """A users-collection document as MongoDB returns it (camelCase keys, _id)."""
    doc = {
        "_id": ObjectId(),
        "email": "someone@example.com",
        "name": "Someone",
        "dailyLimit": 10,
        "creditsUsedToday": 0,
        "creditHistory": {},
    }
    doc.update(fields)
    return doc


@pytest.fixture
def user_writes(monkeypatch) -> dict[str, dict[str, Any]]:
    """Replace User.set: record each $set payload by user id instead of writing to MongoDB."""
    from app.models.user import User

    writes: dict[str, dict[str, Any]] = {}

    async def record_set(self, expression, **kwargs):
        writes[str(self.id)] = expression
        return self

    monkeypatch.setattr(User, "set", record_set)
    return writes


@pytest.fixture(autouse=True)
def _fresh_settings():
    from app.core.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    from app.main import app
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
