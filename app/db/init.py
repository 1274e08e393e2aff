from contextlib import asynccontextmanager
from typing import AsyncIterator

import certifi
from beanie import init_beanie
from pymongo import AsyncMongoClient

from app.core.config import get_settings
from app.core.logging import get_logger
from app.models.user import User

DOCUMENT_MODELS = [
    User,
]

log = get_logger(__name__)


def _use_tls(uri: str) -> bool:
    """True if URI uses TLS (Atlas or explicit tls=true). Avoids TLS for plain mongodb:// in CI."""
    return "mongodb+srv://" in uri or "tls=true" in uri.lower()


async def init_db() -> AsyncMongoClient:
    """Connect, verify the server answers, and bind the document models. Returns the open client."""
    settings = get_settings()
    # Atlas in Docker: tlsCAFile + tlsDisableOCSPEndpointCheck avoid TLSV1_ALERT_INTERNAL_ERROR
    kwargs = {}
    if _use_tls(settings.mongodb_uri):
        kwargs["tlsCAFile"] = certifi.where()
        kwargs["tlsDisableOCSPEndpointCheck"] = True
    client = AsyncMongoClient(settings.mongodb_uri, **kwargs)
    try:
        # the client connects lazily; ping so an unreachable server fails here
        await client.admin.command("ping")
        database = client.get_default_database(default=settings.mongodb_db_name)
        await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    except Exception:
        await client.close()
        raise
    return client


async def close_db(client: AsyncMongoClient) -> None:
    await client.close()


@asynccontextmanager
async def database_session() -> AsyncIterator[AsyncMongoClient]:
    """One connection per run, released on every exit path."""
    client = await init_db()
    log.info("db_connected")
    try:
        yield client
    finally:
        await close_db(client)
        log.info("db_closed")
