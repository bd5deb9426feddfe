"""
MongoDB connection lifecycle.

Scoped helpers (open_database, with_connection) own one client per call and
close it on every exit path. create_connection hands an open client to the
caller, who must close it.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Mapping, NamedTuple, TypeVar, Union

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from docker_mongo.schemas.database import ConnectionConfig, coerce_config

logger = logging.getLogger(__name__)

T = TypeVar("T")

ConfigLike = Union[ConnectionConfig, Mapping[str, Any]]


class MongoConnection(NamedTuple):
    """An open client and its target database. Close via client.close()."""
    client: AsyncIOMotorClient
    db: AsyncIOMotorDatabase


def _close_after_failure(client: AsyncIOMotorClient) -> None:
    # The in-flight exception wins over a close error.
    try:
        client.close()
    except Exception:
        logger.warning("Error closing MongoDB client after failure", exc_info=True)


@asynccontextmanager
async def open_database(config: ConfigLike) -> AsyncIterator[AsyncIOMotorDatabase]:
    """
    Connect, yield the target database, and close the client on exit.

    Connection errors propagate unchanged. If the body raises, a failing
    close is logged and the body's exception propagates; if the body
    succeeds, a failing close propagates.

    Usage:
        async with open_database({"uri": uri, "dbName": "mydb"}) as db:
            await db.users.find_one()
    """
    config = coerce_config(ConnectionConfig, config)
    client = AsyncIOMotorClient(config.uri)
    try:
        await client.admin.command("ping")
        logger.debug(f"Connected to MongoDB, using database '{config.db_name}'")
        yield client[config.db_name]
    except BaseException:
        _close_after_failure(client)
        raise
    client.close()
    logger.debug("MongoDB client closed")


async def with_connection(
    config: ConfigLike,
    fn: Callable[[AsyncIOMotorDatabase], Awaitable[T]],
) -> T:
    """
    Run fn against a freshly connected database and return its result.

    Args:
        config: ConnectionConfig or mapping with uri and dbName
        fn: Coroutine function receiving the database handle

    Returns:
        Whatever fn returns
    """
    async with open_database(config) as db:
        return await fn(db)


async def create_connection(config: ConfigLike) -> MongoConnection:
    """
    Connect and return the open client with its database.

    Nothing closes the client automatically.
    """
    config = coerce_config(ConnectionConfig, config)
    client = AsyncIOMotorClient(config.uri)
    try:
        await client.admin.command("ping")
    except BaseException:
        _close_after_failure(client)
        raise
    logger.debug(f"Opened MongoDB connection for database '{config.db_name}'")
    return MongoConnection(client=client, db=client[config.db_name])
