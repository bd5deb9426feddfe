"""
Database initialization: ensure collections exist and create their indexes.
"""
import logging
from typing import Any, Mapping, Union

from motor.motor_asyncio import AsyncIOMotorDatabase

from docker_mongo.database.connections import with_connection
from docker_mongo.schemas.database import InitConfig, InitResult, coerce_config

logger = logging.getLogger(__name__)


async def init_database(config: Union[InitConfig, Mapping[str, Any]]) -> InitResult:
    """
    Create missing collections and (re)issue every declared index.

    Collections are handled in request order, one call at a time. Indexes
    are created on pre-existing collections too; duplicate identical
    indexes are a no-op on the server. Any driver error aborts the pass
    and propagates, and no partial result is returned.

    Args:
        config: InitConfig or equivalent mapping

    Returns:
        InitResult with created/existing names and the index count

    Example:
        result = await init_database({
            "uri": "mongodb://localhost:27017",
            "dbName": "myapp",
            "collections": [
                {"name": "users", "indexes": [{"keys": {"email": 1}, "options": {"unique": True}}]},
                {"name": "posts"},
            ],
        })
    """
    config = coerce_config(InitConfig, config)

    async def _init(db: AsyncIOMotorDatabase) -> InitResult:
        result = InitResult()

        existing_names = set(await db.list_collection_names())

        for spec in config.collections:
            if spec.name in existing_names:
                result.existing.append(spec.name)
            else:
                await db.create_collection(spec.name)
                logger.debug(f"Created collection '{spec.name}'")
                result.created.append(spec.name)

            collection = db[spec.name]
            for index in spec.indexes:
                await collection.create_index(index.key_list(), **index.option_kwargs())
                logger.debug(f"Created index {index.keys} on '{spec.name}'")
                result.indexes_created += 1

        return result

    return await with_connection(config, _init)


async def init_database_with_logging(
    config: Union[InitConfig, Mapping[str, Any]],
) -> InitResult:
    """Initialize the database, printing progress lines to stdout."""
    config = coerce_config(InitConfig, config)

    print("Connecting to MongoDB...")

    result = await init_database(config)

    print(f"✓ Connected to database: {config.db_name}")

    if result.existing:
        print(f"  Existing collections: {', '.join(result.existing)}")

    if result.created:
        print(f"  Created collections: {', '.join(result.created)}")

    if result.indexes_created > 0:
        print(f"  Created {result.indexes_created} index(es)")

    print("✓ Database initialization complete")

    return result
