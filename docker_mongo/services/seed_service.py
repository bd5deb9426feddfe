"""
Database seeding: optionally clear collections, then bulk-insert documents.

Clearing and inserting are not transactional. A failure part-way through
leaves earlier collections seeded and the current one possibly cleared.
"""
import logging
from typing import Any, Mapping, Union

from motor.motor_asyncio import AsyncIOMotorDatabase

from docker_mongo.database.connections import with_connection
from docker_mongo.schemas.database import SeedConfig, SeedResult, coerce_config

logger = logging.getLogger(__name__)


async def seed_database(config: Union[SeedConfig, Mapping[str, Any]]) -> SeedResult:
    """
    Seed collections with documents, in the order given by config.data.

    With clear_first (the default) every listed collection is emptied
    first, even when it has no documents to insert. Collections with no
    documents record an inserted count of 0 without an insert call.

    Args:
        config: SeedConfig or equivalent mapping

    Returns:
        SeedResult with per-collection insert counts and cleared names
    """
    config = coerce_config(SeedConfig, config)

    async def _seed(db: AsyncIOMotorDatabase) -> SeedResult:
        result = SeedResult()

        for collection_name, documents in config.data.items():
            collection = db[collection_name]

            if config.clear_first:
                delete_result = await collection.delete_many({})
                logger.debug(
                    f"Cleared '{collection_name}' ({delete_result.deleted_count} removed)"
                )
                result.cleared.append(collection_name)

            if documents:
                # Copy so the driver's generated _id does not leak into the caller's dicts
                insert_result = await collection.insert_many([dict(doc) for doc in documents])
                result.inserted[collection_name] = len(insert_result.inserted_ids)
            else:
                result.inserted[collection_name] = 0

        return result

    return await with_connection(config, _seed)


async def seed_database_with_logging(
    config: Union[SeedConfig, Mapping[str, Any]],
) -> SeedResult:
    """Seed the database, printing progress lines to stdout."""
    config = coerce_config(SeedConfig, config)

    print("Connecting to MongoDB...")

    result = await seed_database(config)

    print(f"✓ Connected to database: {config.db_name}")

    if result.cleared:
        print(f"  Cleared collections: {', '.join(result.cleared)}")

    for collection_name, count in result.inserted.items():
        print(f"  Inserted {count} document(s) into {collection_name}")

    print("✓ Database seeding complete")

    return result
