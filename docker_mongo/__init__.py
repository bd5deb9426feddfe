"""
docker-mongo - MongoDB connection, initialization and seeding helpers.

Example:
    from docker_mongo import init_database, seed_database, with_connection

    await init_database({
        "uri": "mongodb://localhost:27017",
        "dbName": "myapp",
        "collections": [
            {"name": "users", "indexes": [{"keys": {"email": 1}, "options": {"unique": True}}]},
            {"name": "posts"},
        ],
    })

    await seed_database({
        "uri": "mongodb://localhost:27017",
        "dbName": "myapp",
        "data": {"users": [{"name": "Alice", "email": "alice@example.com"}]},
    })

    async def list_users(db):
        return await db.users.find().to_list(length=None)

    users = await with_connection({"uri": uri, "dbName": "myapp"}, list_users)
"""
from docker_mongo.config import Settings, get_settings
from docker_mongo.database.connections import (
    MongoConnection,
    create_connection,
    open_database,
    with_connection,
)
from docker_mongo.schemas.database import (
    CollectionSpec,
    ConnectionConfig,
    IndexOptions,
    IndexSpec,
    InitConfig,
    InitResult,
    SeedConfig,
    SeedResult,
)
from docker_mongo.services.init_service import init_database, init_database_with_logging
from docker_mongo.services.seed_service import seed_database, seed_database_with_logging

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "MongoConnection",
    "create_connection",
    "open_database",
    "with_connection",
    "CollectionSpec",
    "ConnectionConfig",
    "IndexOptions",
    "IndexSpec",
    "InitConfig",
    "InitResult",
    "SeedConfig",
    "SeedResult",
    "init_database",
    "init_database_with_logging",
    "seed_database",
    "seed_database_with_logging",
]
