"""
Database module - MongoDB connection management.
"""
from docker_mongo.database.connections import (
    MongoConnection,
    create_connection,
    open_database,
    with_connection,
)

__all__ = [
    "MongoConnection",
    "create_connection",
    "open_database",
    "with_connection",
]
