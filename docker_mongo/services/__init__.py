"""
Services module - database initialization and seeding.
"""
from docker_mongo.services.init_service import init_database, init_database_with_logging
from docker_mongo.services.seed_service import seed_database, seed_database_with_logging

__all__ = [
    "init_database",
    "init_database_with_logging",
    "seed_database",
    "seed_database_with_logging",
]
