"""
Pydantic schemas for configs and results.
"""
from docker_mongo.schemas.database import (
    CollectionSpec,
    ConnectionConfig,
    IndexOptions,
    IndexSpec,
    InitConfig,
    InitResult,
    SeedConfig,
    SeedResult,
    coerce_config,
)

__all__ = [
    "CollectionSpec",
    "ConnectionConfig",
    "IndexOptions",
    "IndexSpec",
    "InitConfig",
    "InitResult",
    "SeedConfig",
    "SeedResult",
    "coerce_config",
]
