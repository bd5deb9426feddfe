"""
Request/result schemas for connecting, initializing and seeding a database.

Field names are snake_case; the camelCase names used in JSON config files
(dbName, clearFirst, indexesCreated, ...) are accepted as aliases.
"""
from typing import Any, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from docker_mongo.config import Settings, get_settings

IndexDirection = Union[int, str]

ModelT = TypeVar("ModelT", bound=BaseModel)


def coerce_config(model: type[ModelT], value: Union[ModelT, Mapping[str, Any]]) -> ModelT:
    """Return value as an instance of model, validating plain mappings."""
    if isinstance(value, model):
        return value
    return model.model_validate(value)


class ConnectionConfig(BaseModel):
    """Where to connect: MongoDB URI and target database name."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uri: str = Field(..., description="MongoDB connection URI")
    db_name: str = Field(..., alias="dbName", min_length=1, description="Database name")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ConnectionConfig":
        """Build a connection config from environment settings."""
        settings = settings or get_settings()
        return cls(uri=settings.mongodb_uri, db_name=settings.mongodb_db_name)


class IndexOptions(BaseModel):
    """
    Options passed to create_index.

    Unknown keys are kept and forwarded to the driver as-is.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    unique: Optional[bool] = Field(None, description="Reject duplicate keys")
    sparse: Optional[bool] = Field(None, description="Skip documents missing the field")
    name: Optional[str] = Field(None, description="Explicit index name")
    expire_after_seconds: Optional[int] = Field(
        None,
        alias="expireAfterSeconds",
        ge=0,
        description="TTL in seconds",
    )

    def to_kwargs(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class IndexSpec(BaseModel):
    """An index declaration: ordered field -> direction mapping plus options."""
    keys: dict[str, IndexDirection] = Field(..., description="Field name to sort direction")
    options: Optional[IndexOptions] = Field(None, description="Index options")

    @field_validator("keys", mode="before")
    @classmethod
    def expand_field_shorthand(cls, value: Any) -> Any:
        # "email" is shorthand for {"email": 1}
        if isinstance(value, str):
            return {value: 1}
        # [["a", 1], ["b", -1]] is the pymongo list-of-pairs form
        if isinstance(value, (list, tuple)):
            if not all(isinstance(pair, (list, tuple)) and len(pair) == 2 for pair in value):
                raise ValueError("index keys list must contain [field, direction] pairs")
            return dict(value)
        return value

    @field_validator("keys")
    @classmethod
    def check_directions(cls, value: dict[str, IndexDirection]) -> dict[str, IndexDirection]:
        if not value:
            raise ValueError("index keys must not be empty")
        for field, direction in value.items():
            if isinstance(direction, int) and direction not in (1, -1):
                raise ValueError(
                    f"invalid direction {direction!r} for field {field!r}"
                )
        return value

    def key_list(self) -> list[tuple[str, IndexDirection]]:
        """Keys in the list-of-pairs form pymongo expects."""
        return list(self.keys.items())

    def option_kwargs(self) -> dict[str, Any]:
        return self.options.to_kwargs() if self.options else {}


class CollectionSpec(BaseModel):
    """A collection to ensure, with the indexes it should carry."""
    name: str = Field(..., min_length=1, description="Collection name")
    indexes: list[IndexSpec] = Field(default_factory=list, description="Indexes to create")


class InitConfig(ConnectionConfig):
    """Connection plus the collections to create."""
    collections: list[CollectionSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_names(self) -> "InitConfig":
        seen: set[str] = set()
        for spec in self.collections:
            if spec.name in seen:
                raise ValueError(f"duplicate collection name: {spec.name}")
            seen.add(spec.name)
        return self


class InitResult(BaseModel):
    """Outcome of a successful initialization pass."""
    model_config = ConfigDict(populate_by_name=True)

    created: list[str] = Field(default_factory=list, description="Collections newly created")
    existing: list[str] = Field(default_factory=list, description="Collections already present")
    indexes_created: int = Field(0, alias="indexesCreated", description="create_index calls issued")


class SeedConfig(ConnectionConfig):
    """Connection plus documents keyed by collection name."""
    data: dict[str, list[dict[str, Any]]] = Field(default_factory=dict)
    clear_first: bool = Field(
        True,
        alias="clearFirst",
        description="Delete existing documents before inserting",
    )


class SeedResult(BaseModel):
    """Outcome of a successful seeding pass."""
    inserted: dict[str, int] = Field(default_factory=dict, description="Documents inserted per collection")
    cleared: list[str] = Field(default_factory=list, description="Collections cleared")
