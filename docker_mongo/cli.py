"""
Command line entry point for initializing and seeding a database.

Usage:
    docker-mongo init collections.json
    docker-mongo --db myapp seed data.json --no-clear

Environment Variables:
    MONGODB_URI: MongoDB connection string (default: mongodb://localhost:27017)
    MONGODB_DB_NAME: Database name (default: app)
    LOG_LEVEL: Logging level (default: INFO)
"""
import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError
from pymongo.errors import PyMongoError

from docker_mongo.config import get_settings
from docker_mongo.schemas.database import ConnectionConfig
from docker_mongo.services.init_service import init_database_with_logging
from docker_mongo.services.seed_service import seed_database_with_logging

logger = logging.getLogger("docker_mongo.cli")


def _load_json(path: str) -> dict[str, Any]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"{path}: expected a JSON object at the top level")
    return payload


def _apply_connection(payload: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    """Fill uri/dbName from flags, then the file, then settings."""
    defaults = ConnectionConfig.from_settings()
    payload = dict(payload)
    if args.uri:
        payload["uri"] = args.uri
    if args.db:
        payload["dbName"] = args.db
    payload.setdefault("uri", defaults.uri)
    if "dbName" not in payload and "db_name" not in payload:
        payload["dbName"] = defaults.db_name
    return payload


def init_cmd(args: argparse.Namespace) -> int:
    payload = _apply_connection(_load_json(args.file), args)
    asyncio.run(init_database_with_logging(payload))
    return 0


def seed_cmd(args: argparse.Namespace) -> int:
    payload = _apply_connection(_load_json(args.file), args)
    if args.no_clear:
        payload["clearFirst"] = False
    asyncio.run(seed_database_with_logging(payload))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docker-mongo",
        description="Initialize and seed a MongoDB database from JSON files",
    )
    parser.add_argument("--uri", help="MongoDB connection URI (overrides MONGODB_URI)")
    parser.add_argument("--db", help="Database name (overrides MONGODB_DB_NAME)")

    sub = parser.add_subparsers(dest="command", required=True)

    init_p = sub.add_parser("init", help="Create collections and indexes")
    init_p.add_argument("file", help='JSON file with {"collections": [...]}')
    init_p.set_defaults(func=init_cmd)

    seed_p = sub.add_parser("seed", help="Insert documents into collections")
    seed_p.add_argument("file", help='JSON file with {"data": {collection: [documents]}}')
    seed_p.add_argument(
        "--no-clear",
        action="store_true",
        help="Keep existing documents instead of clearing each collection first",
    )
    seed_p.set_defaults(func=seed_cmd)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    args = build_parser().parse_args(argv)

    try:
        return args.func(args)
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except PyMongoError as e:
        logger.error(f"MongoDB error: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Could not read {args.file}: {e}")
        return 1
