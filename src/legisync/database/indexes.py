"""
Database Indexes Module

Creates MongoDB indexes for every field the API looks up, filters or
orders on. Run after the initial data load or schema changes.

Usage:
    uv run python scripts/setup_indexes.py
"""
import logging

from legisync.api.schemas import SCHEMAS
from legisync.database.store import MongoStore

logger = logging.getLogger(__name__)


def create_all_indexes(store: MongoStore) -> dict[str, list[str]]:
    """
    Index every unique, search and order key of every entity.
    
    Returns:
        Index names per collection
    """
    created = {}
    for schema in SCHEMAS.values():
        logger.info(f"Creating {schema.collection} indexes...")
        created[schema.collection] = store.ensure_indexes(
            schema.collection,
            schema.indexed_fields,
            unique=schema.unique_keys[:1]
        )
    return created
