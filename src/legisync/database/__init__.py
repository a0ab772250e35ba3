"""Database module - connection management and the document store."""

from legisync.database.connection import (
    get_client,
    get_database,
    close_client,
    test_connection,
)
from legisync.database.store import MongoStore
from legisync.database.indexes import create_all_indexes

__all__ = [
    "get_client",
    "get_database",
    "close_client",
    "test_connection",
    "MongoStore",
    "create_all_indexes",
]
