"""
Document store used by ingestion and the query API.

Wraps a pymongo Database with the handful of operations the rest of
the package needs: replace-by-natural-key upserts, projected lookups,
index declarations and a run lock.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from legisync.config.constants import COLLECTION_LOCKS

logger = logging.getLogger(__name__)

SORT_DIRECTIONS = {
    "asc": ASCENDING,
    "desc": DESCENDING,
}


def projection_for(fields: Optional[Iterable[str]]) -> dict:
    """Build a Mongo projection that never returns the internal _id."""
    projection = {"_id": 0}
    for field in fields or []:
        projection[field] = 1
    return projection


class MongoStore:
    """
    Thin wrapper around a MongoDB database.
    
    Usage:
        store = MongoStore(get_database())
        store.upsert("bills", "bill_id", bill.to_document())
    """
    
    def __init__(self, db: Database):
        self.db = db
    
    def upsert(self, collection: str, key_field: str, document: dict) -> bool:
        """
        Insert or fully replace the document with the same natural key.
        
        Replacing (rather than $set) drops fields that a previous version
        had but this one doesn't, e.g. a timeline event that vanished.
        
        Returns:
            True if new insert, False if update
        """
        result = self.db[collection].replace_one(
            {key_field: document[key_field]},
            document,
            upsert=True
        )
        return result.upserted_id is not None
    
    def insert(self, collection: str, document: dict) -> None:
        """Append a document (used for reports)."""
        self.db[collection].insert_one(document)
    
    def find_one(
        self,
        collection: str,
        conditions: dict,
        fields: Optional[Iterable[str]] = None
    ) -> Optional[dict]:
        """Find a single document, projected to the given fields."""
        return self.db[collection].find_one(conditions, projection_for(fields))
    
    def find(
        self,
        collection: str,
        conditions: Optional[dict] = None,
        fields: Optional[Iterable[str]] = None,
        order: Optional[list[tuple[str, str]]] = None,
        limit: int = 0,
        offset: int = 0
    ) -> list[dict]:
        """
        Find documents.
        
        Args:
            collection: Collection name
            conditions: Equality conditions
            fields: Fields to return (None = all)
            order: List of (field, "asc" | "desc") pairs
            limit: Max documents (0 = no limit)
            offset: Documents to skip
        """
        cursor = self.db[collection].find(conditions or {}, projection_for(fields))
        if order:
            cursor = cursor.sort([(field, SORT_DIRECTIONS[direction]) for field, direction in order])
        if offset:
            cursor = cursor.skip(offset)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)
    
    def ensure_indexes(self, collection: str, fields: Iterable[str], unique: Iterable[str] = ()) -> list[str]:
        """Create single-field ascending indexes, unique where asked."""
        unique = set(unique)
        names = []
        for field in fields:
            name = self.db[collection].create_index(
                [(field, ASCENDING)],
                unique=field in unique,
                name=f"idx_{field}"
            )
            names.append(name)
        logger.info(f"Ensured {len(names)} indexes on {collection}")
        return names
    
    def acquire_lock(self, name: str, stale_after: Optional[timedelta] = None) -> bool:
        """
        Take a named lock. Returns False if someone else holds it.
        
        A lock older than ``stale_after`` is taken over: its holder is
        assumed dead (killed before it could release).
        """
        now = datetime.utcnow()
        lock = {"_id": name, "acquired_at": now}
        try:
            self.db[COLLECTION_LOCKS].insert_one(lock)
            return True
        except DuplicateKeyError:
            if stale_after is None:
                return False
        
        stale = self.db[COLLECTION_LOCKS].find_one_and_replace(
            {"_id": name, "acquired_at": {"$lt": now - stale_after}},
            lock
        )
        if stale is None:
            return False
        logger.warning(f"Took over stale lock {name} (acquired {stale['acquired_at']})")
        return True
    
    def release_lock(self, name: str) -> None:
        self.db[COLLECTION_LOCKS].delete_one({"_id": name})
