"""
MongoDB connection management.

One synchronous pymongo client per process, shared by the ingestion
scripts and the API (pymongo clients are thread-safe).
"""

from pymongo import MongoClient
from pymongo.database import Database

from legisync.config.settings import settings


_client: MongoClient | None = None


def get_client() -> MongoClient:
    """Get or create the MongoDB client."""
    global _client
    if _client is None:
        _client = MongoClient(
            settings.MONGODB_URI,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
            socketTimeoutMS=settings.MONGODB_TIMEOUT_MS,
        )
    return _client


def get_database() -> Database:
    """Get the configured database instance."""
    client = get_client()
    return client[settings.MONGODB_DATABASE]


def close_client() -> None:
    """Close the client connection."""
    global _client
    if _client is not None:
        _client.close()
        _client = None


def test_connection() -> bool:
    """
    Test that we can connect to MongoDB.
    
    Returns:
        True if connection successful, raises exception otherwise.
    """
    client = get_client()
    # The ping command is lightweight and confirms connectivity
    result = client.admin.command("ping")
    return result.get("ok") == 1.0
