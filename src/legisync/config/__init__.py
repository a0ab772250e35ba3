"""Config module - settings and constants."""

from legisync.config.settings import settings
from legisync.config.constants import (
    CURRENT_SESSION,
    COLLECTION_LEGISLATORS,
    COLLECTION_BILLS,
    COLLECTION_ROLLS,
    COLLECTION_REPORTS,
)

__all__ = [
    "settings",
    "CURRENT_SESSION",
    "COLLECTION_LEGISLATORS",
    "COLLECTION_BILLS",
    "COLLECTION_ROLLS",
    "COLLECTION_REPORTS",
]
