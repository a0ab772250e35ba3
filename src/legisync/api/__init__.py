"""API module - read-only JSON queries."""

from legisync.api.schemas import BILL, LEGISLATOR, ROLL, SCHEMAS, EntitySchema
from legisync.api.service import QueryService

__all__ = [
    "BILL",
    "LEGISLATOR",
    "ROLL",
    "SCHEMAS",
    "EntitySchema",
    "QueryService",
]
