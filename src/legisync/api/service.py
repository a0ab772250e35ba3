"""
Read-only queries behind the JSON API.

The parsing helpers turn raw query-string values into typed conditions,
orderings, pages and projections; QueryService runs them against the
store. Nothing here writes.
"""
from typing import Mapping, Optional

from legisync.api.schemas import EntitySchema
from legisync.config.constants import DEFAULT_PER_PAGE, MAX_PAGE, MAX_PER_PAGE
from legisync.database.store import MongoStore


def _parse_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_filter(value: str, value_type: type):
    """Typed value for a filter, or None if the value doesn't fit the type."""
    if value_type is bool:
        return {"true": True, "false": False}.get(value)
    if value_type is int:
        return _parse_int(value)
    return value


def fields_for(schema: EntitySchema, sections: Optional[str]) -> list[str]:
    """
    Fields to return for a comma-separated ``sections`` value.
    
    "basic" expands to the entity's basic fields. Only the root of a
    dotted field is used, so "sponsor.state" returns the whole sponsor.
    An empty list means every field.
    """
    requested = [section.strip() for section in (sections or "").split(",") if section.strip()]
    if "basic" in requested:
        requested.remove("basic")
        requested += list(schema.basic_fields)
    return list(dict.fromkeys(field.split(".")[0] for field in requested))


def conditions_for(schema: EntitySchema, params: Mapping[str, str]) -> dict:
    """Unique-key conditions present in the params."""
    return {key: params[key] for key in schema.unique_keys if params.get(key)}


def search_conditions_for(schema: EntitySchema, params: Mapping[str, str]) -> dict:
    """Filter conditions; values that don't parse as their declared type are dropped."""
    conditions = {}
    for key, value_type in schema.search_keys.items():
        if params.get(key) is None:
            continue
        value = _parse_filter(params[key], value_type)
        if value is not None:
            conditions[key] = value
    return conditions


def order_for(schema: EntitySchema, params: Mapping[str, str]) -> list[tuple[str, str]]:
    """Requested ordering (default: first order key, descending), then the unique key."""
    order_key = params.get("order")
    if order_key not in schema.order_keys:
        order_key = schema.order_keys[0]
    
    direction = (params.get("sort") or "").lower()
    if direction not in ("asc", "desc"):
        direction = "desc"
    
    order = [(order_key, direction)]
    if schema.unique_keys[0] != order_key:
        order.append((schema.unique_keys[0], "desc"))
    return order


def pagination_for(params: Mapping[str, str]) -> dict:
    """limit/offset from page and per_page, reined in to sane bounds."""
    per_page = _parse_int(params.get("per_page")) or DEFAULT_PER_PAGE
    if per_page <= 0:
        per_page = DEFAULT_PER_PAGE
    if per_page > MAX_PER_PAGE:
        per_page = MAX_PER_PAGE
    
    page = _parse_int(params.get("page")) or 1
    if page <= 0 or page > MAX_PAGE:
        page = 1
    
    return {"limit": per_page, "offset": (page - 1) * per_page}


class QueryService:
    """
    Lookups and searches over bills, rolls and legislators.
    
    Usage:
        service = QueryService(MongoStore(get_database()))
        bill = service.find_unique(BILL, {"bill_id": "hr1-111"})
    """
    
    def __init__(self, store: MongoStore):
        self.store = store
    
    def find_unique(
        self,
        schema: EntitySchema,
        key_values: dict,
        fields: Optional[list[str]] = None
    ) -> Optional[dict]:
        """One record by unique key(s), or None. No keys means no match."""
        if not key_values:
            return None
        return self.store.find_one(schema.collection, key_values, fields)
    
    def search(
        self,
        schema: EntitySchema,
        filters: dict,
        order: list[tuple[str, str]],
        limit: int = DEFAULT_PER_PAGE,
        offset: int = 0,
        fields: Optional[list[str]] = None
    ) -> list[dict]:
        return self.store.find(
            schema.collection,
            conditions=filters,
            fields=fields,
            order=order,
            limit=limit,
            offset=offset
        )
