"""
What the query API knows about each entity.

Every lookup, filter, ordering and projection the API performs is
declared here rather than worked out from the stored documents.
"""
from dataclasses import dataclass

from legisync.config.constants import (
    COLLECTION_BILLS,
    COLLECTION_LEGISLATORS,
    COLLECTION_ROLLS,
    LEGISLATOR_SNAPSHOT_FIELDS,
)
from legisync.models.bill import Bill
from legisync.models.roll import Roll


@dataclass(frozen=True)
class EntitySchema:
    name: str  # response key for one record
    plural: str  # response key for a list
    collection: str
    unique_keys: tuple[str, ...]  # any one of these finds a single record
    search_keys: dict[str, type]  # filterable fields and how to parse them
    order_keys: tuple[str, ...]  # the first one is the default
    basic_fields: tuple[str, ...]  # what "sections=basic" expands to
    
    @property
    def indexed_fields(self) -> list[str]:
        fields = list(self.unique_keys) + list(self.search_keys) + list(self.order_keys)
        return list(dict.fromkeys(fields))


LEGISLATOR = EntitySchema(
    name="legislator",
    plural="legislators",
    collection=COLLECTION_LEGISLATORS,
    unique_keys=("bioguide_id", "govtrack_id"),
    search_keys={"state": str, "party": str, "district": str, "title": str, "in_office": bool},
    order_keys=("last_name",),
    basic_fields=tuple(LEGISLATOR_SNAPSHOT_FIELDS) + ("in_office",),
)

BILL = EntitySchema(
    name="bill",
    plural="bills",
    collection=COLLECTION_BILLS,
    unique_keys=("bill_id",),
    search_keys={
        "sponsor_id": str,
        "cosponsor_ids": str,
        "chamber": str,
        "session": int,
        "type": str,
        "passed": bool,
        "vetoed": bool,
        "enacted": bool,
        "awaiting_signature": bool,
    },
    order_keys=("introduced_at", "last_action_at", "last_vote_at", "enacted_at"),
    basic_fields=tuple(Bill.basic_fields),
)

ROLL = EntitySchema(
    name="roll",
    plural="rolls",
    collection=COLLECTION_ROLLS,
    unique_keys=("roll_id",),
    search_keys={"bill_id": str, "chamber": str, "session": int, "type": str, "result": str},
    order_keys=("voted_at",),
    basic_fields=tuple(Roll.basic_fields),
)

SCHEMAS = {schema.name: schema for schema in (LEGISLATOR, BILL, ROLL)}
