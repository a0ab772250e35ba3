"""
Legislator lookups for a single ingestion run.

The XML feeds refer to legislators by GovTrack ID; bills and rolls store
a snapshot of the legislator instead, keyed on the bioguide ID.
"""
import logging
from typing import Iterable, Optional

from legisync.config.constants import COLLECTION_LEGISLATORS, LEGISLATOR_SNAPSHOT_FIELDS
from legisync.database.store import MongoStore

logger = logging.getLogger(__name__)


class LegislatorIndex:
    """
    GovTrack ID -> legislator snapshot, built once per run.
    
    Misses are remembered (with the file that referenced them) so the
    run can report them; they never stop a record from being saved.
    """
    
    def __init__(self, legislators: Iterable[dict]):
        self.legislators: dict[str, dict] = {}
        for legislator in legislators:
            govtrack_id = legislator.get("govtrack_id")
            if govtrack_id is None:
                continue
            self.legislators[str(govtrack_id)] = {
                key: legislator[key] for key in LEGISLATOR_SNAPSHOT_FIELDS if key in legislator
            }
        self.missing_ids: list[dict] = []
    
    @classmethod
    def from_store(cls, store: MongoStore) -> "LegislatorIndex":
        index = cls(store.find(COLLECTION_LEGISLATORS, fields=LEGISLATOR_SNAPSHOT_FIELDS))
        logger.info(f"Indexed {len(index)} legislators by GovTrack ID")
        return index
    
    def __len__(self) -> int:
        return len(self.legislators)
    
    def resolve(self, govtrack_id: Optional[str], filename: Optional[str] = None) -> Optional[dict]:
        """
        Snapshot for a GovTrack ID, or None (recorded as missing).
        
        A blank or absent ID is never found, and is recorded with
        ``govtrack_id`` None.
        """
        key = str(govtrack_id) if govtrack_id not in (None, "") else None
        legislator = self.legislators.get(key) if key else None
        if legislator is not None:
            return dict(legislator)
        
        missing = {"govtrack_id": key, "filename": filename}
        if missing not in self.missing_ids:
            self.missing_ids.append(missing)
        return None
