"""Legislator lookups by GovTrack ID."""
from legisync.ingestion.legislators import LegislatorIndex


def test_index_from_store(store):
    legislators = LegislatorIndex.from_store(store)
    
    assert len(legislators) == 5
    alice = legislators.resolve("400001")
    assert alice["bioguide_id"] == "A000001"
    assert "phone" not in alice
    assert "in_office" not in alice
    assert "_id" not in alice


def test_numeric_ids_are_matched_as_strings(store):
    legislators = LegislatorIndex.from_store(store)
    
    assert legislators.resolve("400005")["last_name"] == "Evans"
    assert legislators.resolve(400001)["last_name"] == "Adams"


def test_resolve_returns_a_copy():
    legislators = LegislatorIndex([{"govtrack_id": "1", "bioguide_id": "X000001"}])
    
    legislators.resolve("1")["bioguide_id"] = "changed"
    assert legislators.resolve("1")["bioguide_id"] == "X000001"


def test_misses_are_recorded_once_per_file():
    legislators = LegislatorIndex([{"bioguide_id": "X000001"}])
    
    assert len(legislators) == 0
    assert legislators.resolve("9", "hr1.xml") is None
    assert legislators.resolve("9", "hr1.xml") is None
    assert legislators.resolve("9", "hr2.xml") is None
    
    assert legislators.missing_ids == [
        {"govtrack_id": "9", "filename": "hr1.xml"},
        {"govtrack_id": "9", "filename": "hr2.xml"},
    ]


def test_absent_id_is_never_found():
    legislators = LegislatorIndex([{"govtrack_id": "", "bioguide_id": "X000001"}])
    
    assert legislators.resolve(None, "s2009-3.xml") is None
    assert legislators.resolve("", "s2009-3.xml") is None
    assert legislators.missing_ids == [{"govtrack_id": None, "filename": "s2009-3.xml"}]
