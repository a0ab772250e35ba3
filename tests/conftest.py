"""Shared fixtures: an in-memory MongoDB, seeded legislators, and source files on disk."""
import shutil
from pathlib import Path

import mongomock
import pytest

from legisync.database.store import MongoStore
from legisync.models.report import ReportStatus

FIXTURES = Path(__file__).parent / "fixtures"
SESSION = 111

LEGISLATORS = [
    {"govtrack_id": "400001", "bioguide_id": "A000001", "first_name": "Alice", "last_name": "Adams",
     "title": "Rep", "state": "CA", "party": "R", "district": "8", "in_office": True, "phone": "202-225-0001"},
    {"govtrack_id": "400002", "bioguide_id": "B000002", "first_name": "Bob", "nickname": "Bobby",
     "last_name": "Baker", "title": "Rep", "state": "TX", "party": "R", "district": "2", "in_office": True},
    {"govtrack_id": "400003", "bioguide_id": "C000003", "first_name": "Carol", "last_name": "Chen",
     "title": "Rep", "state": "NY", "party": "D", "district": "10", "in_office": True},
    {"govtrack_id": "400004", "bioguide_id": "D000004", "first_name": "Dan", "last_name": "Diaz",
     "name_suffix": "Jr.", "title": "Rep", "state": "FL", "party": "R", "district": "5", "in_office": True},
    {"govtrack_id": 400005, "bioguide_id": "E000005", "first_name": "Eve", "last_name": "Evans",
     "title": "Sen", "state": "OR", "party": "D", "in_office": False},
]


class RecordingReportSink:
    """Keeps every report it is given."""
    
    def __init__(self):
        self.reports = []
    
    def success(self, source, message, metadata=None):
        self.reports.append((ReportStatus.SUCCESS, source, message, metadata or {}))
    
    def warning(self, source, message, metadata=None):
        self.reports.append((ReportStatus.WARNING, source, message, metadata or {}))
    
    def failure(self, source, message, metadata=None):
        self.reports.append((ReportStatus.FAILURE, source, message, metadata or {}))
    
    def of(self, status):
        return [report for report in self.reports if report[0] == status]


@pytest.fixture
def db():
    return mongomock.MongoClient()["legisync_test"]


@pytest.fixture
def store(db):
    db.legislators.insert_many([dict(legislator) for legislator in LEGISLATORS])
    return MongoStore(db)


@pytest.fixture
def reporter():
    return RecordingReportSink()


@pytest.fixture
def data_dir(tmp_path):
    """A DATA_DIR laid out like a GovTrack mirror: {session}/{bills,rolls}/*.xml"""
    for kind in ("bills", "rolls"):
        shutil.copytree(FIXTURES / kind, tmp_path / str(SESSION) / kind)
    return tmp_path
