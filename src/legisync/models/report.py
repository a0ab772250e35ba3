"""
Run report model.

Reports are what an ingestion run leaves behind for operators:
one document per success, warning or failure.
"""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ReportStatus(str, Enum):
    """Outcome class of a report."""
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    FAILURE = "FAILURE"


class Report(BaseModel):
    status: ReportStatus
    source: str  # ingester class name, e.g. "BillsIngester"
    message: str
    metadata: dict = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.utcnow)
