"""
Run report sinks.

Ingesters call ``success``/``warning``/``failure`` on a sink once a run
is over; where the reports go is up to the sink.
"""
import logging
from typing import Protocol

from legisync.config.constants import COLLECTION_REPORTS
from legisync.database.store import MongoStore
from legisync.models.report import Report, ReportStatus


class ReportSink(Protocol):
    def success(self, source: str, message: str, metadata: dict | None = None) -> None: ...
    
    def warning(self, source: str, message: str, metadata: dict | None = None) -> None: ...
    
    def failure(self, source: str, message: str, metadata: dict | None = None) -> None: ...


class LoggingReportSink:
    """Write reports to the log only."""
    
    LEVELS = {
        ReportStatus.SUCCESS: logging.INFO,
        ReportStatus.WARNING: logging.WARNING,
        ReportStatus.FAILURE: logging.ERROR,
    }
    
    def __init__(self):
        self.logger = logging.getLogger("legisync.reports")
    
    def success(self, source: str, message: str, metadata: dict | None = None) -> None:
        self.emit(Report(status=ReportStatus.SUCCESS, source=source, message=message, metadata=metadata or {}))
    
    def warning(self, source: str, message: str, metadata: dict | None = None) -> None:
        self.emit(Report(status=ReportStatus.WARNING, source=source, message=message, metadata=metadata or {}))
    
    def failure(self, source: str, message: str, metadata: dict | None = None) -> None:
        self.emit(Report(status=ReportStatus.FAILURE, source=source, message=message, metadata=metadata or {}))
    
    def emit(self, report: Report) -> None:
        self.logger.log(self.LEVELS[report.status], f"[{report.source}] {report.message}")


class MongoReportSink(LoggingReportSink):
    """Log reports and keep them in the reports collection."""
    
    def __init__(self, store: MongoStore):
        super().__init__()
        self.store = store
    
    def emit(self, report: Report) -> None:
        super().emit(report)
        document = report.model_dump()
        document["status"] = report.status.value
        self.store.insert(COLLECTION_REPORTS, document)
