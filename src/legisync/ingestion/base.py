"""
Base ingester for GovTrack source files.

One run handles one session of one kind of file (bills or rolls):

    lock -> fetch -> index legislators -> for each file {parse -> upsert} -> report

A record that fails validation is set aside and the run carries on.
Anything unexpected stops the run; records saved before that stay saved.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from pathlib import Path
from typing import Generic, Optional, TypeVar
import logging
import traceback
import xml.etree.ElementTree as ET

from pydantic import BaseModel, ValidationError
from pymongo.errors import WriteError

from legisync.config.constants import CURRENT_SESSION
from legisync.config.settings import settings
from legisync.database.store import MongoStore
from legisync.ingestion.legislators import LegislatorIndex
from legisync.ingestion.reporting import ReportSink
from legisync.ingestion.results import (
    Crashed,
    FileOutcome,
    Rejected,
    RunReport,
    Stored,
)

T = TypeVar('T', bound=BaseModel)


def validation_messages(error: ValidationError) -> list[str]:
    """Readable one-liners for each pydantic validation error."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        messages.append(f"{location}: {item['msg']}" if location else item["msg"])
    return messages


class BaseIngester(ABC, Generic[T]):
    """
    Base class for the bill and roll ingesters.
    
    Subclasses say which files they read (``kind``), where the records go
    (``collection`` / ``key_field``), which model validates them, and how
    to turn one XML document into that model's attributes.
    """
    
    kind: str
    collection: str
    key_field: str
    model: type[T]
    
    def __init__(
        self,
        store: MongoStore,
        fetcher,
        reporter: ReportSink,
        session: int = CURRENT_SESSION,
        stale_after: timedelta = timedelta(minutes=settings.LOCK_STALE_AFTER_MINUTES)
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.store = store
        self.fetcher = fetcher
        self.reporter = reporter
        self.session = session
        self.stale_after = stale_after
        self.legislators: Optional[LegislatorIndex] = None
    
    @property
    def source(self) -> str:
        return self.__class__.__name__
    
    @property
    def lock_name(self) -> str:
        return f"{self.source}:{self.session}"
    
    def unlock(self) -> None:
        """Clear this source and session's run lock, held or not."""
        self.logger.warning(f"Releasing run lock {self.lock_name}")
        self.store.release_lock(self.lock_name)
    
    @abstractmethod
    def transform(self, path: Path, root: ET.Element) -> dict:
        """
        Turn one parsed XML document into record attributes.
        
        Args:
            path: Source file path
            root: Root element of the document
            
        Returns:
            Attributes for ``self.model``, as plain data
        """
        pass
    
    def load(self, item: T) -> bool:
        """
        Upsert a record by its natural key.
        
        Returns:
            True if new insert, False if update
        """
        return self.store.upsert(self.collection, self.key_field, item.to_document())
    
    def process_file(self, path: Path) -> FileOutcome:
        """
        Run one source file through parse, validate and load.
        
        Never raises: the outcome says what happened.
        """
        try:
            root = ET.parse(path).getroot()
            attributes = self.transform(path, root)
            
            try:
                item = self.model.model_validate(attributes)
                was_insert = self.load(item)
            except ValidationError as e:
                return Rejected(path.name, attributes, validation_messages(e))
            except WriteError as e:
                return Rejected(path.name, attributes, [str(e)])
            
            return Stored(getattr(item, self.key_field), was_insert)
        
        except Exception as e:
            return Crashed(path.name, e, traceback.format_exc())
    
    def run(self) -> RunReport:
        """
        Execute a full run for this ingester's session.
        
        Returns:
            The run report (also sent to the report sink)
        """
        self.logger.info(f"Starting {self.source} for session {self.session}...")
        report = RunReport(source=self.source, session=self.session)
        started_at = datetime.utcnow()
        
        if not self.store.acquire_lock(self.lock_name, self.stale_after):
            report.error = {"stage": "lock", "message": f"A {self.source} run for session {self.session} is already in progress."}
            self.send_reports(report)
            return report
        
        try:
            self.ingest(report)
        except Exception as e:
            self.logger.exception("Fatal error during ingestion")
            report.error = {
                "stage": "run",
                "message": str(e),
                "type": type(e).__name__,
                "backtrace": traceback.format_exc(),
            }
        finally:
            self.store.release_lock(self.lock_name)
            report.elapsed_time = (datetime.utcnow() - started_at).total_seconds()
        
        self.logger.info(
            f"Ingestion complete. "
            f"Saved: {report.count}, "
            f"Inserted: {report.inserted}, "
            f"Updated: {report.updated}, "
            f"Failed: {len(report.failed)}, "
            f"Missing IDs: {len(report.missing_ids)}, "
            f"Duration: {report.elapsed_time:.1f}s"
        )
        self.send_reports(report)
        return report
    
    def ingest(self, report: RunReport) -> None:
        """Fetch, index and process every file, filling in the report."""
        fetched = self.fetcher.fetch(self.session, self.kind)
        if not fetched.ok:
            report.error = {"stage": "fetch", "message": fetched.error}
            return
        
        self.legislators = LegislatorIndex.from_store(self.store)
        
        paths = sorted(fetched.directory.glob("*.xml"))
        self.logger.info(f"Processing {len(paths)} {self.kind} files from {fetched.directory}")
        
        for path in paths:
            outcome = self.process_file(path)
            
            if isinstance(outcome, Stored):
                report.count += 1
                if outcome.inserted:
                    report.inserted += 1
                else:
                    report.updated += 1
            
            elif isinstance(outcome, Rejected):
                self.logger.warning(f"Rejected {outcome.filename}: {'; '.join(outcome.errors)}")
                report.failed.append({
                    "filename": outcome.filename,
                    "attributes": outcome.attributes,
                    "error_messages": outcome.errors,
                })
            
            else:
                self.logger.error(f"Aborting run at {outcome.filename}: {outcome.exception!r}")
                report.error = {
                    "stage": "process",
                    "filename": outcome.filename,
                    "message": str(outcome.exception),
                    "type": type(outcome.exception).__name__,
                    "backtrace": outcome.traceback,
                }
                break
        
        report.missing_ids = list(self.legislators.missing_ids)
    
    def send_reports(self, report: RunReport) -> None:
        """Emit the end-of-run success, warning and failure reports."""
        if report.error and report.error["stage"] in ("lock", "fetch"):
            self.reporter.failure(
                self.source,
                f"Couldn't get {self.kind} for session {self.session}: {report.error['message']}",
                {"error": report.error}
            )
            return
        
        if report.count:
            self.reporter.success(
                self.source,
                f"Synced {report.count} {self.kind} for session {self.session}.",
                {"elapsed_time": report.elapsed_time, "inserted": report.inserted, "updated": report.updated}
            )
        
        if report.missing_ids:
            self.reporter.warning(
                self.source,
                f"Found {len(report.missing_ids)} missing GovTrack IDs, attached.",
                {"missing_ids": report.missing_ids}
            )
        
        if report.failed:
            self.reporter.failure(
                self.source,
                f"Failed to save {len(report.failed)} {self.kind}, attached with their errors.",
                {"failed": report.failed}
            )
        
        if report.error:
            self.reporter.failure(
                self.source,
                f"Exception while saving {self.kind}, attached.",
                {"exception": report.error}
            )
