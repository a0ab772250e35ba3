"""
Session sync: every ingester for one session, in dependency order.
"""
import logging

from legisync.database.store import MongoStore
from legisync.ingestion.bills import BillsIngester
from legisync.ingestion.reporting import ReportSink
from legisync.ingestion.results import RunReport
from legisync.ingestion.rolls import RollsIngester

logger = logging.getLogger(__name__)

# Rolls embed their bill, so bills go first
INGESTERS = {
    "bills": BillsIngester,
    "rolls": RollsIngester,
}


def sync_session(
    store: MongoStore,
    fetcher,
    reporter: ReportSink,
    session: int,
    kinds: list[str] | None = None,
    force_unlock: bool = False
) -> list[RunReport]:
    """
    Run the requested ingesters for a session.
    
    Args:
        store: Document store
        fetcher: Source file fetcher
        reporter: Where run reports go
        session: Session of Congress (e.g., 111)
        kinds: Any of "bills", "rolls" (None = both)
        force_unlock: Clear each run lock first, for when a killed run left it behind
        
    Returns:
        One run report per ingester that ran
    """
    kinds = kinds or list(INGESTERS)
    reports = []
    for kind, ingester_class in INGESTERS.items():
        if kind not in kinds:
            continue
        logger.info(f"Syncing {kind} for session {session}")
        ingester = ingester_class(store, fetcher, reporter, session=session)
        if force_unlock:
            ingester.unlock()
        reports.append(ingester.run())
    return reports
