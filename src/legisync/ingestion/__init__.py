"""Ingestion module - GovTrack bill and roll call pipelines."""

from legisync.ingestion.bills import BillsIngester
from legisync.ingestion.rolls import RollsIngester
from legisync.ingestion.fetch import HttpMirrorFetcher, LocalDirectoryFetcher
from legisync.ingestion.legislators import LegislatorIndex
from legisync.ingestion.reporting import LoggingReportSink, MongoReportSink
from legisync.ingestion.results import RunReport
from legisync.ingestion.session import INGESTERS, sync_session

__all__ = [
    "BillsIngester",
    "RollsIngester",
    "HttpMirrorFetcher",
    "LocalDirectoryFetcher",
    "LegislatorIndex",
    "LoggingReportSink",
    "MongoReportSink",
    "RunReport",
    "INGESTERS",
    "sync_session",
]
