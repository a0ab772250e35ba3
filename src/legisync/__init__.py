"""Legislative bill and roll call ingestion with a JSON query API."""

__version__ = "0.1.0"
