"""
Result values passed between ingestion stages.

Each stage hands back one of these instead of raising, and the
ingester decides whether to continue or abort by looking at the kind.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


class FetchError(Exception):
    """The session's source files could not be retrieved."""


@dataclass
class FetchResult:
    ok: bool
    directory: Optional[Path] = None
    files: int = 0
    error: Optional[str] = None


@dataclass
class Stored:
    """The record was upserted."""
    key: str
    inserted: bool


@dataclass
class Rejected:
    """The record failed validation; the run carries on."""
    filename: str
    attributes: dict
    errors: list[str]


@dataclass
class Crashed:
    """An unexpected error; the rest of the run is abandoned."""
    filename: str
    exception: BaseException
    traceback: str


FileOutcome = Stored | Rejected | Crashed


@dataclass
class RunReport:
    """Everything a run found out, emitted to the report sink at the end."""
    source: str
    session: int
    count: int = 0
    inserted: int = 0
    updated: int = 0
    missing_ids: list[dict] = field(default_factory=list)
    failed: list[dict] = field(default_factory=list)
    error: Optional[dict] = None
    elapsed_time: float = 0.0
    
    @property
    def aborted(self) -> bool:
        return self.error is not None
