"""Data models module."""

from legisync.models.bill import (
    Action,
    Bill,
    BillVote,
    Timeline,
    Title,
)

from legisync.models.roll import (
    Ballot,
    Roll,
    VoterBallot,
)

from legisync.models.report import (
    Report,
    ReportStatus,
)

__all__ = [
    # Bill
    "Action",
    "Bill",
    "BillVote",
    "Timeline",
    "Title",
    # Roll
    "Ballot",
    "Roll",
    "VoterBallot",
    # Report
    "Report",
    "ReportStatus",
]
