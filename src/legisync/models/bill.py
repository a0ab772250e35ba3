"""
Bill data models.

A bill document is flat in MongoDB: the timeline flags live next to the
other bill fields so they can be filtered and ordered on directly.
"""
from datetime import datetime
from typing import ClassVar, Optional, List

from pydantic import BaseModel, ConfigDict, Field


class Title(BaseModel):
    """One title a bill carried, e.g. the short title as introduced."""
    model_config = ConfigDict(populate_by_name=True)
    
    type: Optional[str] = None  # "short", "official", "popular"
    as_: Optional[str] = Field(None, alias="as")  # "introduced", "enacted", ...
    title: str = ""


class Action(BaseModel):
    """An entry in a bill's action log."""
    acted_at: Optional[datetime] = None
    type: str  # element name: "action", "vote", "vote2", "topresident", ...
    text: str = ""


class BillVote(BaseModel):
    """A vote recorded in a bill's action log."""
    how: Optional[str] = None  # "roll", "by voice vote", ...
    result: Optional[str] = None  # "pass" / "fail"
    voted_at: Optional[datetime] = None
    text: str = ""
    chamber: Optional[str] = None
    type: Optional[str] = None  # "vote", "vote2", "override", ...
    roll_id: Optional[str] = None


class Timeline(BaseModel):
    """
    Procedural status flags derived from the action and vote logs.
    
    Only fields that were explicitly set are stored, so an event that
    never happened leaves no trace (see ``model_dump(exclude_unset=True)``).
    """
    house_result: Optional[str] = None
    house_result_at: Optional[datetime] = None
    senate_result: Optional[str] = None
    senate_result_at: Optional[datetime] = None
    passed: Optional[bool] = None
    passed_at: Optional[datetime] = None
    vetoed: Optional[bool] = None
    vetoed_at: Optional[datetime] = None
    override_house_result: Optional[str] = None
    override_house_result_at: Optional[datetime] = None
    override_senate_result: Optional[str] = None
    override_senate_result_at: Optional[datetime] = None
    enacted: Optional[bool] = None
    enacted_at: Optional[datetime] = None
    awaiting_signature: Optional[bool] = None
    awaiting_signature_since: Optional[datetime] = None


class Bill(BaseModel):
    """
    A piece of federal legislation, as ingested from a GovTrack bill file.
    """
    
    basic_fields: ClassVar[list[str]] = [
        "bill_id", "type", "code", "number", "session", "chamber", "updated_at", "state",
        "short_title", "official_title",
        "sponsor_id", "cosponsors_count", "votes_count", "last_action_at", "last_vote_at",
        "introduced_at", "house_result", "house_result_at", "senate_result", "senate_result_at",
        "passed", "passed_at", "vetoed", "vetoed_at", "override_house_result", "override_house_result_at",
        "override_senate_result", "override_senate_result_at",
        "awaiting_signature", "awaiting_signature_since", "enacted", "enacted_at",
    ]
    
    # Unique identifier (e.g., "hr1-111")
    bill_id: str = Field(..., description="Unique ID: {code}-{session}")
    
    # Classification
    type: str  # "hr", "hres", "s", ...
    number: int
    code: str  # "hr1"
    session: int
    chamber: str
    state: str  # GovTrack's status code, e.g. "ENACTED:SIGNED"
    filename: Optional[str] = None
    
    # Content
    short_title: Optional[str] = None
    official_title: Optional[str] = None
    titles: List[Title] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    summary: Optional[str] = None
    
    # Sponsorship (legislator snapshots taken at ingestion time)
    sponsor: Optional[dict] = None
    sponsor_id: Optional[str] = None
    cosponsors: List[dict] = Field(default_factory=list)
    cosponsor_ids: List[str] = Field(default_factory=list)
    cosponsors_count: int = 0
    
    # History
    introduced_at: Optional[datetime] = None
    actions: List[Action] = Field(default_factory=list)
    last_action: Optional[Action] = None
    last_action_at: Optional[datetime] = None
    votes: List[BillVote] = Field(default_factory=list)
    votes_count: int = 0
    last_vote_at: Optional[datetime] = None
    
    timeline: Timeline = Field(default_factory=Timeline)
    
    # Metadata
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    
    def to_document(self) -> dict:
        """Flatten into the stored document, timeline fields inlined."""
        document = self.model_dump(by_alias=True, exclude={"timeline"})
        document.update(self.timeline.model_dump(exclude_unset=True))
        return document
    
    def __str__(self) -> str:
        return f"{self.code.upper()} ({self.session}th Congress): {(self.short_title or self.official_title or '')[:60]}"
