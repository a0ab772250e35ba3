"""
Roll call data models.

A roll carries both the ballots (with voter snapshots) and the
precomputed tallies, so API consumers never have to count.
"""
from datetime import datetime
from typing import ClassVar, Optional, List, Dict

from pydantic import BaseModel, Field


class Ballot(BaseModel):
    """A ballot keyed by the voter's bioguide ID."""
    vote: str  # raw ballot value: "+", "-", "0", "P" or a candidate name
    voter_id: Optional[str] = None


class VoterBallot(BaseModel):
    """A ballot with the voter's legislator snapshot."""
    vote: str
    voter: dict


class Roll(BaseModel):
    """
    A recorded roll call vote in the House or Senate.
    """
    
    basic_fields: ClassVar[list[str]] = [
        "roll_id", "number", "year", "chamber", "session", "result", "bill_id", "voted_at",
        "updated_at", "type", "question", "required", "vote_breakdown",
    ]
    
    # Unique identifier (e.g., "h2009-12")
    roll_id: str = Field(..., description="Unique ID: {h|s}{number}-{year}")
    chamber: str
    session: int
    result: str
    
    number: int
    year: int
    filename: Optional[str] = None
    
    # Vote details
    voted_at: Optional[datetime] = None
    type: Optional[str] = None
    question: Optional[str] = None
    required: Optional[str] = None  # "1/2", "3/5", ...
    
    # Related bill (if applicable)
    bill_id: Optional[str] = None
    bill: Optional[dict] = None
    
    # Ballots
    voter_ids: List[Ballot] = Field(default_factory=list)
    voters: List[VoterBallot] = Field(default_factory=list)
    
    # Totals
    vote_breakdown: Dict[str, int] = Field(default_factory=dict)
    party_vote_breakdown: Dict[str, Dict[str, int]] = Field(default_factory=dict)
    
    # Metadata
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    
    def to_document(self) -> dict:
        return self.model_dump()
