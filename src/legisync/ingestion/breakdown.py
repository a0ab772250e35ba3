"""Roll call vote tallies, overall and by party."""
from typing import Iterable

from legisync.config.constants import VOTE_MAPPING

TOTAL = "total"
UNKNOWN_PARTY = "Unknown"


def vote_breakdown_for(voters: Iterable[dict]) -> dict[str, dict[str, int]]:
    """
    Count ballots by category, overall and per party.
    
    Ballot codes are mapped to ``ayes``/``nays``/``not_voting``/``present``;
    any other value (a candidate's name in an election for Speaker, say)
    is counted as a category of its own.
    
    Every tally ends up with the same keys: the four standard categories
    plus anything that was voted anywhere, zero where nobody voted it.
    
    Args:
        voters: Ballots as ``{"vote": "+", "voter": {"party": "R", ...}}``
        
    Returns:
        ``{"total": {...}, "R": {...}, "D": {...}}``
    """
    breakdown: dict[str, dict[str, int]] = {TOTAL: {}}
    
    for voter in voters:
        party = voter["voter"].get("party") or UNKNOWN_PARTY
        vote = VOTE_MAPPING.get(voter["vote"], voter["vote"])
        
        party_tally = breakdown.setdefault(party, {})
        party_tally[vote] = party_tally.get(vote, 0) + 1
        breakdown[TOTAL][vote] = breakdown[TOTAL].get(vote, 0) + 1
    
    categories = list(breakdown[TOTAL]) + [v for v in VOTE_MAPPING.values() if v not in breakdown[TOTAL]]
    for tally in breakdown.values():
        for vote in categories:
            tally.setdefault(vote, 0)
    
    return breakdown
