"""
Bill timeline reconstruction.

Works out where a bill stands (passed, vetoed, overridden, enacted,
waiting on the President) from its action and vote logs alone.
"""
from typing import Optional, Sequence

from legisync.models.bill import Action, BillVote, Timeline


def _last(items: Sequence, predicate) -> Optional[object]:
    matches = [item for item in items if predicate(item)]
    return matches[-1] if matches else None


def _first(items: Sequence, predicate) -> Optional[object]:
    return next((item for item in items if predicate(item)), None)


def build_timeline(actions: Sequence[Action], votes: Sequence[BillVote]) -> Timeline:
    """
    Derive the timeline flags for a bill.
    
    The chamber results and override results are only set when such a
    vote exists. ``passed``, ``vetoed``, ``enacted`` and
    ``awaiting_signature`` are always set.
    
    Args:
        actions: The bill's action log, in document order
        votes: The bill's vote log, in document order
        
    Returns:
        Timeline with only the applicable fields set
    """
    timeline = {}
    
    house_vote = _last(votes, lambda v: v.chamber == "house" and v.type != "override")
    if house_vote:
        timeline["house_result"] = house_vote.result
        timeline["house_result_at"] = house_vote.voted_at
    
    senate_vote = _last(votes, lambda v: v.chamber == "senate" and v.type != "override")
    if senate_vote:
        timeline["senate_result"] = senate_vote.result
        timeline["senate_result_at"] = senate_vote.voted_at
    
    concurring_vote = _last(votes, lambda v: v.type == "vote2")
    if concurring_vote:
        timeline["passed"] = concurring_vote.result == "pass"
        timeline["passed_at"] = concurring_vote.voted_at
    else:
        timeline["passed"] = False
    
    vetoed_action = _first(actions, lambda a: a.type == "vetoed")
    if vetoed_action:
        timeline["vetoed"] = True
        timeline["vetoed_at"] = vetoed_action.acted_at
    else:
        timeline["vetoed"] = False
    
    override_house_vote = _last(votes, lambda v: v.chamber == "house" and v.type == "override")
    if override_house_vote:
        timeline["override_house_result"] = override_house_vote.result
        timeline["override_house_result_at"] = override_house_vote.voted_at
    
    override_senate_vote = _last(votes, lambda v: v.chamber == "senate" and v.type == "override")
    if override_senate_vote:
        timeline["override_senate_result"] = override_senate_vote.result
        timeline["override_senate_result_at"] = override_senate_vote.voted_at
    
    enacted_action = _first(actions, lambda a: a.type == "enacted")
    if enacted_action:
        timeline["enacted"] = True
        timeline["enacted_at"] = enacted_action.acted_at
    else:
        timeline["enacted"] = False
    
    # inferred from everything above
    to_president = _last(actions, lambda a: a.type == "topresident")
    if timeline["passed"] and not timeline["vetoed"] and not timeline["enacted"] and to_president:
        timeline["awaiting_signature"] = True
        timeline["awaiting_signature_since"] = to_president.acted_at
    else:
        timeline["awaiting_signature"] = False
    
    return Timeline(**timeline)
