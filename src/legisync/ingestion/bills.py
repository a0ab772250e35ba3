"""
Ingester for GovTrack bill files.

Each file (data/govtrack/{session}/bills/hr1.xml) becomes one bill
document with sponsor snapshots, the action and vote logs, and the
derived timeline.
"""
from pathlib import Path
from typing import Optional
import xml.etree.ElementTree as ET

from legisync.config.constants import COLLECTION_BILLS
from legisync.ingestion.base import BaseIngester
from legisync.ingestion.legislators import LegislatorIndex
from legisync.ingestion.parsing import bill_type_for, chamber_for, inner_text, parse_timestamp
from legisync.ingestion.timeline import build_timeline
from legisync.models.bill import Action, Bill, BillVote

VOTE_TAGS = ("vote", "vote2", "vote-aux")


def titles_for(root: ET.Element) -> list[dict]:
    """Every title, in document order (the order matters, see most_recent_title)."""
    return [
        {"type": title.get("type"), "as": title.get("as"), "title": inner_text(title)}
        for title in root.iter("title")
    ]


def most_recent_title(titles: list[dict], title_type: str) -> Optional[str]:
    """
    The latest title of a type, e.g. the short title as enacted.
    
    Titles are grouped by their "as" stage; the group that shows up last
    in the document is taken to be the most recent, and its first title
    wins. This trusts GovTrack to list stages in order.
    """
    groups: dict[Optional[str], list[dict]] = {}
    for title in titles:
        if title["type"] == title_type:
            groups.setdefault(title["as"], []).append(title)
    
    if not groups:
        return None
    recent_group = groups[list(groups)[-1]]
    return recent_group[0]["title"]


def summary_for(root: ET.Element) -> Optional[str]:
    summary = inner_text(root.find(".//summary")).strip()
    return summary or None


def keywords_for(root: ET.Element) -> list[str]:
    return [term.get("name") for term in root.findall(".//subjects/term") if term.get("name")]


def _sponsorship(element: Optional[ET.Element], legislators: LegislatorIndex, filename: str) -> Optional[dict]:
    if element is None or not element.get("id") or element.get("withdrawn") is not None:
        return None
    return legislators.resolve(element.get("id"), filename)


def sponsor_for(root: ET.Element, legislators: LegislatorIndex, filename: str) -> Optional[dict]:
    return _sponsorship(root.find(".//sponsor"), legislators, filename)


def cosponsors_for(root: ET.Element, legislators: LegislatorIndex, filename: str) -> list[dict]:
    cosponsors = (_sponsorship(element, legislators, filename) for element in root.iter("cosponsor"))
    return [cosponsor for cosponsor in cosponsors if cosponsor]


def _action_elements(root: ET.Element):
    for actions in root.iter("actions"):
        yield from actions


def actions_for(root: ET.Element) -> list[Action]:
    return [
        Action(
            acted_at=parse_timestamp(element.get("datetime")),
            type=element.tag,
            text="".join(inner_text(text) for text in element.iter("text")),
        )
        for element in _action_elements(root)
    ]


def votes_for(root: ET.Element) -> list[BillVote]:
    votes = []
    for element in _action_elements(root):
        if element.tag not in VOTE_TAGS:
            continue
        
        voted_at = parse_timestamp(element.get("datetime"))
        where = element.get("where")
        vote = BillVote(
            how=element.get("how"),
            result=element.get("result"),
            voted_at=voted_at,
            text="".join(inner_text(text) for text in element.iter("text")),
            chamber=chamber_for(where),
            type=element.get("type"),
        )
        
        roll = (element.get("roll") or "").strip()
        if roll and voted_at:
            vote.roll_id = f"{where}{roll}-{voted_at.year}"
        
        votes.append(vote)
    return votes


class BillsIngester(BaseIngester[Bill]):
    """
    Ingest a session's bills from GovTrack XML.
    
    Usage:
        ingester = BillsIngester(store, HttpMirrorFetcher(), MongoReportSink(store), session=111)
        report = ingester.run()
    """
    
    kind = "bills"
    collection = COLLECTION_BILLS
    key_field = "bill_id"
    model = Bill
    
    def transform(self, path: Path, root: ET.Element) -> dict:
        filename = path.name
        bill_type = bill_type_for(root.get("type"))
        number = root.get("number")
        code = f"{bill_type or ''}{number or ''}"
        
        sponsor = sponsor_for(root, self.legislators, filename)
        cosponsors = cosponsors_for(root, self.legislators, filename)
        titles = titles_for(root)
        actions = actions_for(root)
        votes = votes_for(root)
        
        state = root.find(".//state")
        introduced = root.find(".//introduced")
        
        return {
            "bill_id": f"{code}-{self.session}",
            "type": bill_type,
            "number": number,
            "code": code,
            "session": self.session,
            "chamber": chamber_for(bill_type[0]) if bill_type else None,
            "state": inner_text(state) if state is not None else "UNKNOWN",
            "filename": filename,
            "short_title": most_recent_title(titles, "short"),
            "official_title": most_recent_title(titles, "official"),
            "titles": titles,
            "keywords": keywords_for(root),
            "summary": summary_for(root),
            "sponsor": sponsor,
            "sponsor_id": sponsor.get("bioguide_id") if sponsor else None,
            "cosponsors": cosponsors,
            "cosponsor_ids": [c["bioguide_id"] for c in cosponsors if c.get("bioguide_id")],
            "cosponsors_count": len(cosponsors),
            "introduced_at": parse_timestamp(introduced.get("datetime")) if introduced is not None else None,
            "actions": [action.model_dump() for action in actions],
            "last_action": actions[-1].model_dump() if actions else None,
            "last_action_at": actions[-1].acted_at if actions else None,
            "votes": [vote.model_dump() for vote in votes],
            "votes_count": len(votes),
            "last_vote_at": votes[-1].voted_at if votes else None,
            "timeline": build_timeline(actions, votes).model_dump(exclude_unset=True),
        }
