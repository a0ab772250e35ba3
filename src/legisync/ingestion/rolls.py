"""
Ingester for GovTrack roll call files.

Each file (data/govtrack/{session}/rolls/h2009-12.xml) becomes one roll
document with the ballots, tallies, and a snapshot of the bill voted on.
"""
from pathlib import Path
from typing import Optional
import re
import xml.etree.ElementTree as ET

from legisync.config.constants import COLLECTION_BILLS, COLLECTION_ROLLS
from legisync.ingestion.base import BaseIngester
from legisync.ingestion.breakdown import TOTAL, vote_breakdown_for
from legisync.ingestion.legislators import LegislatorIndex
from legisync.ingestion.parsing import bill_type_for, chamber_for, parse_timestamp
from legisync.models.bill import Bill
from legisync.models.roll import Roll

# h2009-12.xml: chamber, year, roll number
ROLL_FILENAME = re.compile(r"^([hs])(\d+)-(\d+)\.xml")


def bill_id_for(root: ET.Element) -> Optional[str]:
    """Natural key of the bill a roll is about, if any."""
    bill = root.find(".//bill")
    if bill is None:
        return None
    return f"{bill_type_for(bill.get('type')) or ''}{bill.get('number')}-{bill.get('session')}"


def ballots_for(root: ET.Element, legislators: LegislatorIndex, filename: str) -> tuple[list[dict], list[dict]]:
    """
    Resolve every voter.
    
    Returns:
        (voter_ids, voters): ballots keyed by bioguide ID, and ballots with
        the full legislator snapshot. Unknown voters, and voters with no
        ID, are left out of both and recorded as missing.
    """
    voter_ids = []
    voters = []
    
    for element in root.iter("voter"):
        vote = element.get("vote")
        voter = legislators.resolve(element.get("id"), filename)
        if voter:
            voter_ids.append({"vote": vote, "voter_id": voter.get("bioguide_id")})
            voters.append({"vote": vote, "voter": voter})
    
    return voter_ids, voters


class RollsIngester(BaseIngester[Roll]):
    """
    Ingest a session's roll call votes from GovTrack XML.
    
    Run after the bills for the same session, so the embedded bill
    snapshots are current.
    """
    
    kind = "rolls"
    collection = COLLECTION_ROLLS
    key_field = "roll_id"
    model = Roll
    
    def transform(self, path: Path, root: ET.Element) -> dict:
        filename = path.name
        attributes = {"filename": filename, "session": self.session}
        
        # a misnamed file gets no roll_id and fails validation
        match = ROLL_FILENAME.match(filename)
        if match:
            prefix, year, number = match.groups()
            attributes.update({
                "roll_id": f"{prefix}{number}-{year}",
                "year": year,
                "number": number,
            })
        
        bill_id = bill_id_for(root)
        voter_ids, voters = ballots_for(root, self.legislators, filename)
        party_vote_breakdown = vote_breakdown_for(voters)
        vote_breakdown = party_vote_breakdown.pop(TOTAL)
        
        attributes.update({
            "chamber": chamber_for(root.get("where")),
            "result": root.findtext("result"),
            "voted_at": parse_timestamp(root.get("datetime")),
            "type": root.findtext("type"),
            "question": root.findtext("question"),
            "required": root.findtext("required"),
            "bill_id": bill_id,
            "bill": self.bill_for(bill_id),
            "voter_ids": voter_ids,
            "voters": voters,
            "vote_breakdown": vote_breakdown,
            "party_vote_breakdown": party_vote_breakdown,
        })
        return attributes
    
    def bill_for(self, bill_id: Optional[str]) -> Optional[dict]:
        """Basic fields of the stored bill, if it has been ingested."""
        if not bill_id:
            return None
        return self.store.find_one(COLLECTION_BILLS, {"bill_id": bill_id}, Bill.basic_fields)
