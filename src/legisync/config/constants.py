"""
Application-wide constants.

Collection names, source code tables, and API limits live here.
"""
from datetime import datetime

# Congress numbers - calculated dynamically
# Congress number = ((current_year - 1789) // 2) + 1
def _calculate_current_session() -> int:
    """Calculate the current session of Congress based on today's date."""
    current_year = datetime.now().year
    return ((current_year - 1789) // 2) + 1

CURRENT_SESSION = _calculate_current_session()  # 119 in 2025-2026

# MongoDB Collection Names
COLLECTION_LEGISLATORS = "legislators"
COLLECTION_BILLS = "bills"
COLLECTION_ROLLS = "rolls"
COLLECTION_REPORTS = "reports"
COLLECTION_LOCKS = "locks"

# GovTrack bill type codes -> bill types
BILL_TYPES = {
    "h": "hr",
    "hr": "hres",
    "hj": "hjres",
    "hc": "hcres",
    "s": "s",
    "sr": "sres",
    "sj": "sjres",
    "sc": "scres",
}

# GovTrack "where" codes
CHAMBERS = {
    "h": "house",
    "s": "senate",
}

# Roll call ballot codes -> breakdown categories
VOTE_MAPPING = {
    "-": "nays",
    "+": "ayes",
    "0": "not_voting",
    "P": "present",
}

# Fields copied from a legislator onto bills and rolls
LEGISLATOR_SNAPSHOT_FIELDS = [
    "first_name", "nickname", "last_name", "name_suffix", "title",
    "state", "party", "district", "govtrack_id", "bioguide_id",
]

# Pagination
DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 500
MAX_PAGE = 200_000_000

# Timestamps in API responses
TIME_FORMAT = "%Y/%m/%d %H:%M:%S %z"
