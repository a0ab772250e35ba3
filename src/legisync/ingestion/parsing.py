"""Small helpers shared by the bill and roll parsers."""
from datetime import datetime
from typing import Optional
import xml.etree.ElementTree as ET

from legisync.config.constants import BILL_TYPES, CHAMBERS


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a GovTrack timestamp.
    
    GovTrack writes either a date ("2009-01-26") or a full ISO-8601
    timestamp with offset ("2009-02-13T14:37:00-05:00").
    """
    if not value or not value.strip():
        return None
    return datetime.fromisoformat(value.strip())


def inner_text(element: Optional[ET.Element]) -> str:
    """All text inside an element, children included."""
    if element is None:
        return ""
    return "".join(element.itertext())


def bill_type_for(code: Optional[str]) -> Optional[str]:
    """Map a GovTrack type code ("h", "sj", ...) to a bill type ("hr", "sjres", ...)."""
    if code is None:
        return None
    return BILL_TYPES.get(code)


def chamber_for(code: Optional[str]) -> Optional[str]:
    """Map a GovTrack "where" code ("h"/"s") to a chamber name."""
    if code is None:
        return None
    return CHAMBERS.get(code.lower())
