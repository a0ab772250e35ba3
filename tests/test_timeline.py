"""Timeline reconstruction from bill action logs."""
import xml.etree.ElementTree as ET

import pytest

from legisync.ingestion.bills import actions_for, votes_for
from legisync.ingestion.timeline import build_timeline

REFERRED = '<action datetime="2009-01-06"><text>Referred to committee.</text></action>'
HOUSE_PASS = '<vote datetime="2009-02-01" where="h" type="vote" result="pass" how="roll" roll="10"/>'
SENATE_PASS = '<vote datetime="2009-03-01" where="s" type="vote" result="pass" how="roll" roll="20"/>'
SENATE_CONCUR = '<vote2 datetime="2009-03-01" where="s" type="vote2" result="pass" how="roll" roll="20"/>'
HOUSE_CONCUR_FAIL = '<vote2 datetime="2009-03-05" where="h" type="vote2" result="fail" how="roll" roll="30"/>'
TO_PRESIDENT = '<topresident datetime="2009-03-10"><text>Presented to President.</text></topresident>'
VETOED = '<vetoed datetime="2009-03-20"><text>Vetoed by President.</text></vetoed>'
HOUSE_OVERRIDE_FAIL = '<vote datetime="2009-04-01" where="h" type="override" result="fail" how="roll" roll="40"/>'
HOUSE_OVERRIDE_PASS = '<vote datetime="2009-04-01" where="h" type="override" result="pass" how="roll" roll="40"/>'
SENATE_OVERRIDE_PASS = '<vote datetime="2009-04-02" where="s" type="override" result="pass" how="roll" roll="50"/>'
ENACTED = '<enacted datetime="2009-03-15"><text>Became Public Law.</text></enacted>'

MISSING = object()
NOT_NULL = object()

TIMELINE_FIELDS = [
    "house_result", "house_result_at", "senate_result", "senate_result_at",
    "passed", "passed_at", "vetoed", "vetoed_at",
    "override_house_result", "override_house_result_at",
    "override_senate_result", "override_senate_result_at",
    "enacted", "enacted_at", "awaiting_signature", "awaiting_signature_since",
]


def timeline_for(*actions: str) -> dict:
    root = ET.fromstring(f"<bill><actions>{''.join(actions)}</actions></bill>")
    return build_timeline(actions_for(root), votes_for(root)).model_dump(exclude_unset=True)


def expect(**expected) -> dict:
    """Every timeline field, MISSING unless given."""
    return {field: expected.get(field, MISSING) for field in TIMELINE_FIELDS}


CASES = {
    "introduced": (
        [REFERRED],
        expect(passed=False, vetoed=False, enacted=False, awaiting_signature=False),
    ),
    "passed_house_only": (
        [REFERRED, HOUSE_PASS],
        expect(house_result="pass", house_result_at=NOT_NULL,
               passed=False, vetoed=False, enacted=False, awaiting_signature=False),
    ),
    "passed_awaiting_conference": (
        [REFERRED, HOUSE_PASS, SENATE_PASS],
        expect(house_result="pass", house_result_at=NOT_NULL,
               senate_result="pass", senate_result_at=NOT_NULL,
               passed=False, vetoed=False, enacted=False, awaiting_signature=False),
    ),
    "passed_awaiting_signature": (
        [REFERRED, HOUSE_PASS, SENATE_CONCUR, TO_PRESIDENT],
        expect(house_result="pass", house_result_at=NOT_NULL,
               senate_result="pass", senate_result_at=NOT_NULL,
               passed=True, passed_at=NOT_NULL, vetoed=False, enacted=False,
               awaiting_signature=True, awaiting_signature_since=NOT_NULL),
    ),
    "enacted_normal": (
        [REFERRED, HOUSE_PASS, SENATE_CONCUR, TO_PRESIDENT, ENACTED],
        expect(house_result="pass", house_result_at=NOT_NULL,
               senate_result="pass", senate_result_at=NOT_NULL,
               passed=True, passed_at=NOT_NULL, vetoed=False,
               enacted=True, enacted_at=NOT_NULL, awaiting_signature=False),
    ),
    "enacted_but_one_vote": (
        [REFERRED, SENATE_CONCUR, TO_PRESIDENT, ENACTED],
        expect(senate_result="pass", senate_result_at=NOT_NULL,
               passed=True, passed_at=NOT_NULL, vetoed=False,
               enacted=True, enacted_at=NOT_NULL, awaiting_signature=False),
    ),
    "veto_override_failed": (
        [REFERRED, HOUSE_PASS, SENATE_CONCUR, TO_PRESIDENT, VETOED, HOUSE_OVERRIDE_FAIL],
        expect(house_result="pass", house_result_at=NOT_NULL,
               senate_result="pass", senate_result_at=NOT_NULL,
               passed=True, passed_at=NOT_NULL, vetoed=True, vetoed_at=NOT_NULL,
               override_house_result="fail", override_house_result_at=NOT_NULL,
               enacted=False, awaiting_signature=False),
    ),
    "veto_override_passed": (
        [REFERRED, HOUSE_PASS, SENATE_CONCUR, TO_PRESIDENT, VETOED,
         HOUSE_OVERRIDE_PASS, SENATE_OVERRIDE_PASS, ENACTED],
        expect(house_result="pass", house_result_at=NOT_NULL,
               senate_result="pass", senate_result_at=NOT_NULL,
               passed=True, passed_at=NOT_NULL, vetoed=True, vetoed_at=NOT_NULL,
               override_house_result="pass", override_house_result_at=NOT_NULL,
               override_senate_result="pass", override_senate_result_at=NOT_NULL,
               enacted=True, enacted_at=NOT_NULL, awaiting_signature=False),
    ),
}


@pytest.mark.parametrize("name", list(CASES))
def test_timeline_construction(name):
    actions, expected = CASES[name]
    timeline = timeline_for(*actions)
    
    for field, value in expected.items():
        if value is MISSING:
            assert field not in timeline, f"[{name}] {field} should be missing"
        elif value is NOT_NULL:
            assert timeline.get(field) is not None, f"[{name}] {field} should be set"
        else:
            assert timeline.get(field) == value, f"[{name}] {field}"


def test_override_votes_dont_count_as_chamber_results():
    timeline = timeline_for(HOUSE_PASS, SENATE_CONCUR, VETOED, HOUSE_OVERRIDE_FAIL)
    
    assert timeline["house_result"] == "pass"
    assert timeline["house_result_at"].month == 2
    assert timeline["override_house_result"] == "fail"


def test_failed_concurring_vote_still_records_when():
    timeline = timeline_for(HOUSE_PASS, SENATE_CONCUR, HOUSE_CONCUR_FAIL)
    
    # the last concurring vote decides
    assert timeline["passed"] is False
    assert timeline["passed_at"].day == 5
    assert timeline["house_result"] == "fail"


def test_awaiting_signature_uses_last_referral():
    second_referral = '<topresident datetime="2009-03-12"><text>Presented again.</text></topresident>'
    timeline = timeline_for(HOUSE_PASS, SENATE_CONCUR, TO_PRESIDENT, second_referral)
    
    assert timeline["awaiting_signature"] is True
    assert timeline["awaiting_signature_since"].day == 12


def test_no_signature_wait_without_referral():
    timeline = timeline_for(HOUSE_PASS, SENATE_CONCUR)
    
    assert timeline["passed"] is True
    assert timeline["awaiting_signature"] is False
    assert "awaiting_signature_since" not in timeline


def test_empty_log():
    assert timeline_for() == {
        "passed": False,
        "vetoed": False,
        "enacted": False,
        "awaiting_signature": False,
    }
