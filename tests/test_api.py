"""The JSON/JSONP API."""
import json
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from legisync.api.app import app, get_service
from legisync.api.service import QueryService

BILLS = [
    {"bill_id": "hr1-111", "code": "hr1", "type": "hr", "session": 111, "chamber": "house",
     "enacted": True, "vetoed": False, "introduced_at": datetime(2009, 1, 26),
     "enacted_at": datetime(2009, 2, 17), "sponsor": {"bioguide_id": "A000001", "state": "CA"},
     "actions": [{"type": "enacted", "acted_at": datetime(2009, 2, 17), "text": "Became Public Law."}]},
    {"bill_id": "hr2-111", "code": "hr2", "type": "hr", "session": 111, "chamber": "house",
     "enacted": False, "vetoed": False, "introduced_at": datetime(2009, 1, 27)},
    {"bill_id": "s5-111", "code": "s5", "type": "s", "session": 111, "chamber": "senate",
     "enacted": False, "vetoed": False, "introduced_at": datetime(2009, 1, 6)},
    {"bill_id": "hr9-110", "code": "hr9", "type": "hr", "session": 110, "chamber": "house",
     "enacted": True, "vetoed": True, "introduced_at": datetime(2007, 3, 1),
     "enacted_at": datetime(2007, 9, 1)},
]

ROLLS = [
    {"roll_id": "h46-2009", "bill_id": "hr1-111", "chamber": "house", "session": 111,
     "voted_at": datetime(2009, 1, 29, 2, 6), "vote_breakdown": {"ayes": 244, "nays": 188}},
    {"roll_id": "s3-2009", "bill_id": None, "chamber": "senate", "session": 111,
     "voted_at": datetime(2009, 1, 8, 16, 45), "vote_breakdown": {"ayes": 60, "nays": 30}},
]


@pytest.fixture
def client(store, db):
    db.bills.insert_many([dict(bill) for bill in BILLS])
    db.rolls.insert_many([dict(roll) for roll in ROLLS])
    app.dependency_overrides[get_service] = lambda: QueryService(store)
    yield TestClient(app)
    app.dependency_overrides.clear()


def bill_ids(response):
    return [bill["bill_id"] for bill in response.json()["bills"]]


def test_bill_lookup(client):
    response = client.get("/api/bill.json", params={"bill_id": "hr1-111"})
    
    assert response.status_code == 200
    bill = response.json()["bill"]
    assert bill["code"] == "hr1"
    assert "_id" not in bill
    assert bill["introduced_at"] == "2009/01/26 00:00:00 +0000"
    assert bill["actions"][0]["acted_at"] == "2009/02/17 00:00:00 +0000"


def test_legislator_lookup_by_either_key(client):
    by_bioguide = client.get("/api/legislator.json", params={"bioguide_id": "C000003"}).json()
    by_govtrack = client.get("/api/legislator.json", params={"govtrack_id": "400003"}).json()
    
    assert by_bioguide == by_govtrack
    assert by_bioguide["legislator"]["last_name"] == "Chen"


def test_roll_lookup_with_sections(client):
    response = client.get("/api/roll.json", params={"roll_id": "h46-2009", "sections": "vote_breakdown.ayes"})
    
    assert response.json() == {"roll": {"vote_breakdown": {"ayes": 244, "nays": 188}}}


def test_sections_basic(client):
    bill = client.get("/api/bill.json", params={"bill_id": "hr1-111", "sections": "basic"}).json()["bill"]
    
    assert bill["enacted"] is True
    assert "sponsor" not in bill
    assert "actions" not in bill


def test_not_found(client):
    response = client.get("/api/bill.json", params={"bill_id": "hr404-111"})
    
    assert response.status_code == 404
    assert response.content == b""


def test_missing_key_is_not_found(client):
    response = client.get("/api/bill.json", params={"code": "hr1"})
    
    assert response.status_code == 404
    assert response.content == b""


def test_not_found_jsonp(client):
    response = client.get("/api/bill.json", params={"bill_id": "hr404-111", "callback": "handle"})
    
    assert response.status_code == 200
    assert response.text == 'handle({"error": {"code": 404, "message": "Bill not found"}});'


def test_unknown_route(client):
    response = client.get("/api/committee.json")
    
    assert response.status_code == 404
    assert response.content == b""


def test_lookup_jsonp(client):
    response = client.get("/api/roll.json", params={"roll_id": "s3-2009", "sections": "roll_id", "callback": "cb"})
    
    assert response.text == 'cb({"roll": {"roll_id": "s3-2009"}});'


def test_search_default_order(client):
    response = client.get("/api/bills.json")
    
    assert response.status_code == 200
    assert bill_ids(response) == ["hr2-111", "hr1-111", "s5-111", "hr9-110"]


def test_search_filters(client):
    assert bill_ids(client.get("/api/bills.json", params={"enacted": "true"})) == ["hr1-111", "hr9-110"]
    assert bill_ids(client.get("/api/bills.json", params={"enacted": "true", "session": "111"})) == ["hr1-111"]
    assert bill_ids(client.get("/api/bills.json", params={"chamber": "senate"})) == ["s5-111"]


def test_unparseable_filter_is_ignored(client):
    assert len(client.get("/api/bills.json", params={"enacted": "maybe"}).json()["bills"]) == 4


def test_search_order_and_sort(client):
    response = client.get("/api/bills.json", params={"order": "introduced_at", "sort": "asc"})
    
    assert bill_ids(response) == ["hr9-110", "s5-111", "hr1-111", "hr2-111"]


def test_search_pagination(client):
    page = client.get("/api/bills.json", params={"per_page": "2", "page": "2"})
    
    assert bill_ids(page) == ["s5-111", "hr9-110"]
    assert bill_ids(client.get("/api/bills.json", params={"per_page": "2", "page": "3"})) == []


def test_search_sections(client):
    response = client.get("/api/bills.json", params={"sections": "bill_id", "per_page": "1"})
    
    assert response.json() == {"bills": [{"bill_id": "hr2-111"}]}


def test_roll_search(client):
    response = client.get("/api/rolls.json", params={"bill_id": "hr1-111"})
    
    rolls = response.json()["rolls"]
    assert [roll["roll_id"] for roll in rolls] == ["h46-2009"]
    assert rolls[0]["voted_at"] == "2009/01/29 02:06:00 +0000"


def test_search_jsonp(client):
    response = client.get("/api/rolls.json", params={"sections": "roll_id", "callback": "update"})
    
    assert response.status_code == 200
    assert response.text.startswith("update(")
    assert response.text.endswith(");")
    assert json.loads(response.text[len("update("):-2]) == {
        "rolls": [{"roll_id": "h46-2009"}, {"roll_id": "s3-2009"}],
    }


def test_jsonp_is_javascript(client):
    jsonp = client.get("/api/roll.json", params={"roll_id": "s3-2009", "callback": "jQuery.cb_1"})
    plain = client.get("/api/roll.json", params={"roll_id": "s3-2009"})
    
    assert jsonp.headers["content-type"].startswith("application/javascript")
    assert plain.headers["content-type"].startswith("application/json")


@pytest.mark.parametrize("callback", [
    "alert(document.cookie)//",
    "<script>",
    "1handle",
    "handle\n",
    "cb;evil",
])
def test_bad_callback_is_rejected(client, callback):
    for path, params in [
        ("/api/bill.json", {"bill_id": "hr1-111"}),
        ("/api/bill.json", {"bill_id": "hr404-111"}),
        ("/api/bills.json", {}),
    ]:
        response = client.get(path, params={**params, "callback": callback})
        
        assert response.status_code == 400
        assert response.content == b""
