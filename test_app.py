"""
Tests for the Flask JSON API, using a temp save database and a seeded generator.
"""
import random

import pytest

import config
from app import app
from narrative.recap import MATCH_SUMMARY_FALLBACK, SCOUTING_REPORT_FALLBACK


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DB_DIR", str(tmp_path))
    monkeypatch.setattr(config, "GEMINI_API_KEY", "")
    app.config["TESTING"] = True
    app.config["RNG"] = random.Random(7)
    with app.test_client() as c:
        yield c
    app.config.pop("RNG", None)


def _new_league(client, **extra):
    body = {"name": "Test Squad", "title": "GM"}
    body.update(extra)
    resp = client.post("/api/new", json=body)
    assert resp.status_code == 200
    return resp.get_json()


def _finish_draft(client):
    resp = client.post("/api/draft/auto", json={"enabled": True})
    assert resp.status_code == 200
    return resp.get_json()


def test_no_save_is_404(client):
    assert client.get("/api/state").status_code == 404
    assert client.post("/api/season/advance").status_code == 404


def test_new_league_validation(client):
    assert client.post("/api/new", json={}).status_code == 400
    assert client.post("/api/new", json={"name": "X", "mode": "arcade"}).status_code == 400


def test_new_league_puts_user_on_the_clock(client):
    payload = _new_league(client, mode="dynasty")
    state = payload["state"]
    assert state["view"] == "draft"
    assert state["season"]["mode"] == "dynasty"
    draft = state["draft"]
    assert draft["order"][draft["currentPick"]] == state["playerTeamId"]
    user = next(t for t in state["teams"] if t["isPlayer"])
    assert user["title"] == "GM"


def test_draft_pick_then_cpu_follow_up(client):
    state = _new_league(client)["state"]
    target = state["draft"]["pool"][0]
    resp = client.post("/api/draft/pick", json={"playerId": target["id"]})
    payload = resp.get_json()
    assert payload["ok"]
    new = payload["state"]
    user = next(t for t in new["teams"] if t["isPlayer"])
    assert [p["id"] for p in user["roster"]] == [target["id"]]
    draft = new["draft"]
    assert draft["order"][draft["currentPick"]] == new["playerTeamId"]


def test_season_advance_with_recap(client):
    _new_league(client)
    early = client.post("/api/season/advance").get_json()
    assert not early["ok"]
    assert early["title"] == "Draft In Progress"

    drafted = _finish_draft(client)
    assert drafted["state"]["view"] == "dashboard"

    payload = client.post("/api/season/advance").get_json()
    assert payload["ok"]
    assert payload["state"]["season"]["week"] == 2
    assert payload["recap"] == MATCH_SUMMARY_FALLBACK
    assert client.get("/api/state").get_json()["state"]["season"]["week"] == 2


def test_standings(client):
    _new_league(client)
    _finish_draft(client)
    client.post("/api/season/advance")
    rows = client.get("/api/standings").get_json()["standings"]
    assert len(rows) == 8
    assert sum(r["wins"] for r in rows) == 4
    assert [r["wins"] for r in rows] == sorted((r["wins"] for r in rows), reverse=True)


def test_front_office_routes(client):
    _new_league(client)
    _finish_draft(client)
    snapshot = client.get("/api/export").get_json()
    for team in snapshot["teams"]:
        if team["isPlayer"]:
            team["budget"] = 1000
    assert client.post("/api/import", json=snapshot).status_code == 200

    assert client.post("/api/train", json={}).status_code == 400
    assert client.post("/api/train", json={"stat": "speed"}).status_code == 400
    trained = client.post("/api/train", json={"stat": "chem"}).get_json()
    assert trained["ok"]

    hired = client.post("/api/staff/hire", json={"role": "Recruiter", "name": "Scout", "tier": 0}).get_json()
    assert hired["ok"]
    assert client.post("/api/staff/hire", json={"role": "Recruiter"}).status_code == 400

    strategy = client.post("/api/strategy", json={"strategy": "Control"}).get_json()
    user = next(t for t in strategy["state"]["teams"] if t["isPlayer"])
    assert user["strategy"] == "Control"

    swapped = client.post("/api/roster/swap", json={"from": 0, "to": 1}).get_json()
    assert swapped["ok"]


def test_import_rejects_malformed_snapshot(client):
    _new_league(client)
    before = client.get("/api/export").get_json()

    resp = client.post("/api/import", json={"teams": []})
    assert resp.status_code == 400
    for bad in (
        {"teams": [{"id": "a", "trainingCounts": [1, 2]}], "playerTeamId": "a"},
        {"teams": [{"id": "a", "roster": [{"id": "p", "role": ["Rusher"]}]}], "playerTeamId": "a"},
        {"teams": [{"id": "a"}], "playerTeamId": "a", "view": ["dashboard"]},
        {"teams": [{"id": "a"}], "playerTeamId": "a", "draft": "x"},
    ):
        assert client.post("/api/import", json=bad).status_code == 400
    assert client.get("/api/export").get_json() == before

    resp = client.post("/api/import", json=before)
    assert resp.status_code == 200
    assert resp.get_json()["ok"]


def test_scouting_report(client):
    state = _new_league(client)["state"]
    pilot = state["draft"]["pool"][0]
    payload = client.get(f"/api/scouting/{pilot['id']}").get_json()
    assert payload["report"] == SCOUTING_REPORT_FALLBACK
    assert payload["development"] == {"aim": 0, "iq": 0}
    assert client.get("/api/scouting/nobody").status_code == 404
