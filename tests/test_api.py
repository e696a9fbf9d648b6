import asyncio

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from pydantic import ValidationError

import web.backend.routers.scorecard as scorecard_router
from scorecard.exceptions import SnapshotError
from scorecard.scorecard_service import ScorecardService
from web.backend.app import create_app


@pytest.fixture
def service(monkeypatch, registry):
    svc = ScorecardService(registry=registry)
    monkeypatch.setattr(scorecard_router, "get_scorecard_service", lambda: svc)
    return svc


def test_org_tree_endpoint(service):
    payload = asyncio.run(scorecard_router.get_org_tree(root_id=2, depth=None))

    assert [n["name"] for n in payload["data"]] == ["R&D"]


def test_goal_tree_endpoint_unknown_org_is_404(service):
    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(scorecard_router.get_goal_tree(404))

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == {"code": "NOT_FOUND", "message": "Org unit with id 404 not found"}


def test_summary_endpoint(service):
    payload = asyncio.run(scorecard_router.get_scorecard_summary())

    assert payload["data"]["enterprise_rag"] == "Amber"
    assert set(payload["data"]["totals"]) == {"green", "amber", "red", "not_started"}


def test_scorecard_endpoint_defaults_year(service):
    payload = asyncio.run(scorecard_router.get_scorecard(year=None, org_unit_id=None))

    assert len(payload["data"]) == 3


def test_alignments_endpoint_bad_type_is_400(service):
    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(scorecard_router.get_alignments(goal_id=None, alignment_type="tertiary"))

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail["code"] == "BAD_REQUEST"


def test_goal_and_person_endpoints(service):
    details = asyncio.run(scorecard_router.get_goal_details(40))
    owned = asyncio.run(scorecard_router.get_goals_for_person("Dr. Sarah Chen"))

    assert details["data"]["ancestor_ids"] == [30, 20, 10]
    assert [g["id"] for g in owned["data"]] == [30, 40]


def test_post_progress_assigns_version(service):
    req = scorecard_router.ProgressUpdateRequest(
        update_text="Automation live on 2 screens",
        author="Dr. Sarah Chen",
        percent_complete=50,
        rag_status="Not Started",
    )
    payload = asyncio.run(scorecard_router.add_progress_update(40, req))

    assert payload["data"]["version"] == 3
    assert payload["data"]["rag_status"] == "Not_Started"

    history = asyncio.run(scorecard_router.get_progress(40, latest=True))
    assert history["data"]["updates"][0]["version"] == 3


def test_post_progress_to_non_program_is_400(service):
    req = scorecard_router.ProgressUpdateRequest(update_text="n/a", author="x")

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(scorecard_router.add_progress_update(30, req))
    assert exc_info.value.status_code == 400


def test_progress_request_validates_percent():
    with pytest.raises(ValidationError):
        scorecard_router.ProgressUpdateRequest(update_text="x", author="y", percent_complete=101)


def test_timeline_endpoint(service):
    payload = asyncio.run(scorecard_router.get_progress_timeline(40))

    assert [e["title"] for e in payload["data"]] == ["v1 -- Green", "v2 -- Amber"]


def test_unreadable_snapshot_is_500(monkeypatch):
    def broken():
        raise SnapshotError("Cannot read snapshot", "/tmp/snapshot.json")

    monkeypatch.setattr(scorecard_router, "get_scorecard_service", broken)

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(scorecard_router.get_scorecard_summary())
    assert exc_info.value.status_code == 500
    assert exc_info.value.detail["code"] == "INTERNAL_ERROR"


def test_app_mounts_router_under_api_prefix():
    paths = {getattr(route, "path", None) for route in create_app().routes}

    assert "/api/v1/scorecard/summary" in paths
    assert "/api/v1/progress/{program_id}/timeline" in paths
    assert "/health" in paths


def test_http_round_trip(service):
    client = TestClient(create_app())

    ok = client.get("/api/v1/org-tree", params={"root_id": 1, "depth": 0})
    assert ok.status_code == 200
    assert ok.json()["data"][0]["children"] == []

    missing = client.get("/api/v1/goals/999")
    assert missing.status_code == 404
    assert missing.json()["detail"]["code"] == "NOT_FOUND"

    invalid = client.post("/api/v1/progress/40", json={"update_text": "x", "author": "y", "percent_complete": 150})
    assert invalid.status_code == 422


def test_objectives_endpoint(service):
    payload = asyncio.run(scorecard_router.get_quarterly_objectives(40, year=None, quarter="Q4"))

    assert [(o["year"], o["quarter"]) for o in payload["data"]] == [(2025, "Q4")]

    client = TestClient(create_app())
    assert client.get("/api/v1/programs/40/objectives", params={"year": 2026}).json()["data"][0]["quarter"] == "Q1"
    assert client.get("/api/v1/programs/999/objectives").status_code == 404
    assert client.get("/api/v1/programs/40/objectives", params={"quarter": "Q5"}).status_code == 400
