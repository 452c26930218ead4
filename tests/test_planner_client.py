"""
Tests for the Planner API client.

Requests are served by an in-process httpx.MockTransport, so no network
access is needed. Failures must fall back to mock data.
"""

import asyncio
import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx

from wedx_engine.core import get_ritual_task_generator
from wedx_engine.schemas import (
    ConflictDetectionRequest,
    RitualTaskGenerationRequest,
    RitualTimelineResponse,
    TimingConflict,
)
from wedx_engine.tools import (
    PlannerAPIClient,
    get_mock_conflict_detection_response,
    get_mock_ritual_task_response,
)

BASE_URL = "http://planner.test"


def _client(handler):
    return PlannerAPIClient(base_url=BASE_URL, timeout=5.0, transport=httpx.MockTransport(handler))


def _failing(request):
    return httpx.Response(500, json={"detail": "boom"})


class TestSuccessfulCalls:
    """Responses from the planner are parsed into models."""

    def test_generate_ritual_tasks(self):
        seen = {}
        generated = get_ritual_task_generator().generate_tasks(
            RitualTaskGenerationRequest(rituals=["nalangu"], wedding_date="2030-06-15")
        )

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=generated.model_dump(mode="json"))

        request = RitualTaskGenerationRequest(rituals=["nalangu"], wedding_date="2030-06-15")
        response = asyncio.run(_client(handler).generate_ritual_tasks("wedding-9", request))

        assert seen["url"] == f"{BASE_URL}/api/v1/weddings/wedding-9/ritual-tasks/generate"
        assert seen["body"]["wedding_id"] == "wedding-9"
        assert seen["body"]["rituals"] == ["nalangu"]
        assert len(response.tasks) == 3

    def test_detect_conflicts(self):
        body = get_mock_conflict_detection_response().model_dump(mode="json")

        def handler(request):
            return httpx.Response(200, json=body)

        request = ConflictDetectionRequest(events=[], vendors=[], wedding_type="traditional_sinhala")
        response = asyncio.run(_client(handler).detect_conflicts("wedding-1", request))

        assert isinstance(response.conflicts[0], TimingConflict)
        assert response.risk_assessment.critical_issues == 1

    def test_get_ritual_timeline(self):
        timeline = get_ritual_task_generator().get_ritual_timeline(["home_coming"], "2030-06-15")
        body = RitualTimelineResponse(wedding_id="wedding-1", timeline=timeline).model_dump(mode="json")

        def handler(request):
            return httpx.Response(200, json=body)

        entries = asyncio.run(_client(handler).get_ritual_timeline("wedding-1", ["home_coming"], "2030-06-15"))

        assert entries[0].ritual == "home_coming"
        assert len(entries[0].tasks) == 3

    def test_resolve_conflict(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "success": True,
                "message": "Conflict resolved successfully",
                "conflict_id": "conflict-1",
                "resolution_id": "resolution-1",
            })

        result = asyncio.run(_client(handler).resolve_conflict("wedding-1", "conflict-1", "resolution-1"))

        assert result.success is True
        assert seen["url"].endswith("/weddings/wedding-1/conflicts/conflict-1/resolve")
        assert seen["body"] == {"resolution_id": "resolution-1"}

    def test_dismiss_conflict(self):
        def handler(request):
            return httpx.Response(200, json={"success": True, "message": "Conflict dismissed successfully"})

        result = asyncio.run(_client(handler).dismiss_conflict("wedding-1", "conflict-1", "Not relevant"))
        assert result.message == "Conflict dismissed successfully"


class TestFallbacks:
    """Failures never raise; mock data or failed results are returned."""

    def test_generate_falls_back_to_mock(self):
        request = RitualTaskGenerationRequest(rituals=["poruwa"], wedding_date="2030-06-15")
        response = asyncio.run(_client(_failing).generate_ritual_tasks("wedding-1", request))
        assert response == get_mock_ritual_task_response()

    def test_detect_falls_back_to_mock(self):
        request = ConflictDetectionRequest(events=[], vendors=[], wedding_type="traditional_sinhala")
        response = asyncio.run(_client(_failing).detect_conflicts("wedding-1", request))

        assert response.conflicts[0].id == "conflict-1"
        assert response.risk_assessment.overall_risk.value == "medium"

    def test_timeline_falls_back_to_mock(self):
        entries = asyncio.run(_client(_failing).get_ritual_timeline("wedding-1", ["poruwa"], "2030-06-15"))
        assert entries[0].display_name == "Poruwa Ceremony"

    def test_malformed_body_falls_back(self):
        def handler(request):
            return httpx.Response(200, content=b"not json")

        entries = asyncio.run(_client(handler).get_ritual_timeline("wedding-1", ["poruwa"], "2030-06-15"))
        assert entries[0].ritual == "poruwa"

    def test_connection_error_falls_back(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        result = asyncio.run(_client(handler).resolve_conflict("wedding-1", "conflict-1", "resolution-1"))
        assert result.success is False
        assert result.message == "Failed to resolve conflict"

    def test_dismiss_failure(self):
        result = asyncio.run(_client(_failing).dismiss_conflict("wedding-1", "conflict-1", "Not relevant"))
        assert result.success is False
        assert result.message == "Failed to dismiss conflict"


class TestWeddingConflicts:
    """GET of the conflicts already held by the planner."""

    def test_get_wedding_conflicts(self):
        seen = {}
        body = get_mock_conflict_detection_response().model_dump(mode="json")

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            return httpx.Response(200, json=body)

        response = asyncio.run(_client(handler).get_wedding_conflicts("wedding-3"))

        assert seen["method"] == "GET"
        assert seen["url"] == f"{BASE_URL}/api/v1/weddings/wedding-3/conflicts"
        assert isinstance(response.conflicts[0], TimingConflict)

    def test_get_wedding_conflicts_falls_back(self):
        response = asyncio.run(_client(_failing).get_wedding_conflicts("wedding-3"))
        assert response.conflicts[0].id == "conflict-1"
        assert response.risk_assessment.critical_issues == 1
