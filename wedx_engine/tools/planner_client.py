"""
Planner API Client for the wedX front end and other services.

Forwards ritual task generation, timeline, conflict detection and conflict
resolve/dismiss calls to a remote wedX planner service over HTTP.

Any transport failure, non-2xx status or malformed body is logged and
replaced with canned mock data (or an unsuccessful action result for
resolve/dismiss), so callers never see an exception.

Usage:
    client = PlannerAPIClient()
    response = await client.detect_conflicts("wedding-1", request)
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from ..schemas.requests import ConflictDetectionRequest, RitualTaskGenerationRequest
from ..schemas.responses import (
    ConflictActionResult,
    ConflictDetectionResponse,
    ConflictResolutionOption,
    ConflictSeverity,
    ConflictType,
    EffortLevel,
    ResolutionType,
    RiskAssessment,
    RiskLevel,
    RitualTask,
    RitualTaskGenerationResponse,
    RitualTimelineEntry,
    RitualTimelineResponse,
    TaskCategory,
    TaskPriority,
    TaskStatus,
    TimelineTask,
    TimingConflict,
    ConflictingEvent,
)

logger = logging.getLogger(__name__)


# ============================================================================
# PLANNER API CLIENT
# ============================================================================

class PlannerAPIClient:
    """Client for the wedX planner API with mock-data fallback"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url if base_url is not None else settings.PLANNER_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.PLANNER_API_TIMEOUT
        self.transport = transport

    def _wedding_url(self, wedding_id: str, path: str) -> str:
        return f"{self.base_url}{settings.API_V1_PREFIX}/weddings/{wedding_id}/{path}"

    async def _post(self, url: str, payload: Dict[str, Any]) -> Any:
        """POST JSON and return the decoded body; raises on any failure."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(url, json=payload)
            response.raise_for_status()
            return response.json()

    async def _get(self, url: str) -> Any:
        """GET and return the decoded body; raises on any failure."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.json()

    async def generate_ritual_tasks(
        self,
        wedding_id: str,
        request: RitualTaskGenerationRequest
    ) -> RitualTaskGenerationResponse:
        """Generate ritual-based tasks for a wedding."""
        payload = request.model_dump(mode="json")
        payload["wedding_id"] = wedding_id
        try:
            body = await self._post(self._wedding_url(wedding_id, "ritual-tasks/generate"), payload)
            return RitualTaskGenerationResponse.model_validate(body)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error generating ritual tasks: {e}")
            return get_mock_ritual_task_response()

    async def detect_conflicts(
        self,
        wedding_id: str,
        request: ConflictDetectionRequest
    ) -> ConflictDetectionResponse:
        """Detect conflicts in wedding planning."""
        payload = request.model_dump(mode="json")
        payload["wedding_id"] = wedding_id
        try:
            body = await self._post(self._wedding_url(wedding_id, "conflicts/detect"), payload)
            return ConflictDetectionResponse.model_validate(body)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error detecting conflicts: {e}")
            return get_mock_conflict_detection_response()

    async def get_wedding_conflicts(self, wedding_id: str) -> ConflictDetectionResponse:
        """Get the conflicts the planner currently holds for a wedding."""
        try:
            body = await self._get(self._wedding_url(wedding_id, "conflicts"))
            return ConflictDetectionResponse.model_validate(body)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error getting conflicts: {e}")
            return get_mock_conflict_detection_response()

    async def get_ritual_timeline(
        self,
        wedding_id: str,
        rituals: List[str],
        wedding_date: str
    ) -> List[RitualTimelineEntry]:
        """Get the ritual preparation timeline for a wedding."""
        payload = {"rituals": rituals, "wedding_date": wedding_date}
        try:
            body = await self._post(self._wedding_url(wedding_id, "ritual-tasks/timeline"), payload)
            return RitualTimelineResponse.model_validate(body).timeline
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error getting ritual timeline: {e}")
            return get_mock_ritual_timeline()

    async def resolve_conflict(
        self,
        wedding_id: str,
        conflict_id: str,
        resolution_id: str
    ) -> ConflictActionResult:
        """Apply a resolution option to a conflict."""
        url = self._wedding_url(wedding_id, f"conflicts/{conflict_id}/resolve")
        try:
            body = await self._post(url, {"resolution_id": resolution_id})
            return ConflictActionResult.model_validate(body)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error resolving conflict: {e}")
            return ConflictActionResult(success=False, message="Failed to resolve conflict")

    async def dismiss_conflict(
        self,
        wedding_id: str,
        conflict_id: str,
        reason: Optional[str] = None
    ) -> ConflictActionResult:
        """Dismiss a conflict with a free-text reason."""
        url = self._wedding_url(wedding_id, f"conflicts/{conflict_id}/dismiss")
        try:
            body = await self._post(url, {"reason": reason})
            return ConflictActionResult.model_validate(body)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error dismissing conflict: {e}")
            return ConflictActionResult(success=False, message="Failed to dismiss conflict")


# ============================================================================
# MOCK DATA (development fallback)
# ============================================================================

def get_mock_ritual_task_response() -> RitualTaskGenerationResponse:
    """Canned task generation response for a Poruwa ceremony."""
    return RitualTaskGenerationResponse(
        tasks=[
            RitualTask(
                id="ritual-task-1",
                template_id="poruwa-1",
                title="Book Poruwa ceremony venue",
                description="Reserve a venue that can accommodate the traditional Poruwa setup with adequate space for guests",
                category=TaskCategory.LOGISTICS,
                priority=TaskPriority.HIGH,
                ritual_type="poruwa",
                estimated_days_before_event=90,
                recommended_vendor_types=["venue", "event_planner"],
                cultural_notes="The venue should have space for the traditional Poruwa structure and guest seating",
            ),
            RitualTask(
                id="ritual-task-2",
                template_id="poruwa-2",
                title="Hire Poruwa ceremony officiant (Nekath Nilame)",
                description="Book an experienced officiant who can conduct the traditional Poruwa ceremony",
                category=TaskCategory.RITUAL,
                priority=TaskPriority.HIGH,
                ritual_type="poruwa",
                estimated_days_before_event=60,
                recommended_vendor_types=["officiant", "religious_services"],
                cultural_notes="The Nekath Nilame should be well-versed in traditional Sinhalese customs",
            ),
        ],
        conflicts=[],
        recommendations=[
            "Consider consulting with an experienced astrologer for auspicious timing",
            "Ensure the Poruwa structure faces the correct direction according to tradition",
        ],
        cultural_notes=[
            "The Poruwa ceremony is a sacred tradition that symbolizes the union of two families",
            "Traditional attire adds authenticity and respect to the ceremony",
        ],
    )


def get_mock_conflict_detection_response() -> ConflictDetectionResponse:
    """Canned conflict detection response with one critical timing conflict."""
    return ConflictDetectionResponse(
        conflicts=[
            TimingConflict(
                id="conflict-1",
                type=ConflictType.TIMING,
                severity=ConflictSeverity.CRITICAL,
                title="Event Timing Conflict",
                description="Poruwa Ceremony and Reception have overlapping schedules on 2024-06-15",
                affected_events=["event-1", "event-2"],
                affected_vendors=["vendor-1", "vendor-2"],
                conflicting_events=[
                    ConflictingEvent(
                        event_id="event-1",
                        event_name="Poruwa Ceremony",
                        start_time="09:00",
                        end_time="12:00",
                        overlap_duration=90,
                    ),
                    ConflictingEvent(
                        event_id="event-2",
                        event_name="Reception",
                        start_time="10:30",
                        end_time="16:00",
                        overlap_duration=90,
                    ),
                ],
                resolution_options=[
                    ConflictResolutionOption(
                        id="resolution-1",
                        type=ResolutionType.RESCHEDULE,
                        title="Reschedule Events",
                        description="Move Reception to avoid overlap with Poruwa Ceremony",
                        estimated_effort=EffortLevel.MEDIUM,
                        action_required="Contact venues and vendors to check availability for new timing",
                        auto_resolvable=False,
                    )
                ],
            )
        ],
        warnings=["1 critical conflicts require immediate attention"],
        suggestions=[
            "Consider spreading events across multiple days to avoid timing conflicts",
            "Regularly review and update your wedding timeline",
        ],
        risk_assessment=RiskAssessment(
            overall_risk=RiskLevel.MEDIUM,
            critical_issues=1,
            warnings=0,
            recommendations=0,
        ),
    )


def get_mock_ritual_timeline() -> List[RitualTimelineEntry]:
    """Canned timeline with a single Poruwa task."""
    task = RitualTask(
        id="ritual-task-1",
        template_id="poruwa-1",
        title="Book Poruwa ceremony venue",
        description="Reserve a venue that can accommodate the traditional Poruwa setup with adequate space for guests",
        category=TaskCategory.LOGISTICS,
        priority=TaskPriority.HIGH,
        ritual_type="poruwa",
        estimated_days_before_event=90,
        due_date="2024-03-17T00:00:00Z",
    )
    return [
        RitualTimelineEntry(
            ritual="poruwa",
            display_name="Poruwa Ceremony",
            tasks=[TimelineTask(task=task, due_date=task.due_date, status=TaskStatus.UPCOMING)],
        )
    ]
