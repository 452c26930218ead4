"""
wedX Ritual Engine Tools Package.

- planner_client: HTTP client for the remote planner API with mock fallback
"""

from .planner_client import (
    PlannerAPIClient,
    get_mock_conflict_detection_response,
    get_mock_ritual_task_response,
    get_mock_ritual_timeline,
)

__all__ = [
    "PlannerAPIClient",
    "get_mock_conflict_detection_response",
    "get_mock_ritual_task_response",
    "get_mock_ritual_timeline",
]
