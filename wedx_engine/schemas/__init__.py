"""
Pydantic schemas for the wedX Ritual Engine API.

This package contains request and response models for all API endpoints.
"""

from .requests import (
    CurrentEvent,
    CurrentVendor,
    RitualTaskGenerationRequest,
    RitualScheduleRequest,
    EventInput,
    VendorInput,
    ConflictDetectionRequest,
    ResolveConflictRequest,
    DismissConflictRequest,
)
from .responses import (
    TaskCategory,
    TaskPriority,
    TaskStatus,
    ConflictType,
    ConflictSeverity,
    ConflictStatus,
    ResolutionType,
    EffortLevel,
    RiskLevel,
    RitualTask,
    TimelineTask,
    RitualTimelineEntry,
    RitualTimelineResponse,
    RitualValidationResult,
    ConflictResolutionOption,
    Conflict,
    TimingConflict,
    VendorConflict,
    CulturalConflict,
    RiskAssessment,
    RitualTaskGenerationResponse,
    ConflictDetectionResponse,
    ConflictActionResult,
    ResolveConflictResponse,
    DismissConflictResponse,
    RitualSummary,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    # Requests
    "CurrentEvent",
    "CurrentVendor",
    "RitualTaskGenerationRequest",
    "RitualScheduleRequest",
    "EventInput",
    "VendorInput",
    "ConflictDetectionRequest",
    "ResolveConflictRequest",
    "DismissConflictRequest",
    # Enumerations
    "TaskCategory",
    "TaskPriority",
    "TaskStatus",
    "ConflictType",
    "ConflictSeverity",
    "ConflictStatus",
    "ResolutionType",
    "EffortLevel",
    "RiskLevel",
    # Responses
    "RitualTask",
    "TimelineTask",
    "RitualTimelineEntry",
    "RitualTimelineResponse",
    "RitualValidationResult",
    "ConflictResolutionOption",
    "Conflict",
    "TimingConflict",
    "VendorConflict",
    "CulturalConflict",
    "RiskAssessment",
    "RitualTaskGenerationResponse",
    "ConflictDetectionResponse",
    "ConflictActionResult",
    "ResolveConflictResponse",
    "DismissConflictResponse",
    "RitualSummary",
    "HealthResponse",
    "ErrorResponse",
]
