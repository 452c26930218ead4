"""
Response Schemas for wedX Ritual Engine API.

This module defines the Pydantic models produced by the ritual task
generator and the conflict detector, plus the generic API envelopes.
All responses follow a consistent structure for client consumption.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Union
from datetime import datetime, timezone
from enum import Enum


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMERATIONS
# =============================================================================

class TaskCategory(str, Enum):
    """Ritual task categories"""
    RITUAL = "ritual"
    VENDOR = "vendor"
    LOGISTICS = "logistics"
    ATTIRE = "attire"
    FOOD = "food"
    DECORATION = "decoration"


class TaskPriority(str, Enum):
    """Ritual task priorities"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskStatus(str, Enum):
    """Point-in-time status of a task on the preparation timeline"""
    UPCOMING = "upcoming"
    DUE_SOON = "due_soon"
    OVERDUE = "overdue"


class ConflictType(str, Enum):
    """Conflict classifications"""
    TIMING = "timing"
    VENDOR = "vendor"
    RESOURCE = "resource"
    CULTURAL = "cultural"


class ConflictSeverity(str, Enum):
    """Conflict severity levels"""
    WARNING = "warning"
    CRITICAL = "critical"


class ConflictStatus(str, Enum):
    """Conflict lifecycle status (transitions are owned by the caller)"""
    ACTIVE = "active"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class ResolutionType(str, Enum):
    """Kinds of conflict resolution"""
    RESCHEDULE = "reschedule"
    CHANGE_VENDOR = "change_vendor"
    ADD_RESOURCE = "add_resource"
    DISMISS = "dismiss"


class EffortLevel(str, Enum):
    """Estimated effort to apply a resolution"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(str, Enum):
    """Overall planning risk"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# =============================================================================
# RITUAL TASKS
# =============================================================================

class RitualTask(BaseModel):
    """
    A concrete preparation task expanded from a ritual template.

    Attributes:
        id: Fresh identifier, unique per generation call
        template_id: Identifier of the template task (target of dependencies)
        estimated_days_before_event: Lead time before the wedding
        dependencies: Template task ids that must be completed first
        due_date: Wedding date minus the lead time
    """
    id: str
    template_id: str
    title: str
    description: str
    category: TaskCategory
    priority: TaskPriority
    ritual_type: str
    estimated_days_before_event: int
    recommended_vendor_types: Optional[List[str]] = None
    checklist_item_ids: Optional[List[str]] = None
    dependencies: Optional[List[str]] = None
    cultural_notes: Optional[str] = None
    due_date: Optional[datetime] = None


class TimelineTask(BaseModel):
    """A task placed on the preparation timeline."""
    task: RitualTask
    due_date: datetime
    status: TaskStatus


class RitualTimelineEntry(BaseModel):
    """Timeline for a single ritual."""
    ritual: str
    display_name: str
    tasks: List[TimelineTask] = Field(default_factory=list)


class RitualTimelineResponse(BaseModel):
    """Response model for the ritual timeline endpoint."""
    wedding_id: Optional[str] = None
    timeline: List[RitualTimelineEntry] = Field(default_factory=list)


class RitualValidationResult(BaseModel):
    """
    Result of validating a ritual configuration.

    Warnings never affect validity; any error makes the configuration invalid.
    """
    is_valid: bool
    warnings: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


# =============================================================================
# CONFLICTS
# =============================================================================

class ConflictResolutionOption(BaseModel):
    """A suggested way to resolve a conflict."""
    id: str
    type: ResolutionType
    title: str
    description: str
    estimated_effort: EffortLevel
    action_required: Optional[str] = None
    auto_resolvable: bool = False


class Conflict(BaseModel):
    """
    Base conflict record.

    Attributes:
        type: timing, vendor, resource or cultural
        severity: warning or critical
        affected_events: Event ids involved
        affected_vendors: Vendor ids involved
        resolution_options: Ordered resolution suggestions
        status: Always "active" when produced by the detector
    """
    id: str
    type: ConflictType
    severity: ConflictSeverity
    title: str
    description: str
    affected_events: List[str] = Field(default_factory=list)
    affected_vendors: List[str] = Field(default_factory=list)
    resolution_options: List[ConflictResolutionOption] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utc_now)
    status: ConflictStatus = ConflictStatus.ACTIVE


class ConflictingEvent(BaseModel):
    """Per-event detail of a timing conflict."""
    event_id: str
    event_name: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    overlap_duration: int = Field(0, description="Overlap in minutes")


class RecommendedSlot(BaseModel):
    """Suggested alternative time slot."""
    date: str
    start_time: str
    end_time: str
    reason: str


class TimingConflict(Conflict):
    """Two events on the same date overlap or leave too little buffer."""
    type: ConflictType = ConflictType.TIMING
    conflicting_events: List[ConflictingEvent]
    recommended_slots: Optional[List[RecommendedSlot]] = None


class ConflictingBooking(BaseModel):
    """One booking row of a double-booked vendor."""
    event_id: str
    event_name: str
    service_type: str
    date: str
    time: str


class AlternativeVendor(BaseModel):
    """Another vendor that could take over a conflicting booking."""
    vendor_id: str
    vendor_name: str
    match_score: float = Field(..., ge=0, le=1)
    availability: List[str] = Field(default_factory=list)


class VendorConflict(Conflict):
    """A vendor is booked for several events on the same date."""
    type: ConflictType = ConflictType.VENDOR
    vendor_id: str
    vendor_name: str
    conflicting_bookings: List[ConflictingBooking]
    alternative_vendors: Optional[List[AlternativeVendor]] = None


class CulturalConflict(Conflict):
    """A plan element that breaks a tradition. Not produced yet."""
    type: ConflictType = ConflictType.CULTURAL
    tradition: str
    violation: str
    cultural_context: str
    alternative_suggestions: List[str] = Field(default_factory=list)


AnyConflict = Union[TimingConflict, VendorConflict, CulturalConflict, Conflict]


class RiskAssessment(BaseModel):
    """Coarse aggregate classification of the detected conflicts."""
    overall_risk: RiskLevel
    critical_issues: int
    warnings: int
    recommendations: int


# =============================================================================
# ENGINE RESPONSES
# =============================================================================

class RitualTaskGenerationResponse(BaseModel):
    """
    Response model for ritual task generation.

    Attributes:
        tasks: Generated tasks, highest priority and nearest deadline first
        conflicts: Always empty; conflicts come from the conflict detector
        recommendations: Cultural recommendations for the selected rituals
        cultural_notes: Background notes for the couple
    """
    tasks: List[RitualTask] = Field(default_factory=list)
    conflicts: List[AnyConflict] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    cultural_notes: List[str] = Field(default_factory=list)


class ConflictDetectionResponse(BaseModel):
    """
    Response model for conflict detection.

    Attributes:
        conflicts: Timing, vendor and cultural conflicts (in that order)
        warnings: Summary lines per severity
        suggestions: General planning suggestions
        risk_assessment: Aggregate risk
    """
    conflicts: List[AnyConflict] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    risk_assessment: RiskAssessment


class ConflictActionResult(BaseModel):
    """Outcome of a resolve or dismiss call."""
    success: bool
    message: str


class ResolveConflictResponse(ConflictActionResult):
    """Response model for the resolve endpoint."""
    conflict_id: str
    resolution_id: str
    applied_changes: List[str] = Field(default_factory=list)


class DismissConflictResponse(ConflictActionResult):
    """Response model for the dismiss endpoint."""
    conflict_id: str
    dismissal_reason: str
    dismissed_at: datetime = Field(default_factory=_utc_now)


# =============================================================================
# CATALOG & SYSTEM
# =============================================================================

class RitualSummary(BaseModel):
    """Catalog entry for a ritual template."""
    ritual_type: str
    display_name: str
    description: str
    task_count: int
    min_days_before_wedding: Optional[int] = None
    max_days_before_wedding: Optional[int] = None
    required_vendor_types: List[str] = Field(default_factory=list)
    optional_vendor_types: List[str] = Field(default_factory=list)
    cultural_preferences: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """
    Response model for health check endpoint.

    Attributes:
        status: Service health status
        version: API version
        components: Status of individual components
    """
    status: str = Field(default="healthy")
    version: str
    components: Dict[str, str] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "components": {
                    "ritual_catalog": "available (5 rituals)",
                    "task_generator": "available",
                    "conflict_detector": "available"
                }
            }
        }


class ErrorResponse(BaseModel):
    """
    Response model for error responses.

    Attributes:
        error: Error type
        message: Human-readable error message
        details: Additional error details
    """
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None
