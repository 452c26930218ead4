"""
wedX Ritual Engine: FastAPI Application Entry Point.

This module defines the FastAPI application that exposes ritual task
generation and conflict detection to the wedX planning front end.

Architecture:
    Endpoints are thin: they validate request bodies, call the stateless
    engines in ``wedx_engine.core`` and return their pydantic results.
    Conflict resolve/dismiss endpoints acknowledge the action; conflict
    status is owned by the caller.

Endpoints:
    - POST /api/v1/weddings/{id}/ritual-tasks/generate: Ritual task generation
    - POST /api/v1/weddings/{id}/ritual-tasks/timeline: Preparation timeline
    - POST /api/v1/weddings/{id}/ritual-tasks/validate: Configuration check
    - POST /api/v1/weddings/{id}/conflicts/detect: Conflict detection
    - POST /api/v1/weddings/{id}/conflicts/{conflict_id}/resolve
    - POST /api/v1/weddings/{id}/conflicts/{conflict_id}/dismiss
    - GET /api/v1/rituals: Ritual template catalog
    - GET /api/v1/health: Service health check
"""

import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core import (
    RITUAL_TEMPLATES,
    RitualTemplate,
    get_conflict_detector,
    get_ritual_task_generator,
    get_ritual_template,
)
from .schemas import (
    RitualTaskGenerationRequest,
    RitualScheduleRequest,
    ConflictDetectionRequest,
    ResolveConflictRequest,
    DismissConflictRequest,
    RitualTaskGenerationResponse,
    RitualTimelineResponse,
    RitualValidationResult,
    ConflictDetectionResponse,
    ResolveConflictResponse,
    DismissConflictResponse,
    RitualSummary,
    HealthResponse,
    ErrorResponse,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager for startup/shutdown events.

    Startup:
        - Initialize the task generator and conflict detector singletons
    """
    # Startup
    logger.info(f"Starting {settings.APP_NAME}...")

    try:
        get_ritual_task_generator()
        get_conflict_detector()
        logger.info(f"Engines initialized: {len(RITUAL_TEMPLATES)} ritual templates")
    except Exception as e:
        logger.error(f"Failed to initialize engines: {e}")

    logger.info(f"{settings.APP_NAME} ready on port {settings.PORT} ({settings.ENVIRONMENT})")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    ## wedX Ritual Engine

    Planning rules for Sri Lankan weddings:

    - **Ritual tasks**: Poruwa, Home Coming, Reception, Engagement and Nalangu
      templates expanded into dated, prioritized preparation tasks
    - **Timeline**: Overdue / due soon / upcoming status per task
    - **Validation**: Wedding date and ritual timing constraints
    - **Conflicts**: Overlapping events, tight buffers, vendor double-booking
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# RITUAL TASK ENDPOINTS
# =============================================================================

@app.post(
    f"{settings.API_V1_PREFIX}/weddings/{{wedding_id}}/ritual-tasks/generate",
    response_model=RitualTaskGenerationResponse,
    tags=["Ritual Tasks"],
    summary="Generate ritual preparation tasks",
    description="""
    Expand the selected rituals into preparation tasks.

    Tasks are sorted by priority (high first) and then by lead time.
    Unknown ritual identifiers are ignored.
    """
)
async def generate_ritual_tasks(wedding_id: str, request: RitualTaskGenerationRequest):
    """
    Generate ritual tasks for a wedding.

    Args:
        wedding_id: Wedding identifier from the path
        request: Selected rituals and wedding date

    Returns:
        RitualTaskGenerationResponse with tasks, recommendations and notes
    """
    if not request.rituals:
        raise HTTPException(status_code=400, detail="Rituals array is required")
    if not request.wedding_date:
        raise HTTPException(status_code=400, detail="Wedding date is required")

    try:
        generator = get_ritual_task_generator()
        return generator.generate_tasks(request.model_copy(update={"wedding_id": wedding_id}))

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error generating ritual tasks: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate ritual tasks")


@app.post(
    f"{settings.API_V1_PREFIX}/weddings/{{wedding_id}}/ritual-tasks/timeline",
    response_model=RitualTimelineResponse,
    tags=["Ritual Tasks"],
    summary="Ritual preparation timeline",
    description="Due date and overdue / due soon / upcoming status for every ritual task."
)
async def get_ritual_timeline(wedding_id: str, request: RitualScheduleRequest):
    """Build the preparation timeline relative to the current time."""
    if not request.wedding_date:
        raise HTTPException(status_code=400, detail="Wedding date is required")

    try:
        generator = get_ritual_task_generator()
        timeline = generator.get_ritual_timeline(request.rituals, request.wedding_date)
        return RitualTimelineResponse(wedding_id=wedding_id, timeline=timeline)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error building ritual timeline: {e}")
        raise HTTPException(status_code=500, detail="Failed to build ritual timeline")


@app.post(
    f"{settings.API_V1_PREFIX}/weddings/{{wedding_id}}/ritual-tasks/validate",
    response_model=RitualValidationResult,
    tags=["Ritual Tasks"],
    summary="Validate ritual configuration",
    description="Check the wedding date and each ritual's timing constraints."
)
async def validate_ritual_configuration(wedding_id: str, request: RitualScheduleRequest):
    """Validation problems are returned in the body, not as HTTP errors."""
    if not request.wedding_date:
        raise HTTPException(status_code=400, detail="Wedding date is required")

    try:
        generator = get_ritual_task_generator()
        return generator.validate_ritual_configuration(request.rituals, request.wedding_date)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error validating ritual configuration for {wedding_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to validate ritual configuration")


# =============================================================================
# CONFLICT ENDPOINTS
# =============================================================================

@app.post(
    f"{settings.API_V1_PREFIX}/weddings/{{wedding_id}}/conflicts/detect",
    response_model=ConflictDetectionResponse,
    tags=["Conflicts"],
    summary="Detect planning conflicts",
    description="""
    Detect conflicts between wedding events and vendors.

    - Overlapping events on the same date (critical above 60 minutes)
    - Less than 30 minutes between events on the same date
    - Vendors booked for several events on the same date
    """
)
async def detect_conflicts(wedding_id: str, request: ConflictDetectionRequest):
    """
    Detect conflicts for a wedding.

    Args:
        wedding_id: Wedding identifier from the path
        request: Events, vendors and wedding type

    Returns:
        ConflictDetectionResponse with conflicts, warnings and risk assessment
    """
    if request.events is None:
        raise HTTPException(status_code=400, detail="Events array is required")
    if request.vendors is None:
        raise HTTPException(status_code=400, detail="Vendors array is required")
    if not request.wedding_type:
        raise HTTPException(status_code=400, detail="Wedding type is required")

    try:
        detector = get_conflict_detector()
        return detector.detect_conflicts(request.model_copy(update={"wedding_id": wedding_id}))

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error detecting conflicts: {e}")
        raise HTTPException(status_code=500, detail="Failed to detect conflicts")


@app.post(
    f"{settings.API_V1_PREFIX}/weddings/{{wedding_id}}/conflicts/{{conflict_id}}/resolve",
    response_model=ResolveConflictResponse,
    tags=["Conflicts"],
    summary="Resolve a conflict",
    description="Acknowledge the chosen resolution option for a conflict."
)
async def resolve_conflict(wedding_id: str, conflict_id: str, request: ResolveConflictRequest):
    """The conflict's status change is persisted by the caller."""
    if not request.resolution_id:
        raise HTTPException(status_code=400, detail="Resolution ID is required")

    logger.info(f"Conflict {conflict_id} of wedding {wedding_id} resolved with {request.resolution_id}")

    return ResolveConflictResponse(
        success=True,
        message="Conflict resolved successfully",
        conflict_id=conflict_id,
        resolution_id=request.resolution_id,
        applied_changes=[
            "Event timing updated",
            "Vendor assignments adjusted",
            "Notifications sent to relevant parties",
        ],
    )


@app.post(
    f"{settings.API_V1_PREFIX}/weddings/{{wedding_id}}/conflicts/{{conflict_id}}/dismiss",
    response_model=DismissConflictResponse,
    tags=["Conflicts"],
    summary="Dismiss a conflict",
    description="Dismiss a conflict with a reason."
)
async def dismiss_conflict(wedding_id: str, conflict_id: str, request: DismissConflictRequest):
    """The conflict's status change is persisted by the caller."""
    reason = (request.reason or "").strip()
    if not reason:
        raise HTTPException(status_code=400, detail="Reason for dismissal is required")

    logger.info(f"Conflict {conflict_id} of wedding {wedding_id} dismissed: {reason}")

    return DismissConflictResponse(
        success=True,
        message="Conflict dismissed successfully",
        conflict_id=conflict_id,
        dismissal_reason=reason,
    )


# =============================================================================
# CATALOG ENDPOINTS
# =============================================================================

def _summarize(template: RitualTemplate) -> RitualSummary:
    constraints = template.timing_constraints
    requirements = template.vendor_requirements
    return RitualSummary(
        ritual_type=template.ritual_type,
        display_name=template.display_name,
        description=template.description,
        task_count=len(template.tasks),
        min_days_before_wedding=constraints.min_days_before_wedding if constraints else None,
        max_days_before_wedding=constraints.max_days_before_wedding if constraints else None,
        required_vendor_types=list(requirements.required_types) if requirements else [],
        optional_vendor_types=list(requirements.optional_types) if requirements else [],
        cultural_preferences=list(requirements.cultural_preferences) if requirements else [],
    )


@app.get(
    f"{settings.API_V1_PREFIX}/rituals",
    response_model=List[RitualSummary],
    tags=["Catalog"],
    summary="List ritual templates"
)
async def list_rituals():
    """All rituals with a preparation template, in catalog order."""
    return [_summarize(template) for template in RITUAL_TEMPLATES.values()]


@app.get(
    f"{settings.API_V1_PREFIX}/rituals/{{ritual_type}}",
    response_model=RitualSummary,
    tags=["Catalog"],
    summary="Get a ritual template"
)
async def get_ritual(ritual_type: str):
    """Single ritual template summary."""
    template = get_ritual_template(ritual_type)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Unknown ritual type: {ritual_type}")
    return _summarize(template)


# =============================================================================
# SYSTEM ENDPOINTS
# =============================================================================

@app.get(
    f"{settings.API_V1_PREFIX}/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Health check",
    description="Check the health of all system components."
)
async def health_check():
    """Health check endpoint."""
    components = {}

    components["ritual_catalog"] = f"available ({len(RITUAL_TEMPLATES)} rituals)"

    try:
        get_ritual_task_generator()
        components["task_generator"] = "available"
    except Exception as e:
        logger.warning(f"Task generator unavailable: {e}")
        components["task_generator"] = "error"

    try:
        get_conflict_detector()
        components["conflict_detector"] = "available"
    except Exception as e:
        logger.warning(f"Conflict detector unavailable: {e}")
        components["conflict_detector"] = "error"

    errors = [v for v in components.values() if "error" in str(v).lower()]
    status = "healthy" if not errors else "degraded"

    return HealthResponse(
        status=status,
        version=settings.APP_VERSION,
        components=components
    )


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    wedding = f"{settings.API_V1_PREFIX}/weddings/{{wedding_id}}"
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "docs": "/docs",
        "endpoints": {
            "health": f"{settings.API_V1_PREFIX}/health",
            "rituals": f"{settings.API_V1_PREFIX}/rituals",
            "ritual_tasks": {
                "generate": f"{wedding}/ritual-tasks/generate",
                "timeline": f"{wedding}/ritual-tasks/timeline",
                "validate": f"{wedding}/ritual-tasks/validate"
            },
            "conflicts": {
                "detect": f"{wedding}/conflicts/detect",
                "resolve": f"{wedding}/conflicts/{{conflict_id}}/resolve",
                "dismiss": f"{wedding}/conflicts/{{conflict_id}}/dismiss"
            }
        }
    }


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}")
    error = ErrorResponse(
        error="internal_error",
        message="An unexpected error occurred",
        details={"exception": str(exc)} if settings.DEBUG else None
    )
    return JSONResponse(status_code=500, content=error.model_dump())
