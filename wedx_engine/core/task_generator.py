"""
Ritual Task Generator: expands selected rituals into dated preparation tasks.

For every selected ritual with a catalog template, each task template is
instantiated with a fresh identifier and a due date resolved once as
``wedding date - lead time``. Tasks are ordered by priority (high first)
and then by lead time (nearest deadline first).

The generator also produces cultural recommendations and notes, the
preparation timeline (point-in-time task status relative to "now") and a
validation of the ritual configuration against the wedding date.
"""

import logging
import math
from datetime import datetime
from typing import Dict, List, Optional

from ..config import settings
from ..schemas.requests import RitualTaskGenerationRequest
from ..schemas.responses import (
    RitualTask,
    RitualTaskGenerationResponse,
    RitualTimelineEntry,
    RitualValidationResult,
    TaskPriority,
    TaskStatus,
    TimelineTask,
)
from .ritual_templates import (
    RITUAL_TEMPLATES,
    RitualTemplate,
    RitualType,
    TaskTemplate,
    get_ritual_display_name,
    get_tasks_for_rituals,
)
from .utils import as_utc, days_until, generate_id, parse_iso_datetime, subtract_days

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

PRIORITY_RANK: Dict[TaskPriority, int] = {
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}

# Checked in this order, whatever order the caller selected rituals in
RITUAL_RECOMMENDATIONS: Dict[str, List[str]] = {
    RitualType.PORUWA.value: [
        "Consider consulting with an experienced astrologer for auspicious timing",
        "Ensure the Poruwa structure faces the correct direction according to tradition",
        "Prepare traditional gifts for the officiant and participants",
    ],
    RitualType.HOME_COMING.value: [
        "Coordinate with both families for the welcoming ceremony timing",
        "Prepare traditional sweets and refreshments for guests",
    ],
    RitualType.RECEPTION.value: [
        "Plan the reception menu to include traditional Sri Lankan wedding sweets",
        "Consider traditional entertainment like drummers or dancers",
    ],
    RitualType.ENGAGEMENT.value: [
        "Ensure both families are comfortable with the engagement ceremony format",
        "Prepare traditional engagement gifts and blessings",
    ],
    RitualType.NALANGU.value: [
        "Schedule the Nalangu ceremony with sufficient time before the wedding",
        "Ensure privacy and comfort for the traditional beautification process",
    ],
}

GENERAL_RECOMMENDATIONS = [
    "Consult with family elders about specific cultural requirements",
    "Consider hiring vendors experienced in traditional Sri Lankan weddings",
    "Allow extra time for cultural preparations and ceremonies",
]

RITUAL_CULTURAL_NOTES: Dict[str, List[str]] = {
    RitualType.PORUWA.value: [
        "The Poruwa ceremony is a sacred tradition that symbolizes the union of two families",
        "Traditional attire adds authenticity and respect to the ceremony",
        "The Jayamangala Gatha chanting creates a spiritually uplifting atmosphere",
    ],
    RitualType.HOME_COMING.value: [
        "The home coming ceremony represents the bride's welcome into her new family",
        "This is often an intimate ceremony with close family members",
        "Traditional welcoming items symbolize prosperity and happiness",
    ],
    RitualType.RECEPTION.value: [
        "The reception is a celebration of your union with extended family and friends",
        "Traditional entertainment adds cultural richness to the celebration",
        "Consider dietary restrictions and preferences when planning the menu",
    ],
    RitualType.ENGAGEMENT.value: [
        "The engagement ceremony formalizes your commitment to each other",
        "This is an opportunity for both families to bond and celebrate",
        "Traditional rings and blessings symbolize your future together",
    ],
    RitualType.NALANGU.value: [
        "The Nalangu ceremony is a traditional beautification process",
        "This ceremony is meant to prepare you physically and spiritually for marriage",
        "The natural ingredients used have symbolic and practical benefits",
    ],
}

GENERAL_CULTURAL_NOTES = [
    "Wedding customs differ between families, so agree on the rituals early with both sides",
    "Auspicious times (Nekath) set by the family astrologer take precedence over vendor schedules",
    "Explaining the meaning of each ritual helps guests take part respectfully",
]

PORUWA_RELIGIOUS_SPACING_WARNING = (
    "Consider scheduling Poruwa and religious ceremonies on different days "
    "or with adequate time between them"
)
PAST_WEDDING_DATE_ERROR = "Wedding date cannot be in the past"


# =============================================================================
# RITUAL TASK GENERATOR
# =============================================================================

class RitualTaskGenerator:
    """
    Expands ritual templates into concrete, dated preparation tasks.

    The generator is stateless: every call reads the static catalog and the
    wall clock (overridable through ``now`` for the time-dependent methods).

    Example:
        >>> generator = RitualTaskGenerator()
        >>> response = generator.generate_tasks(RitualTaskGenerationRequest(
        ...     rituals=["poruwa"], wedding_date="2026-06-15"))
        >>> len(response.tasks)
        6
    """

    def __init__(self, due_soon_days: Optional[int] = None):
        """
        Args:
            due_soon_days: Window in which a timeline task counts as due soon
        """
        self.due_soon_days = due_soon_days if due_soon_days is not None else settings.DUE_SOON_DAYS
        self.templates: Dict[str, RitualTemplate] = RITUAL_TEMPLATES

        logger.info(
            f"RitualTaskGenerator initialized: {len(self.templates)} ritual templates, "
            f"due-soon window {self.due_soon_days} days"
        )

    # =========================================================================
    # TASK GENERATION
    # =========================================================================

    def generate_tasks(self, request: RitualTaskGenerationRequest) -> RitualTaskGenerationResponse:
        """
        Generate tasks for the configured rituals.

        Args:
            request: Selected rituals and wedding date. Current events and
                vendors are accepted but do not influence generation.

        Returns:
            RitualTaskGenerationResponse: Sorted tasks, cultural
            recommendations and notes. ``conflicts`` is always empty.

        Raises:
            ValueError: If the wedding date is missing or not an ISO date
        """
        wedding_date = self._parse_wedding_date(request.wedding_date)
        templates = get_tasks_for_rituals(request.rituals)

        tasks: List[RitualTask] = []
        for template in templates:
            tasks.extend(self._instantiate(template, wedding_date))

        sorted_tasks = self.sort_tasks(tasks)

        logger.debug(
            f"Generated {len(sorted_tasks)} tasks from {len(templates)} templates "
            f"for wedding {request.wedding_id}"
        )

        return RitualTaskGenerationResponse(
            tasks=sorted_tasks,
            conflicts=[],
            recommendations=self.generate_cultural_recommendations(request.rituals),
            cultural_notes=self.generate_cultural_notes(request.rituals),
        )

    def generate_tasks_for_ritual(self, ritual_type: str, wedding_date: str) -> List[RitualTask]:
        """
        Generate the tasks of a single ritual in template order.

        Returns an empty list for unknown ritual types.
        """
        template = self.templates.get(ritual_type)
        if template is None:
            return []
        return self._instantiate(template, self._parse_wedding_date(wedding_date))

    @staticmethod
    def sort_tasks(tasks: List[RitualTask]) -> List[RitualTask]:
        """Stable sort: priority descending, then lead time ascending."""
        return sorted(
            tasks,
            key=lambda task: (-PRIORITY_RANK[task.priority], task.estimated_days_before_event),
        )

    def _instantiate(self, template: RitualTemplate, wedding_date: datetime) -> List[RitualTask]:
        return [self._build_task(task_template, wedding_date) for task_template in template.tasks]

    @staticmethod
    def _build_task(task_template: TaskTemplate, wedding_date: datetime) -> RitualTask:
        return RitualTask(
            id=generate_id("ritual-task"),
            template_id=task_template.id,
            title=task_template.title,
            description=task_template.description,
            category=task_template.category,
            priority=task_template.priority,
            ritual_type=task_template.ritual_type,
            estimated_days_before_event=task_template.estimated_days_before_event,
            recommended_vendor_types=(
                list(task_template.recommended_vendor_types)
                if task_template.recommended_vendor_types is not None else None
            ),
            dependencies=(
                list(task_template.dependencies)
                if task_template.dependencies is not None else None
            ),
            cultural_notes=task_template.cultural_notes,
            due_date=subtract_days(wedding_date, task_template.estimated_days_before_event),
        )

    # =========================================================================
    # CULTURAL GUIDANCE
    # =========================================================================

    @staticmethod
    def generate_cultural_recommendations(rituals: List[str]) -> List[str]:
        """Ritual-specific recommendations followed by the general ones."""
        recommendations: List[str] = []
        for ritual_type, lines in RITUAL_RECOMMENDATIONS.items():
            if ritual_type in rituals:
                recommendations.extend(lines)

        recommendations.extend(GENERAL_RECOMMENDATIONS)
        return recommendations

    @staticmethod
    def generate_cultural_notes(rituals: List[str]) -> List[str]:
        """Ritual-specific notes followed by the general ones."""
        notes: List[str] = []
        for ritual_type, lines in RITUAL_CULTURAL_NOTES.items():
            if ritual_type in rituals:
                notes.extend(lines)

        notes.extend(GENERAL_CULTURAL_NOTES)
        return notes

    # =========================================================================
    # TIMELINE
    # =========================================================================

    def get_ritual_timeline(
        self,
        rituals: List[str],
        wedding_date: str,
        now: Optional[datetime] = None
    ) -> List[RitualTimelineEntry]:
        """
        Build the preparation timeline, one entry per requested ritual.

        Task status is evaluated against ``now`` (wall clock by default):
            - overdue: due date already passed
            - due_soon: due within ``due_soon_days`` days
            - upcoming: otherwise

        Unknown rituals yield an entry with no tasks. ``now`` may be naive
        (read as UTC).

        Raises:
            ValueError: If the wedding date is missing or not an ISO date,
                even when no requested ritual has a template
        """
        wedding = self._parse_wedding_date(wedding_date)
        reference = as_utc(now)
        timeline: List[RitualTimelineEntry] = []

        for ritual_type in rituals:
            template = self.templates.get(ritual_type)
            tasks = self._instantiate(template, wedding) if template else []
            timeline.append(RitualTimelineEntry(
                ritual=ritual_type,
                display_name=get_ritual_display_name(ritual_type),
                tasks=[
                    TimelineTask(
                        task=task,
                        due_date=task.due_date,
                        status=self.classify_due_date(task.due_date, reference),
                    )
                    for task in tasks
                ],
            ))

        return timeline

    def classify_due_date(self, due_date: datetime, now: Optional[datetime] = None) -> TaskStatus:
        """Classify a due date as overdue, due soon or upcoming."""
        days_until_due = math.ceil(days_until(due_date, now))

        if days_until_due < 0:
            return TaskStatus.OVERDUE
        if days_until_due <= self.due_soon_days:
            return TaskStatus.DUE_SOON
        return TaskStatus.UPCOMING

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def validate_ritual_configuration(
        self,
        rituals: List[str],
        wedding_date: str,
        now: Optional[datetime] = None
    ) -> RitualValidationResult:
        """
        Validate the selected rituals against the wedding date.

        Rules:
            - A wedding date before now is an error
            - Poruwa together with "religious_ceremony" is a spacing warning
            - A ritual whose minimum lead time has already passed is a warning
            - A ritual whose maximum lead time has already passed is an error

        Problems are returned as data, never raised.

        Raises:
            ValueError: If the wedding date is missing or not an ISO date
        """
        reference = as_utc(now)
        wedding = self._parse_wedding_date(wedding_date)
        warnings: List[str] = []
        errors: List[str] = []

        if wedding < reference:
            errors.append(PAST_WEDDING_DATE_ERROR)

        # "religious_ceremony" has no template; callers pass it ad hoc
        if RitualType.PORUWA.value in rituals and RitualType.RELIGIOUS_CEREMONY.value in rituals:
            warnings.append(PORUWA_RELIGIOUS_SPACING_WARNING)

        for ritual_type in rituals:
            template = self.templates.get(ritual_type)
            if template is None or template.timing_constraints is None:
                continue

            constraints = template.timing_constraints
            min_days = constraints.min_days_before_wedding
            max_days = constraints.max_days_before_wedding

            if min_days is not None and subtract_days(wedding, min_days) < reference:
                warnings.append(
                    f"{template.display_name} should be scheduled at least "
                    f"{min_days} days before the wedding"
                )

            if max_days is not None and subtract_days(wedding, max_days) < reference:
                errors.append(
                    f"{template.display_name} cannot be scheduled more than "
                    f"{max_days} days before the wedding"
                )

        return RitualValidationResult(
            is_valid=len(errors) == 0,
            warnings=warnings,
            errors=errors,
        )

    @staticmethod
    def _parse_wedding_date(wedding_date: Optional[str]) -> datetime:
        if not wedding_date:
            raise ValueError("Wedding date is required")
        try:
            return parse_iso_datetime(wedding_date)
        except ValueError:
            raise ValueError(f"Invalid wedding date: {wedding_date!r}")


# =============================================================================
# SINGLETON ACCESS
# =============================================================================

_ritual_task_generator: Optional[RitualTaskGenerator] = None


def get_ritual_task_generator() -> RitualTaskGenerator:
    """
    Get or create the RitualTaskGenerator singleton.

    Returns:
        RitualTaskGenerator: Singleton instance
    """
    global _ritual_task_generator
    if _ritual_task_generator is None:
        _ritual_task_generator = RitualTaskGenerator()
    return _ritual_task_generator
