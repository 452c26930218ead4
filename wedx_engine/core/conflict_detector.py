"""
Conflict Detector: scheduling and vendor conflict analysis for wedding events.

Given the events of a wedding (date, optional start/end time, linked vendors)
and the vendors themselves (service types, availability), the detector finds:

1. TIMING CONFLICTS
   - Overlapping events on the same calendar date
     (critical when the overlap exceeds CRITICAL_OVERLAP_MINUTES)
   - Consecutive events with less than MIN_BUFFER_MINUTES between them

2. VENDOR CONFLICTS
   - Vendors booked for several events on the same calendar date

3. CULTURAL CONFLICTS
   - Ritual sequencing, culturally inappropriate timing and vendor cultural
     compatibility hooks. These are not implemented yet and never report.

Each finding carries freshly generated resolution options. Warnings,
suggestions and a coarse risk assessment summarize the result.

All comparisons are pairwise over small inputs; nothing is mutated.
"""

import logging
from typing import Dict, List, Optional

from ..schemas.requests import ConflictDetectionRequest, EventInput, VendorInput
from ..schemas.responses import (
    AlternativeVendor,
    AnyConflict,
    Conflict,
    ConflictDetectionResponse,
    ConflictResolutionOption,
    ConflictSeverity,
    ConflictType,
    ConflictingBooking,
    ConflictingEvent,
    CulturalConflict,
    EffortLevel,
    RecommendedSlot,
    ResolutionType,
    RiskAssessment,
    RiskLevel,
    TimingConflict,
    VendorConflict,
)
from .utils import (
    MINUTES_PER_DAY,
    calculate_overlap_duration,
    calendar_date,
    format_date_for_display,
    format_minutes,
    generate_id,
    parse_time_to_minutes,
    time_ranges_overlap,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS & THRESHOLDS
# =============================================================================

CRITICAL_OVERLAP_MINUTES = 60  # Overlap above this is critical
MIN_BUFFER_MINUTES = 30        # Less buffer than this is a warning
DEFAULT_BUFFER_MINUTES = 60    # Assumed buffer when a boundary time is missing

CRITICAL_RISK_THRESHOLD = 2    # More critical issues than this = high risk
WARNING_RISK_THRESHOLD = 3     # More warnings than this = medium risk

ALL_DAY = "All day"

TIMING_SUGGESTION = "Consider spreading events across multiple days to avoid timing conflicts"
VENDOR_SUGGESTION = "Book vendors well in advance and confirm availability for all events"
CULTURAL_SUGGESTION = "Consult with family elders about cultural requirements and traditions"
GENERAL_SUGGESTIONS = [
    "Regularly review and update your wedding timeline",
    "Maintain open communication with all vendors and family members",
]


class _Booking:
    """One (event, vendor, service type) booking row."""

    __slots__ = ("event_id", "event_name", "date", "start_time", "end_time", "service_type")

    def __init__(self, event: EventInput, service_type: str):
        self.event_id = event.id
        self.event_name = event.name
        self.date = calendar_date(event.date)
        self.start_time = event.start_time
        self.end_time = event.end_time
        self.service_type = service_type


# =============================================================================
# CONFLICT DETECTOR CLASS
# =============================================================================

class ConflictDetector:
    """
    Detects timing, vendor and cultural conflicts in a wedding plan.

    Example:
        >>> detector = ConflictDetector()
        >>> result = detector.detect_conflicts(request)
        >>> result.risk_assessment.overall_risk
        <RiskLevel.MEDIUM: 'medium'>
    """

    def __init__(self):
        logger.info(
            f"ConflictDetector initialized: critical overlap > {CRITICAL_OVERLAP_MINUTES} min, "
            f"minimum buffer {MIN_BUFFER_MINUTES} min"
        )

    def detect_conflicts(self, request: ConflictDetectionRequest) -> ConflictDetectionResponse:
        """
        Detect conflicts for a wedding plan.

        Args:
            request: Events, vendors, wedding type and cultural preferences

        Returns:
            ConflictDetectionResponse: Conflicts (timing, then vendor, then
            cultural), warnings, suggestions and risk assessment
        """
        events = request.events or []
        vendors = request.vendors or []

        conflicts: List[AnyConflict] = []
        conflicts.extend(self.detect_timing_conflicts(events))
        conflicts.extend(self.detect_vendor_conflicts(events, vendors))
        conflicts.extend(self.detect_cultural_conflicts(
            events, request.wedding_type, request.cultural_preferences
        ))

        risk_assessment = self.calculate_risk_assessment(conflicts)

        logger.debug(
            f"Detected {len(conflicts)} conflicts for wedding {request.wedding_id} "
            f"({len(events)} events, {len(vendors)} vendors): risk {risk_assessment.overall_risk.value}"
        )

        return ConflictDetectionResponse(
            conflicts=conflicts,
            warnings=self.generate_warnings(conflicts),
            suggestions=self.generate_suggestions(conflicts),
            risk_assessment=risk_assessment,
        )

    # =========================================================================
    # TIMING CONFLICTS
    # =========================================================================

    def detect_timing_conflicts(self, events: List[EventInput]) -> List[TimingConflict]:
        """
        Compare every pair of events sharing a calendar date.

        Pairs where either event lacks a start or end time are skipped. A
        pair can produce both an overlap conflict and a buffer conflict.
        """
        timing_conflicts: List[TimingConflict] = []

        for date, day_events in self._group_events_by_date(events).items():
            if len(day_events) < 2:
                continue

            for i in range(len(day_events)):
                for j in range(i + 1, len(day_events)):
                    first = day_events[i]
                    second = day_events[j]

                    if not (first.start_time and first.end_time and second.start_time and second.end_time):
                        continue

                    if time_ranges_overlap(first.start_time, first.end_time, second.start_time, second.end_time):
                        overlap = calculate_overlap_duration(
                            first.start_time, first.end_time,
                            second.start_time, second.end_time
                        )
                        timing_conflicts.append(self._build_overlap_conflict(date, first, second, overlap))

                    buffer_minutes = self.calculate_buffer_time(first, second)
                    if buffer_minutes < MIN_BUFFER_MINUTES:
                        timing_conflicts.append(self._build_buffer_conflict(first, second, buffer_minutes))

        return timing_conflicts

    @staticmethod
    def calculate_buffer_time(first: EventInput, second: EventInput) -> int:
        """Minutes between the end of ``first`` and the start of ``second``."""
        if not first.end_time or not second.start_time:
            return DEFAULT_BUFFER_MINUTES
        return parse_time_to_minutes(second.start_time) - parse_time_to_minutes(first.end_time)

    def _build_overlap_conflict(
        self,
        date: str,
        first: EventInput,
        second: EventInput,
        overlap: int
    ) -> TimingConflict:
        severity = ConflictSeverity.CRITICAL if overlap > CRITICAL_OVERLAP_MINUTES else ConflictSeverity.WARNING
        slot = self._recommend_slot(date, first, second)

        return TimingConflict(
            id=generate_id("timing-conflict"),
            severity=severity,
            title="Event Timing Conflict",
            description=(
                f"{first.name} and {second.name} have overlapping schedules "
                f"on {format_date_for_display(date)}"
            ),
            affected_events=[first.id, second.id],
            affected_vendors=[*first.vendor_ids, *second.vendor_ids],
            conflicting_events=[
                self._conflicting_event(first, overlap),
                self._conflicting_event(second, overlap),
            ],
            recommended_slots=[slot] if slot else None,
            resolution_options=self.generate_timing_resolutions(first, second),
        )

    def _build_buffer_conflict(self, first: EventInput, second: EventInput, buffer_minutes: int) -> TimingConflict:
        return TimingConflict(
            id=generate_id("timing-conflict"),
            severity=ConflictSeverity.WARNING,
            title="Insufficient Buffer Time",
            description=f"Only {buffer_minutes} minutes between {first.name} and {second.name}",
            affected_events=[first.id, second.id],
            affected_vendors=[*first.vendor_ids, *second.vendor_ids],
            conflicting_events=[
                self._conflicting_event(first, 0),
                self._conflicting_event(second, 0),
            ],
            resolution_options=self.generate_buffer_resolutions(first, second),
        )

    @staticmethod
    def _conflicting_event(event: EventInput, overlap: int) -> ConflictingEvent:
        return ConflictingEvent(
            event_id=event.id,
            event_name=event.name,
            start_time=event.start_time,
            end_time=event.end_time,
            overlap_duration=overlap,
        )

    @staticmethod
    def _recommend_slot(date: str, first: EventInput, second: EventInput) -> Optional[RecommendedSlot]:
        """Move the second event to start a full buffer after the first ends."""
        duration = parse_time_to_minutes(second.end_time) - parse_time_to_minutes(second.start_time)
        start = parse_time_to_minutes(first.end_time) + MIN_BUFFER_MINUTES
        end = start + duration

        if duration <= 0 or end >= MINUTES_PER_DAY:
            return None

        return RecommendedSlot(
            date=date,
            start_time=format_minutes(start),
            end_time=format_minutes(end),
            reason=f"Starts {MIN_BUFFER_MINUTES} minutes after {first.name} ends",
        )

    # =========================================================================
    # VENDOR CONFLICTS
    # =========================================================================

    def detect_vendor_conflicts(
        self,
        events: List[EventInput],
        vendors: List[VendorInput]
    ) -> List[VendorConflict]:
        """
        Detect vendors booked for more than one event row on the same date.

        A vendor linked to an event contributes one booking row per service
        type it offers, so a multi-service vendor on a single event already
        counts as double-booked.
        """
        vendor_conflicts: List[VendorConflict] = []
        vendors_by_id: Dict[str, VendorInput] = {}
        for vendor in vendors:
            vendors_by_id.setdefault(vendor.id, vendor)

        for vendor_id, bookings in self._create_vendor_bookings(events, vendors_by_id).items():
            if len(bookings) < 2:
                continue

            vendor = vendors_by_id[vendor_id]

            for date, day_bookings in self._group_bookings_by_date(bookings).items():
                if len(day_bookings) > 1:
                    vendor_conflicts.append(self._build_double_booking(vendor, date, day_bookings, vendors))

            vendor_conflicts.extend(self._detect_service_type_conflicts(vendor, bookings))

        return vendor_conflicts

    def _build_double_booking(
        self,
        vendor: VendorInput,
        date: str,
        day_bookings: List[_Booking],
        vendors: List[VendorInput]
    ) -> VendorConflict:
        alternatives = self.find_alternative_vendors(vendor, date, vendors)

        return VendorConflict(
            id=generate_id("vendor-conflict"),
            severity=ConflictSeverity.CRITICAL,
            title="Vendor Double-Booking",
            description=f"{vendor.name} is booked for multiple events on {format_date_for_display(date)}",
            affected_events=list(dict.fromkeys(booking.event_id for booking in day_bookings)),
            affected_vendors=[vendor.id],
            vendor_id=vendor.id,
            vendor_name=vendor.name,
            conflicting_bookings=[
                ConflictingBooking(
                    event_id=booking.event_id,
                    event_name=booking.event_name,
                    service_type=booking.service_type,
                    date=booking.date,
                    time=booking.start_time or ALL_DAY,
                )
                for booking in day_bookings
            ],
            alternative_vendors=alternatives or None,
            resolution_options=self.generate_vendor_resolutions(vendor, day_bookings),
        )

    @staticmethod
    def find_alternative_vendors(
        vendor: VendorInput,
        date: str,
        vendors: List[VendorInput]
    ) -> List[AlternativeVendor]:
        """
        Other vendors offering at least one of the same services on ``date``.

        An empty availability list is read as "not specified" and kept.
        Match score is the share of the booked vendor's service types covered.
        """
        wanted = set(vendor.service_types)
        if not wanted:
            return []

        alternatives: List[AlternativeVendor] = []
        for candidate in vendors:
            if candidate.id == vendor.id:
                continue

            shared = wanted.intersection(candidate.service_types)
            if not shared:
                continue

            available_dates = [calendar_date(d) for d in candidate.availability]
            if available_dates and date not in available_dates:
                continue

            alternatives.append(AlternativeVendor(
                vendor_id=candidate.id,
                vendor_name=candidate.name,
                match_score=round(len(shared) / len(wanted), 2),
                availability=list(candidate.availability),
            ))

        alternatives.sort(key=lambda alt: alt.match_score, reverse=True)
        return alternatives

    def _detect_service_type_conflicts(self, vendor: VendorInput, bookings: List[_Booking]) -> List[VendorConflict]:
        """Competing service types for one vendor. Not implemented yet."""
        return []

    # =========================================================================
    # CULTURAL CONFLICTS
    # =========================================================================

    def detect_cultural_conflicts(
        self,
        events: List[EventInput],
        wedding_type: str,
        cultural_preferences: Optional[List[str]] = None
    ) -> List[CulturalConflict]:
        """Run the cultural checks. None of them report anything yet."""
        cultural_conflicts: List[CulturalConflict] = []
        cultural_conflicts.extend(self._detect_ritual_sequence_conflicts(events))
        cultural_conflicts.extend(self._detect_cultural_timing_conflicts(events))
        cultural_conflicts.extend(self._detect_vendor_cultural_conflicts(events, cultural_preferences))
        return cultural_conflicts

    def _detect_ritual_sequence_conflicts(self, events: List[EventInput]) -> List[CulturalConflict]:
        return []

    def _detect_cultural_timing_conflicts(self, events: List[EventInput]) -> List[CulturalConflict]:
        return []

    def _detect_vendor_cultural_conflicts(
        self,
        events: List[EventInput],
        cultural_preferences: Optional[List[str]]
    ) -> List[CulturalConflict]:
        return []

    # =========================================================================
    # RESOLUTION OPTIONS
    # =========================================================================

    @staticmethod
    def generate_timing_resolutions(first: EventInput, second: EventInput) -> List[ConflictResolutionOption]:
        return [
            ConflictResolutionOption(
                id=generate_id("resolution"),
                type=ResolutionType.RESCHEDULE,
                title="Reschedule Events",
                description=f"Move {second.name} to avoid overlap with {first.name}",
                estimated_effort=EffortLevel.MEDIUM,
                action_required="Contact venues and vendors to check availability for new timing",
                auto_resolvable=False,
            ),
            ConflictResolutionOption(
                id=generate_id("resolution"),
                type=ResolutionType.CHANGE_VENDOR,
                title="Use Different Vendors",
                description="Assign different vendors to each event to reduce coordination complexity",
                estimated_effort=EffortLevel.HIGH,
                action_required="Find and book alternative vendors for one of the events",
                auto_resolvable=False,
            ),
            ConflictResolutionOption(
                id=generate_id("resolution"),
                type=ResolutionType.DISMISS,
                title="Accept Overlap",
                description="Proceed with overlapping schedule if culturally acceptable",
                estimated_effort=EffortLevel.LOW,
                action_required="Ensure both families are comfortable with the overlap",
                auto_resolvable=True,
            ),
        ]

    @staticmethod
    def generate_buffer_resolutions(first: EventInput, second: EventInput) -> List[ConflictResolutionOption]:
        return [
            ConflictResolutionOption(
                id=generate_id("resolution"),
                type=ResolutionType.RESCHEDULE,
                title="Increase Buffer Time",
                description=f"Add more time between {first.name} and {second.name}",
                estimated_effort=EffortLevel.LOW,
                action_required=f"Adjust timing to allow at least {MIN_BUFFER_MINUTES} minutes between events",
                auto_resolvable=False,
            ),
            ConflictResolutionOption(
                id=generate_id("resolution"),
                type=ResolutionType.DISMISS,
                title="Accept Short Buffer",
                description="Proceed with tight scheduling if logistics allow",
                estimated_effort=EffortLevel.LOW,
                action_required="Ensure smooth transition between events",
                auto_resolvable=True,
            ),
        ]

    @staticmethod
    def generate_vendor_resolutions(vendor: VendorInput, bookings: List[_Booking]) -> List[ConflictResolutionOption]:
        other_event = bookings[1].event_name if len(bookings) > 1 else "one event"
        return [
            ConflictResolutionOption(
                id=generate_id("resolution"),
                type=ResolutionType.CHANGE_VENDOR,
                title="Find Alternative Vendor",
                description=f"Find another vendor for {other_event}",
                estimated_effort=EffortLevel.HIGH,
                action_required="Search for and book an alternative vendor with similar services",
                auto_resolvable=False,
            ),
            ConflictResolutionOption(
                id=generate_id("resolution"),
                type=ResolutionType.RESCHEDULE,
                title="Reschedule One Event",
                description="Move one event to a different date",
                estimated_effort=EffortLevel.MEDIUM,
                action_required="Check venue and guest availability for new date",
                auto_resolvable=False,
            ),
            ConflictResolutionOption(
                id=generate_id("resolution"),
                type=ResolutionType.ADD_RESOURCE,
                title="Add Vendor Resources",
                description=f"Ask {vendor.name} to provide additional staff or resources",
                estimated_effort=EffortLevel.MEDIUM,
                action_required="Discuss with vendor about handling multiple events",
                auto_resolvable=False,
            ),
        ]

    # =========================================================================
    # SUMMARIES
    # =========================================================================

    @staticmethod
    def generate_warnings(conflicts: List[Conflict]) -> List[str]:
        warnings: List[str] = []

        critical = sum(1 for c in conflicts if c.severity == ConflictSeverity.CRITICAL)
        if critical > 0:
            warnings.append(f"{critical} critical conflicts require immediate attention")

        warning = sum(1 for c in conflicts if c.severity == ConflictSeverity.WARNING)
        if warning > 0:
            warnings.append(f"{warning} warnings should be reviewed")

        return warnings

    @staticmethod
    def generate_suggestions(conflicts: List[Conflict]) -> List[str]:
        suggestions: List[str] = []
        types = {c.type for c in conflicts}

        if ConflictType.TIMING in types:
            suggestions.append(TIMING_SUGGESTION)
        if ConflictType.VENDOR in types:
            suggestions.append(VENDOR_SUGGESTION)
        if ConflictType.CULTURAL in types:
            suggestions.append(CULTURAL_SUGGESTION)

        suggestions.extend(GENERAL_SUGGESTIONS)
        return suggestions

    @staticmethod
    def calculate_risk_assessment(conflicts: List[Conflict]) -> RiskAssessment:
        """
        Risk levels:
            - high: more than 2 critical issues
            - medium: any critical issue, or more than 3 warnings
            - low: otherwise

        ``recommendations`` counts conflicts that are neither critical nor
        warnings; with a two-valued severity it is always 0.
        """
        critical = sum(1 for c in conflicts if c.severity == ConflictSeverity.CRITICAL)
        warnings = sum(1 for c in conflicts if c.severity == ConflictSeverity.WARNING)

        if critical > CRITICAL_RISK_THRESHOLD:
            overall = RiskLevel.HIGH
        elif critical > 0 or warnings > WARNING_RISK_THRESHOLD:
            overall = RiskLevel.MEDIUM
        else:
            overall = RiskLevel.LOW

        return RiskAssessment(
            overall_risk=overall,
            critical_issues=critical,
            warnings=warnings,
            recommendations=max(0, len(conflicts) - critical - warnings),
        )

    # =========================================================================
    # GROUPING HELPERS
    # =========================================================================

    @staticmethod
    def _group_events_by_date(events: List[EventInput]) -> Dict[str, List[EventInput]]:
        groups: Dict[str, List[EventInput]] = {}
        for event in events:
            groups.setdefault(calendar_date(event.date), []).append(event)
        return groups

    @staticmethod
    def _create_vendor_bookings(
        events: List[EventInput],
        vendors_by_id: Dict[str, VendorInput]
    ) -> Dict[str, List[_Booking]]:
        bookings: Dict[str, List[_Booking]] = {}
        for event in events:
            for vendor_id in event.vendor_ids:
                vendor = vendors_by_id.get(vendor_id)
                if vendor is None:
                    continue

                rows = bookings.setdefault(vendor_id, [])
                for service_type in vendor.service_types:
                    rows.append(_Booking(event, service_type))
        return bookings

    @staticmethod
    def _group_bookings_by_date(bookings: List[_Booking]) -> Dict[str, List[_Booking]]:
        groups: Dict[str, List[_Booking]] = {}
        for booking in bookings:
            groups.setdefault(booking.date, []).append(booking)
        return groups


# =============================================================================
# SINGLETON ACCESS
# =============================================================================

_conflict_detector: Optional[ConflictDetector] = None


def get_conflict_detector() -> ConflictDetector:
    """
    Get or create the ConflictDetector singleton.

    Returns:
        ConflictDetector: Singleton instance
    """
    global _conflict_detector
    if _conflict_detector is None:
        _conflict_detector = ConflictDetector()
    return _conflict_detector
