"""
Ritual Template Catalog for Sri Lankan Weddings.

Static, read-only mapping from ritual identifier to its preparation template:
display name, ordered task templates (category, priority, lead time),
timing constraints relative to the wedding date and vendor requirements.

The catalog is loaded once at import time and never mutated. Task templates
are expanded into fresh ``RitualTask`` instances by the task generator.

Example Usage:
    templates = get_tasks_for_rituals(["reception", "poruwa", "unknown"])
    [t.ritual_type for t in templates]
    # ['poruwa', 'reception']  (catalog order, unknown ids dropped)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..schemas.responses import TaskCategory, TaskPriority


class RitualType(str, Enum):
    """Common ritual types for Sri Lankan weddings."""
    PORUWA = "poruwa"
    HOME_COMING = "home_coming"
    RECEPTION = "reception"
    REGISTER_MARRIAGE = "register_marriage"
    RELIGIOUS_CEREMONY = "religious_ceremony"
    ENGAGEMENT = "engagement"
    NALANGU = "nalangu"
    JAYAMANGALA_GATHA = "jayamangala_gatha"
    ASHTAKA = "ashtaka"
    KANDYAN_DANCE = "kandyan_dance"
    MAGUL_BERA = "magul_bera"


# =============================================================================
# TYPE DEFINITIONS
# =============================================================================

@dataclass(frozen=True)
class TaskTemplate:
    """Template for one preparation task of a ritual."""
    id: str
    title: str
    description: str
    category: TaskCategory
    priority: TaskPriority
    ritual_type: str
    estimated_days_before_event: int
    recommended_vendor_types: Optional[Tuple[str, ...]] = None
    dependencies: Optional[Tuple[str, ...]] = None
    cultural_notes: Optional[str] = None


@dataclass(frozen=True)
class TimingConstraints:
    """Bounds on when a ritual may be scheduled relative to the wedding."""
    min_days_before_wedding: Optional[int] = None
    max_days_before_wedding: Optional[int] = None
    auspicious_dates: Tuple[str, ...] = ()
    avoid_dates: Tuple[str, ...] = ()


@dataclass(frozen=True)
class VendorRequirements:
    """Vendor service types a ritual needs or benefits from."""
    required_types: Tuple[str, ...] = ()
    optional_types: Tuple[str, ...] = ()
    cultural_preferences: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RitualTemplate:
    """Complete preparation template for a ritual."""
    ritual_type: str
    display_name: str
    description: str
    tasks: Tuple[TaskTemplate, ...] = field(default_factory=tuple)
    timing_constraints: Optional[TimingConstraints] = None
    vendor_requirements: Optional[VendorRequirements] = None


_RITUAL = TaskCategory.RITUAL
_LOGISTICS = TaskCategory.LOGISTICS
_ATTIRE = TaskCategory.ATTIRE
_FOOD = TaskCategory.FOOD

_HIGH = TaskPriority.HIGH
_MEDIUM = TaskPriority.MEDIUM
_LOW = TaskPriority.LOW


# =============================================================================
# CATALOG
# =============================================================================

_PORUWA = RitualTemplate(
    ritual_type=RitualType.PORUWA.value,
    display_name="Poruwa Ceremony",
    description="Traditional Sinhalese wedding ceremony on a beautifully decorated platform",
    tasks=(
        TaskTemplate(
            id="poruwa-1",
            title="Book Poruwa ceremony venue",
            description="Reserve a venue that can accommodate the traditional Poruwa setup with adequate space for guests",
            category=_LOGISTICS,
            priority=_HIGH,
            ritual_type=RitualType.PORUWA.value,
            estimated_days_before_event=90,
            recommended_vendor_types=("venue", "event_planner"),
            cultural_notes="The venue should have space for the traditional Poruwa structure and guest seating",
        ),
        TaskTemplate(
            id="poruwa-2",
            title="Hire Poruwa ceremony officiant (Nekath Nilame)",
            description="Book an experienced officiant who can conduct the traditional Poruwa ceremony",
            category=_RITUAL,
            priority=_HIGH,
            ritual_type=RitualType.PORUWA.value,
            estimated_days_before_event=60,
            recommended_vendor_types=("officiant", "religious_services"),
            cultural_notes="The Nekath Nilame should be well-versed in traditional Sinhalese customs",
        ),
        TaskTemplate(
            id="poruwa-3",
            title="Order traditional Poruwa attire",
            description="Arrange for traditional Kandyan or low-country wedding attire for the ceremony",
            category=_ATTIRE,
            priority=_HIGH,
            ritual_type=RitualType.PORUWA.value,
            estimated_days_before_event=45,
            recommended_vendor_types=("bridal_wear", "groom_wear", "traditional_attire"),
            dependencies=("poruwa-1",),
            cultural_notes="Traditional attire is essential for the authenticity of the Poruwa ceremony",
        ),
        TaskTemplate(
            id="poruwa-4",
            title="Book Jayamangala Gatha chanters",
            description="Hire experienced chanters for the traditional Jayamangala Gatha (blessing chants)",
            category=_RITUAL,
            priority=_MEDIUM,
            ritual_type=RitualType.PORUWA.value,
            estimated_days_before_event=30,
            recommended_vendor_types=("musicians", "religious_services"),
            cultural_notes="The Jayamangala Gatha creates the sacred atmosphere for the ceremony",
        ),
        TaskTemplate(
            id="poruwa-5",
            title="Arrange Poruwa ceremonial items",
            description="Prepare traditional items: betel leaves, coconut oil lamp, white cloth, etc.",
            category=_RITUAL,
            priority=_MEDIUM,
            ritual_type=RitualType.PORUWA.value,
            estimated_days_before_event=14,
            recommended_vendor_types=("religious_supplies", "event_supplies"),
            cultural_notes="These items are essential for the traditional ceremony",
        ),
        TaskTemplate(
            id="poruwa-6",
            title="Finalize Poruwa ceremony timing with astrologer",
            description="Confirm the auspicious timing (Nekath) for the ceremony with your family astrologer",
            category=_RITUAL,
            priority=_HIGH,
            ritual_type=RitualType.PORUWA.value,
            estimated_days_before_event=7,
            dependencies=("poruwa-2",),
            cultural_notes="The timing must be astrologically auspicious for the couple",
        ),
    ),
    # Auspicious dates come from the family astrologer, not the catalog
    timing_constraints=TimingConstraints(min_days_before_wedding=1),
    vendor_requirements=VendorRequirements(
        required_types=("officiant", "venue"),
        optional_types=("musicians", "florist", "photographer", "videographer"),
        cultural_preferences=("experienced_in_poruwa", "sinhala_speaking"),
    ),
)

_HOME_COMING = RitualTemplate(
    ritual_type=RitualType.HOME_COMING.value,
    display_name="Home Coming Ceremony",
    description="Traditional ceremony welcoming the bride to the groom's home",
    tasks=(
        TaskTemplate(
            id="homecoming-1",
            title="Prepare groom's home for welcoming ceremony",
            description="Clean and decorate the entrance of the groom's home for the traditional welcoming",
            category=_LOGISTICS,
            priority=_MEDIUM,
            ritual_type=RitualType.HOME_COMING.value,
            estimated_days_before_event=3,
            recommended_vendor_types=("florist", "decorator"),
            cultural_notes="The entrance should be beautifully decorated with traditional items",
        ),
        TaskTemplate(
            id="homecoming-2",
            title="Arrange traditional welcoming items",
            description="Prepare milk rice, coconut oil lamp, and other traditional welcoming items",
            category=_RITUAL,
            priority=_MEDIUM,
            ritual_type=RitualType.HOME_COMING.value,
            estimated_days_before_event=1,
            recommended_vendor_types=("catering", "religious_supplies"),
            cultural_notes="These items symbolize prosperity and welcome for the bride",
        ),
        TaskTemplate(
            id="homecoming-3",
            title="Coordinate with family elders",
            description="Ensure all family members are informed about the traditional welcoming ceremony",
            category=_LOGISTICS,
            priority=_LOW,
            ritual_type=RitualType.HOME_COMING.value,
            estimated_days_before_event=7,
            cultural_notes="Family participation is important for this intimate ceremony",
        ),
    ),
    timing_constraints=TimingConstraints(min_days_before_wedding=0, max_days_before_wedding=7),
    vendor_requirements=VendorRequirements(
        optional_types=("florist", "catering"),
        cultural_preferences=("understands_traditions",),
    ),
)

_RECEPTION = RitualTemplate(
    ritual_type=RitualType.RECEPTION.value,
    display_name="Wedding Reception",
    description="Celebration feast with family and friends",
    tasks=(
        TaskTemplate(
            id="reception-1",
            title="Book reception venue",
            description="Reserve a venue that can accommodate your guest list and preferred reception style",
            category=_LOGISTICS,
            priority=_HIGH,
            ritual_type=RitualType.RECEPTION.value,
            estimated_days_before_event=120,
            recommended_vendor_types=("venue", "event_planner"),
            cultural_notes="Consider venues that can accommodate traditional reception customs",
        ),
        TaskTemplate(
            id="reception-2",
            title="Hire reception catering service",
            description="Book a caterer who can provide traditional Sri Lankan wedding cuisine",
            category=_FOOD,
            priority=_HIGH,
            ritual_type=RitualType.RECEPTION.value,
            estimated_days_before_event=90,
            recommended_vendor_types=("catering", "traditional_catering"),
            dependencies=("reception-1",),
            cultural_notes="Traditional menu should include milk rice, sweets, and ceremonial foods",
        ),
        TaskTemplate(
            id="reception-3",
            title="Arrange reception entertainment",
            description="Book traditional drummers, dancers, or other cultural entertainment",
            category=_LOGISTICS,
            priority=_MEDIUM,
            ritual_type=RitualType.RECEPTION.value,
            estimated_days_before_event=60,
            recommended_vendor_types=("entertainment", "traditional_music", "dancers"),
            cultural_notes="Traditional entertainment adds cultural authenticity to the celebration",
        ),
        TaskTemplate(
            id="reception-4",
            title="Plan reception seating arrangement",
            description="Organize seating considering family hierarchy and cultural customs",
            category=_LOGISTICS,
            priority=_MEDIUM,
            ritual_type=RitualType.RECEPTION.value,
            estimated_days_before_event=30,
            dependencies=("reception-1",),
            cultural_notes="Seating arrangements should respect family traditions and social customs",
        ),
    ),
    timing_constraints=TimingConstraints(min_days_before_wedding=0, max_days_before_wedding=3),
    vendor_requirements=VendorRequirements(
        required_types=("venue", "catering"),
        optional_types=("entertainment", "florist", "photographer"),
        cultural_preferences=("experienced_in_traditional_receptions",),
    ),
)

_ENGAGEMENT = RitualTemplate(
    ritual_type=RitualType.ENGAGEMENT.value,
    display_name="Engagement Ceremony",
    description="Formal engagement ceremony with exchange of rings",
    tasks=(
        TaskTemplate(
            id="engagement-1",
            title="Plan engagement ceremony",
            description="Organize the formal engagement ceremony with family",
            category=_LOGISTICS,
            priority=_HIGH,
            ritual_type=RitualType.ENGAGEMENT.value,
            estimated_days_before_event=180,
            recommended_vendor_types=("event_planner", "venue"),
            cultural_notes="The engagement is often a smaller, intimate family ceremony",
        ),
        TaskTemplate(
            id="engagement-2",
            title="Order engagement rings",
            description="Select and purchase traditional engagement rings",
            category=_ATTIRE,
            priority=_HIGH,
            ritual_type=RitualType.ENGAGEMENT.value,
            estimated_days_before_event=90,
            recommended_vendor_types=("jewelry", "traditional_jewelry"),
            cultural_notes="Rings should be selected according to family preferences and budget",
        ),
        TaskTemplate(
            id="engagement-3",
            title="Arrange engagement attire",
            description="Prepare appropriate attire for the engagement ceremony",
            category=_ATTIRE,
            priority=_MEDIUM,
            ritual_type=RitualType.ENGAGEMENT.value,
            estimated_days_before_event=45,
            recommended_vendor_types=("formal_wear", "traditional_attire"),
            cultural_notes="Attire should be respectful and appropriate for a family ceremony",
        ),
    ),
    timing_constraints=TimingConstraints(min_days_before_wedding=90, max_days_before_wedding=365),
    vendor_requirements=VendorRequirements(
        optional_types=("venue", "catering", "photographer"),
        cultural_preferences=("family_friendly",),
    ),
)

_NALANGU = RitualTemplate(
    ritual_type=RitualType.NALANGU.value,
    display_name="Nalangu Ceremony",
    description="Traditional beautification ceremony with turmeric and sandalwood",
    tasks=(
        TaskTemplate(
            id="nalangu-1",
            title="Arrange Nalangu ceremony venue",
            description="Book a venue for the traditional beautification ceremony",
            category=_LOGISTICS,
            priority=_MEDIUM,
            ritual_type=RitualType.NALANGU.value,
            estimated_days_before_event=30,
            recommended_vendor_types=("venue", "home_venue"),
            cultural_notes="This ceremony is often held at home or in an intimate setting",
        ),
        TaskTemplate(
            id="nalangu-2",
            title="Prepare Nalangu ceremonial items",
            description="Arrange turmeric, sandalwood, traditional oils, and other beautification items",
            category=_RITUAL,
            priority=_MEDIUM,
            ritual_type=RitualType.NALANGU.value,
            estimated_days_before_event=7,
            recommended_vendor_types=("religious_supplies", "traditional_items"),
            cultural_notes="These items are essential for the traditional beautification process",
        ),
        TaskTemplate(
            id="nalangu-3",
            title="Coordinate with family women",
            description="Organize female family members to participate in the traditional ceremony",
            category=_LOGISTICS,
            priority=_LOW,
            ritual_type=RitualType.NALANGU.value,
            estimated_days_before_event=14,
            cultural_notes="This is traditionally a women-only ceremony in many families",
        ),
    ),
    timing_constraints=TimingConstraints(min_days_before_wedding=1, max_days_before_wedding=7),
    vendor_requirements=VendorRequirements(
        optional_types=("beautician", "traditional_items"),
        cultural_preferences=("understands_traditions",),
    ),
)

RITUAL_TEMPLATES: Dict[str, RitualTemplate] = {
    template.ritual_type: template
    for template in (_PORUWA, _HOME_COMING, _RECEPTION, _ENGAGEMENT, _NALANGU)
}


# =============================================================================
# LOOKUPS
# =============================================================================

def get_tasks_for_rituals(ritual_types: List[str]) -> List[RitualTemplate]:
    """
    Get the templates for the requested rituals.

    Unknown identifiers are silently dropped. The result follows catalog
    order, not the order of ``ritual_types``, and holds each template once.
    """
    requested = set(ritual_types)
    return [
        template
        for ritual_type, template in RITUAL_TEMPLATES.items()
        if ritual_type in requested
    ]


def get_ritual_template(ritual_type: str) -> Optional[RitualTemplate]:
    """Get a single template, or None for an unknown ritual."""
    return RITUAL_TEMPLATES.get(ritual_type)


def get_available_ritual_types() -> List[str]:
    """Get all ritual types that have a template."""
    return list(RITUAL_TEMPLATES.keys())


def get_ritual_display_name(ritual_type: str) -> str:
    """Get the display name of a ritual, falling back to its identifier."""
    template = RITUAL_TEMPLATES.get(ritual_type)
    return template.display_name if template else ritual_type
