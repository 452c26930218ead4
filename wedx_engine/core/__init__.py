"""
Core module for the wedX Ritual Engine.

Contains the planning rules for:
- Ritual template catalog (static, read-only)
- Ritual task generation, timeline and configuration validation
- Timing and vendor conflict detection with risk assessment
"""

from .ritual_templates import (
    RITUAL_TEMPLATES,
    RitualTemplate,
    RitualType,
    get_available_ritual_types,
    get_ritual_display_name,
    get_ritual_template,
    get_tasks_for_rituals,
)
from .task_generator import RitualTaskGenerator, get_ritual_task_generator
from .conflict_detector import ConflictDetector, get_conflict_detector

__all__ = [
    "RITUAL_TEMPLATES",
    "RitualTemplate",
    "RitualType",
    "get_available_ritual_types",
    "get_ritual_display_name",
    "get_ritual_template",
    "get_tasks_for_rituals",
    "RitualTaskGenerator",
    "get_ritual_task_generator",
    "ConflictDetector",
    "get_conflict_detector",
]
