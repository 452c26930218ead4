"""
Tests for the ritual template catalog.

Covers:
1. Template contents (task counts, lead times, constraints)
2. Catalog lookup helpers and their fallbacks
3. Catalog ordering and de-duplication in get_tasks_for_rituals
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from wedx_engine.core.ritual_templates import (
    RITUAL_TEMPLATES,
    RitualType,
    get_available_ritual_types,
    get_ritual_display_name,
    get_ritual_template,
    get_tasks_for_rituals,
)
from wedx_engine.schemas import TaskPriority


class TestCatalogContents:
    """Tests for the static template data."""

    def test_catalog_has_five_templates(self):
        assert get_available_ritual_types() == [
            "poruwa", "home_coming", "reception", "engagement", "nalangu"
        ]

    def test_task_counts(self):
        counts = {key: len(template.tasks) for key, template in RITUAL_TEMPLATES.items()}
        assert counts == {
            "poruwa": 6,
            "home_coming": 3,
            "reception": 4,
            "engagement": 3,
            "nalangu": 3,
        }

    def test_task_ids_unique_across_catalog(self):
        ids = [task.id for template in RITUAL_TEMPLATES.values() for task in template.tasks]
        assert len(ids) == len(set(ids))

    def test_tasks_carry_their_ritual_type(self):
        for key, template in RITUAL_TEMPLATES.items():
            assert template.ritual_type == key
            assert all(task.ritual_type == key for task in template.tasks)

    def test_dependencies_point_inside_ritual(self):
        """Dependencies refer to template task ids of the same ritual."""
        for template in RITUAL_TEMPLATES.values():
            ids = {task.id for task in template.tasks}
            for task in template.tasks:
                for dependency in task.dependencies or ():
                    assert dependency in ids

    def test_poruwa_final_confirmation_is_high_priority(self):
        template = get_ritual_template("poruwa")
        last = template.tasks[-1]
        assert last.id == "poruwa-6"
        assert last.priority == TaskPriority.HIGH
        assert last.estimated_days_before_event == 7

    def test_timing_constraints(self):
        engagement = get_ritual_template("engagement").timing_constraints
        assert engagement.min_days_before_wedding == 90
        assert engagement.max_days_before_wedding == 365

        poruwa = get_ritual_template("poruwa").timing_constraints
        assert poruwa.min_days_before_wedding == 1
        assert poruwa.max_days_before_wedding is None


class TestCatalogLookup:
    """Tests for lookup helpers."""

    def test_unknown_template_is_none(self):
        assert get_ritual_template("unknown") is None

    def test_ritual_without_template(self):
        """Declared ritual types need not have a template."""
        assert get_ritual_template(RitualType.MAGUL_BERA.value) is None

    def test_display_name(self):
        assert get_ritual_display_name("poruwa") == "Poruwa Ceremony"

    def test_display_name_falls_back_to_identifier(self):
        assert get_ritual_display_name("kandyan_dance") == "kandyan_dance"


class TestGetTasksForRituals:
    """Tests for template selection."""

    def test_unknown_identifiers_dropped(self):
        templates = get_tasks_for_rituals(["poruwa", "not-a-ritual"])
        assert [t.ritual_type for t in templates] == ["poruwa"]

    def test_catalog_order(self):
        templates = get_tasks_for_rituals(["nalangu", "reception", "poruwa"])
        assert [t.ritual_type for t in templates] == ["poruwa", "reception", "nalangu"]

    def test_duplicates_collapse(self):
        templates = get_tasks_for_rituals(["poruwa", "poruwa"])
        assert len(templates) == 1

    def test_empty_selection(self):
        assert get_tasks_for_rituals([]) == []
