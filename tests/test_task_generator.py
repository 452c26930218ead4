"""
Tests for the Ritual Task Generator.

Covers:
1. Task counts and template expansion
2. Priority / lead-time ordering
3. Due dates resolved from the wedding date
4. Cultural recommendations and notes
5. Preparation timeline statuses
6. Ritual configuration validation
"""

import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from wedx_engine.core.task_generator import (
    GENERAL_CULTURAL_NOTES,
    GENERAL_RECOMMENDATIONS,
    PAST_WEDDING_DATE_ERROR,
    PORUWA_RELIGIOUS_SPACING_WARNING,
    PRIORITY_RANK,
    RitualTaskGenerator,
)
from wedx_engine.schemas import RitualTaskGenerationRequest, TaskPriority, TaskStatus

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
WEDDING_DATE = "2026-06-15"


@pytest.fixture
def generator():
    return RitualTaskGenerator(due_soon_days=7)


def _generate(generator, rituals, wedding_date=WEDDING_DATE):
    return generator.generate_tasks(
        RitualTaskGenerationRequest(rituals=rituals, wedding_date=wedding_date)
    )


class TestGenerateTasks:
    """Tests for task expansion."""

    def test_poruwa_yields_six_tasks(self, generator):
        assert len(_generate(generator, ["poruwa"]).tasks) == 6

    def test_poruwa_and_reception_yield_ten_tasks(self, generator):
        assert len(_generate(generator, ["poruwa", "reception"]).tasks) == 10

    def test_all_rituals(self, generator):
        response = _generate(generator, ["poruwa", "home_coming", "reception", "engagement", "nalangu"])
        assert len(response.tasks) == 19

    def test_unknown_rituals_ignored(self, generator):
        response = _generate(generator, ["poruwa", "magul_bera", "???"])
        assert len(response.tasks) == 6

    def test_conflicts_always_empty(self, generator):
        assert _generate(generator, ["poruwa"]).conflicts == []

    def test_task_ids_unique_and_fresh(self, generator):
        first = _generate(generator, ["poruwa", "reception"])
        second = _generate(generator, ["poruwa", "reception"])

        first_ids = {task.id for task in first.tasks}
        second_ids = {task.id for task in second.tasks}
        assert len(first_ids) == 10
        assert first_ids.isdisjoint(second_ids)

    def test_template_fields_copied(self, generator):
        tasks = {task.template_id: task for task in _generate(generator, ["poruwa"]).tasks}
        attire = tasks["poruwa-3"]

        assert attire.ritual_type == "poruwa"
        assert attire.estimated_days_before_event == 45
        assert attire.dependencies == ["poruwa-1"]
        assert attire.recommended_vendor_types == ["bridal_wear", "groom_wear", "traditional_attire"]

    def test_due_dates(self, generator):
        tasks = {task.template_id: task for task in _generate(generator, ["poruwa"]).tasks}
        wedding = datetime(2026, 6, 15, tzinfo=timezone.utc)

        assert tasks["poruwa-1"].due_date == wedding - timedelta(days=90)
        assert tasks["poruwa-6"].due_date == wedding - timedelta(days=7)

    def test_timestamp_wedding_date(self, generator):
        response = _generate(generator, ["nalangu"], "2026-06-15T00:00:00.000Z")
        assert len(response.tasks) == 3

    def test_missing_wedding_date_raises(self, generator):
        with pytest.raises(ValueError):
            generator.generate_tasks(RitualTaskGenerationRequest(rituals=["poruwa"]))

    def test_invalid_wedding_date_raises(self, generator):
        with pytest.raises(ValueError):
            _generate(generator, ["poruwa"], "next summer")

    def test_single_ritual_keeps_template_order(self, generator):
        tasks = generator.generate_tasks_for_ritual("poruwa", WEDDING_DATE)
        assert [task.template_id for task in tasks] == [f"poruwa-{i}" for i in range(1, 7)]

    def test_single_unknown_ritual(self, generator):
        assert generator.generate_tasks_for_ritual("unknown", WEDDING_DATE) == []


class TestTaskOrdering:
    """Priority descending, then lead time ascending."""

    def test_sort_invariant(self, generator):
        tasks = _generate(generator, ["poruwa", "home_coming", "reception", "engagement", "nalangu"]).tasks

        for current, following in zip(tasks, tasks[1:]):
            current_rank = PRIORITY_RANK[current.priority]
            following_rank = PRIORITY_RANK[following.priority]
            assert current_rank >= following_rank
            if current_rank == following_rank:
                assert current.estimated_days_before_event <= following.estimated_days_before_event

    def test_nearest_high_priority_first(self, generator):
        tasks = _generate(generator, ["poruwa"]).tasks
        assert tasks[0].template_id == "poruwa-6"
        assert tasks[0].priority == TaskPriority.HIGH

    def test_low_priority_last(self, generator):
        tasks = _generate(generator, ["home_coming"]).tasks
        assert tasks[-1].priority == TaskPriority.LOW


class TestCulturalGuidance:
    """Tests for recommendations and cultural notes."""

    def test_empty_selection_defaults(self, generator):
        response = _generate(generator, [])
        assert response.tasks == []
        assert response.recommendations == GENERAL_RECOMMENDATIONS
        assert response.cultural_notes == GENERAL_CULTURAL_NOTES
        assert len(response.recommendations) == 3
        assert len(response.cultural_notes) == 3

    def test_unknown_only_selection_defaults(self, generator):
        response = _generate(generator, ["unknown"])
        assert response.tasks == []
        assert len(response.recommendations) == 3
        assert len(response.cultural_notes) == 3

    def test_poruwa_guidance(self, generator):
        response = _generate(generator, ["poruwa"])
        assert len(response.recommendations) == 6
        assert len(response.cultural_notes) == 6
        assert response.recommendations[-3:] == GENERAL_RECOMMENDATIONS

    def test_guidance_in_fixed_ritual_order(self, generator):
        forward = generator.generate_cultural_recommendations(["poruwa", "nalangu"])
        backward = generator.generate_cultural_recommendations(["nalangu", "poruwa"])
        assert forward == backward
        assert forward[0].startswith("Consider consulting with an experienced astrologer")


class TestRitualTimeline:
    """Tests for the preparation timeline."""

    def test_one_entry_per_ritual(self, generator):
        timeline = generator.get_ritual_timeline(["poruwa", "reception"], WEDDING_DATE, now=NOW)

        assert [entry.ritual for entry in timeline] == ["poruwa", "reception"]
        assert timeline[0].display_name == "Poruwa Ceremony"
        assert len(timeline[0].tasks) == 6
        assert len(timeline[1].tasks) == 4

    def test_unknown_ritual_entry_is_empty(self, generator):
        timeline = generator.get_ritual_timeline(["magul_bera"], WEDDING_DATE, now=NOW)
        assert timeline[0].display_name == "magul_bera"
        assert timeline[0].tasks == []

    def test_statuses(self, generator):
        # Wedding in 10 days: 7-day task due in 3 days, 90-day task overdue
        now = datetime(2026, 6, 5, tzinfo=timezone.utc)
        timeline = generator.get_ritual_timeline(["poruwa"], WEDDING_DATE, now=now)
        statuses = {item.task.template_id: item.status for item in timeline[0].tasks}

        assert statuses["poruwa-6"] == TaskStatus.DUE_SOON
        assert statuses["poruwa-1"] == TaskStatus.OVERDUE

    def test_far_wedding_all_upcoming(self, generator):
        timeline = generator.get_ritual_timeline(["poruwa"], "2027-06-15", now=NOW)
        assert all(item.status == TaskStatus.UPCOMING for item in timeline[0].tasks)

    def test_classify_due_date_boundaries(self, generator):
        assert generator.classify_due_date(NOW + timedelta(days=7), NOW) == TaskStatus.DUE_SOON
        assert generator.classify_due_date(NOW + timedelta(days=8), NOW) == TaskStatus.UPCOMING
        assert generator.classify_due_date(NOW, NOW) == TaskStatus.DUE_SOON
        assert generator.classify_due_date(NOW - timedelta(days=2), NOW) == TaskStatus.OVERDUE


class TestValidateRitualConfiguration:
    """Tests for configuration validation."""

    def test_past_wedding_date(self, generator):
        result = generator.validate_ritual_configuration([], "2025-01-01", now=NOW)
        assert result.is_valid is False
        assert result.errors == [PAST_WEDDING_DATE_ERROR]

    def test_valid_configuration(self, generator):
        result = generator.validate_ritual_configuration(["poruwa", "reception"], WEDDING_DATE, now=NOW)
        assert result.is_valid is True
        assert result.errors == []
        assert result.warnings == []

    def test_poruwa_with_religious_ceremony_warns(self, generator):
        result = generator.validate_ritual_configuration(
            ["poruwa", "religious_ceremony"], WEDDING_DATE, now=NOW
        )
        assert PORUWA_RELIGIOUS_SPACING_WARNING in result.warnings
        assert result.is_valid is True

    def test_engagement_too_late(self, generator):
        """Wedding 30 days away: engagement needs 90-365 days of lead time."""
        wedding = (NOW + timedelta(days=30)).isoformat()
        result = generator.validate_ritual_configuration(["engagement"], wedding, now=NOW)

        assert result.is_valid is False
        assert any("at least 90 days" in w for w in result.warnings)
        assert any("more than 365 days" in e for e in result.errors)

    def test_warnings_do_not_invalidate(self, generator):
        """Wedding 12 hours away: poruwa minimum lead time already passed."""
        wedding = (NOW + timedelta(hours=12)).isoformat()
        result = generator.validate_ritual_configuration(["poruwa"], wedding, now=NOW)

        assert result.is_valid is True
        assert len(result.warnings) == 1

    def test_invalid_date_raises(self, generator):
        with pytest.raises(ValueError):
            generator.validate_ritual_configuration(["poruwa"], "", now=NOW)


class TestWeddingDateChecks:
    """Wedding date is checked even when nothing would be generated."""

    def test_timeline_rejects_bad_date_without_rituals(self, generator):
        with pytest.raises(ValueError):
            generator.get_ritual_timeline([], "garbage", now=NOW)

    def test_timeline_rejects_bad_date_for_unknown_rituals(self, generator):
        with pytest.raises(ValueError):
            generator.get_ritual_timeline(["foo"], "not-a-date", now=NOW)

    def test_timeline_empty_selection_with_valid_date(self, generator):
        assert generator.get_ritual_timeline([], WEDDING_DATE, now=NOW) == []


class TestNaiveNow:
    """A naive ``now`` override is read as UTC."""

    def test_validate_with_naive_now(self, generator):
        result = generator.validate_ritual_configuration(
            ["poruwa"], WEDDING_DATE, now=datetime(2026, 1, 1)
        )
        assert result.is_valid is True

    def test_timeline_with_naive_now(self, generator):
        timeline = generator.get_ritual_timeline(["poruwa"], WEDDING_DATE, now=datetime(2026, 6, 5))
        statuses = {item.task.template_id: item.status for item in timeline[0].tasks}
        assert statuses["poruwa-6"] == TaskStatus.DUE_SOON

    def test_naive_and_aware_now_agree(self, generator):
        naive = generator.validate_ritual_configuration(["engagement"], WEDDING_DATE, now=datetime(2026, 5, 1))
        aware = generator.validate_ritual_configuration(
            ["engagement"], WEDDING_DATE, now=datetime(2026, 5, 1, tzinfo=timezone.utc)
        )
        assert naive == aware

    def test_classify_with_naive_values(self, generator):
        due = datetime(2026, 1, 3)
        assert generator.classify_due_date(due, datetime(2026, 1, 1)) == TaskStatus.DUE_SOON
