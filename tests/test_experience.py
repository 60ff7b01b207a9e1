"""Tests for experience-level scoring."""

import pytest

from talentmatch.matching.experience import (
    EntryCountYearsEstimator,
    ExperienceEstimator,
    level_range,
)
from talentmatch.schemas.job import ExperienceLevel
from tests.test_utils import make_test_candidate


class TestEntryCountYearsEstimator:
    @pytest.mark.parametrize("entries", [0, 1, 3])
    def test_two_years_per_entry(self, entries):
        candidate = make_test_candidate(experience=[("Dev", "Work")] * entries)

        assert EntryCountYearsEstimator().estimate(candidate) == 2 * entries


class TestLevelRange:
    def test_known_levels(self):
        assert level_range(ExperienceLevel.ENTRY) == (0, 2)
        assert level_range("senior") == (5, 10)
        assert level_range("LEAD") == (8, 100)

    def test_unknown_or_missing_level_defaults_to_mid(self):
        assert level_range("principal") == (2, 5)
        assert level_range(None) == (2, 5)


class TestExperienceEstimator:
    def test_within_range(self):
        result = ExperienceEstimator().score(4, ExperienceLevel.MID)

        assert result.score == 100
        assert result.reason == "Perfect experience match"

    @pytest.mark.parametrize(
        ("years", "level"),
        [(0, "entry"), (2, "entry"), (2, "mid"), (5, "mid"), (5, "senior"), (10, "senior"), (8, "lead")],
    )
    def test_range_bounds_are_inclusive(self, years, level):
        assert ExperienceEstimator().score(years, level).score == 100

    def test_below_range(self):
        result = ExperienceEstimator().score(2, ExperienceLevel.SENIOR)

        assert result.score == 40
        assert result.reason == "3 years below requirement"

    def test_far_below_range_floors_at_zero(self):
        result = ExperienceEstimator().score(0, ExperienceLevel.LEAD)

        assert result.score == 0
        assert result.reason == "8 years below requirement"

    def test_above_range(self):
        result = ExperienceEstimator().score(12, ExperienceLevel.SENIOR)

        assert result.score == 90
        assert result.reason == "Over-qualified but suitable"

    def test_unknown_level_uses_mid(self):
        assert ExperienceEstimator().score(0, None).score == 60
        assert ExperienceEstimator().score(6, "principal").score == 90
