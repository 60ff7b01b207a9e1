"""Experience-level scoring."""

from typing import Protocol

from talentmatch.config import YEARS_PER_EXPERIENCE_ENTRY
from talentmatch.schemas.candidate import CandidateProfile
from talentmatch.schemas.job import ExperienceLevel
from talentmatch.schemas.match import ExperienceMatch

# Inclusive (min, max) years for each level
LEVEL_RANGES: dict[ExperienceLevel, tuple[float, float]] = {
    ExperienceLevel.ENTRY: (0, 2),
    ExperienceLevel.MID: (2, 5),
    ExperienceLevel.SENIOR: (5, 10),
    ExperienceLevel.LEAD: (8, 100),
}
DEFAULT_LEVEL = ExperienceLevel.MID

SHORTFALL_PENALTY_PER_YEAR = 20
OVERQUALIFIED_SCORE = 90


class YearsEstimator(Protocol):
    """Estimates a candidate's years of experience."""

    def estimate(self, candidate: CandidateProfile) -> float: ...


class EntryCountYearsEstimator:
    """Credits a fixed number of years per work-history entry."""

    def __init__(self, years_per_entry: int = YEARS_PER_EXPERIENCE_ENTRY):
        self.years_per_entry = years_per_entry

    def estimate(self, candidate: CandidateProfile) -> float:
        return len(candidate.experience) * self.years_per_entry


def level_range(job_level: ExperienceLevel | str | None) -> tuple[float, float]:
    """Return the years range for a level, falling back to mid for unknown levels."""
    level = None
    if job_level is not None:
        try:
            level = ExperienceLevel(job_level)
        except ValueError:
            level = None
    return LEVEL_RANGES[level or DEFAULT_LEVEL]


class ExperienceEstimator:
    def score(self, candidate_years: float, job_level: ExperienceLevel | str | None) -> ExperienceMatch:
        """Score candidate years against the job's experience band.

        Args:
            candidate_years: Estimated years of experience.
            job_level: Requested level; unknown or missing levels use mid.

        Returns:
            ExperienceMatch with score 100 inside the band, a linear
            penalty per missing year below it, and a fixed score above it.
        """
        min_years, max_years = level_range(job_level)

        if min_years <= candidate_years <= max_years:
            return ExperienceMatch(score=100, reason="Perfect experience match")

        if candidate_years < min_years:
            shortfall = min_years - candidate_years
            return ExperienceMatch(
                score=max(0, 100 - shortfall * SHORTFALL_PENALTY_PER_YEAR),
                reason=f"{shortfall:g} years below requirement",
            )

        return ExperienceMatch(score=OVERQUALIFIED_SCORE, reason="Over-qualified but suitable")
