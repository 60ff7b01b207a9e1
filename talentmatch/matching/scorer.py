"""Weighted combination of component scores into a match result."""

import math

from talentmatch.config import (
    EXPERIENCE_WEIGHT,
    LOCATION_WEIGHT,
    SKILLS_WEIGHT,
    TEXT_WEIGHT,
)
from talentmatch.matching.experience import (
    EntryCountYearsEstimator,
    ExperienceEstimator,
    YearsEstimator,
)
from talentmatch.matching.location import LocationMatcher
from talentmatch.matching.skills import SkillMatcher
from talentmatch.matching.text_similarity import (
    PairwiseTfidfScorer,
    TextSimilarityScorer,
    build_candidate_text,
    build_job_text,
)
from talentmatch.schemas.candidate import CandidateProfile
from talentmatch.schemas.job import JobPosting
from talentmatch.schemas.match import (
    ExperienceMatch,
    LocationMatch,
    MatchDetails,
    MatchResult,
    SkillsMatch,
)

EXCELLENT_MATCH_SCORE = 80
GOOD_MATCH_SCORE = 60


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up."""
    return int(math.floor(value + 0.5))


def generate_reasoning(
    skills_match: SkillsMatch,
    experience_match: ExperienceMatch,
    location_match: LocationMatch,
    score: float,
) -> str:
    """Build the one-line summary shown alongside a match score."""
    if score >= EXCELLENT_MATCH_SCORE:
        headline = "Excellent match!"
    elif score >= GOOD_MATCH_SCORE:
        headline = "Good match."
    else:
        headline = "Moderate match."

    return " ".join([
        headline,
        f"{round_half_up(skills_match.percentage)}% skills match.",
        experience_match.reason,
        location_match.reason,
    ])


class ScoreAggregator:
    """Combines the four component scores using fixed weights."""

    def __init__(
        self,
        skills_weight: float = SKILLS_WEIGHT,
        text_weight: float = TEXT_WEIGHT,
        experience_weight: float = EXPERIENCE_WEIGHT,
        location_weight: float = LOCATION_WEIGHT,
    ):
        self.skills_weight = skills_weight
        self.text_weight = text_weight
        self.experience_weight = experience_weight
        self.location_weight = location_weight

    def weighted_score(
        self,
        skills_match: SkillsMatch,
        text_score: float,
        experience_match: ExperienceMatch,
        location_match: LocationMatch,
    ) -> float:
        return (
            skills_match.percentage * self.skills_weight
            + text_score * self.text_weight
            + experience_match.score * self.experience_weight
            + location_match.score * self.location_weight
        )

    def combine(
        self,
        skills_match: SkillsMatch,
        text_score: float,
        experience_match: ExperienceMatch,
        location_match: LocationMatch,
    ) -> MatchResult:
        """Combine component scores into a MatchResult.

        The headline band in the reasoning uses the unrounded weighted score;
        the reported match score is rounded half-up and kept within 0-100.
        """
        score = self.weighted_score(skills_match, text_score, experience_match, location_match)
        match_score = min(100, max(0, round_half_up(score)))

        return MatchResult(
            match_score=match_score,
            match_details=MatchDetails(
                skills_match=skills_match,
                experience_match=experience_match,
                location_match=location_match,
            ),
            reasoning=generate_reasoning(skills_match, experience_match, location_match, score),
        )


class MatchScorer:
    """Runs every component scorer for a candidate/job pair."""

    def __init__(
        self,
        text_scorer: TextSimilarityScorer | None = None,
        skill_matcher: SkillMatcher | None = None,
        years_estimator: YearsEstimator | None = None,
        experience_estimator: ExperienceEstimator | None = None,
        location_matcher: LocationMatcher | None = None,
        aggregator: ScoreAggregator | None = None,
    ):
        self.text_scorer = text_scorer or PairwiseTfidfScorer()
        self.skill_matcher = skill_matcher or SkillMatcher()
        self.years_estimator = years_estimator or EntryCountYearsEstimator()
        self.experience_estimator = experience_estimator or ExperienceEstimator()
        self.location_matcher = location_matcher or LocationMatcher()
        self.aggregator = aggregator or ScoreAggregator()

    def score_one(self, candidate: CandidateProfile, job: JobPosting) -> MatchResult:
        """Score a single candidate against a single job."""
        text_score = self.text_scorer.score(build_candidate_text(candidate), build_job_text(job))
        skills_match = self.skill_matcher.score(candidate.skills, job.required_skills)
        experience_match = self.experience_estimator.score(
            self.years_estimator.estimate(candidate), job.experience_level
        )
        location_match = self.location_matcher.score(candidate.location, job.location)

        return self.aggregator.combine(skills_match, text_score, experience_match, location_match)


_default_scorer: MatchScorer | None = None


def score_one(candidate: CandidateProfile, job: JobPosting) -> MatchResult:
    """Score a candidate against a job with the default component scorers."""
    global _default_scorer
    if _default_scorer is None:
        _default_scorer = MatchScorer()
    return _default_scorer.score_one(candidate, job)
