"""Recommendation service for scoring a candidate against the job catalog.

This service handles:
- Batch generation: score every active job the candidate has not applied
  to, keep matches above the threshold and replace the stored set
- Reads over the stored set (list, get, stats, per-job candidates)
- Single-pair scoring used when a candidate applies to a job

Regeneration for one candidate is serialized with a per-candidate lock, and
the store replaces the set with an upsert plus prune, so concurrent calls
never leave duplicate or partially stale records behind.
"""

import logging
import threading
import weakref
from typing import Any

from pydantic import ValidationError as SchemaValidationError

from talentmatch.config import (
    DEFAULT_LIST_LIMIT,
    DEFAULT_LIST_MIN_SCORE,
    JOB_CANDIDATES_LIMIT,
    JOB_CANDIDATES_MIN_SCORE,
    RECOMMENDATION_THRESHOLD,
)
from talentmatch.errors import NotFoundError, ValidationError
from talentmatch.matching.scorer import MatchScorer
from talentmatch.schemas.candidate import CandidateProfile
from talentmatch.schemas.job import JobPosting, JobStatus
from talentmatch.schemas.match import MatchResult, Recommendation
from talentmatch.services.stores import CatalogStore, RecommendationStore

logger = logging.getLogger(__name__)


class CandidateLocks:
    """Hands out one lock per candidate id.

    Entries are dropped once no caller holds a reference to the lock.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()

    def __len__(self) -> int:
        return len(self._locks)

    def lock_for(self, candidate_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(candidate_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[candidate_id] = lock
            return lock


_candidate_locks = CandidateLocks()


def _as_candidate(candidate: CandidateProfile | dict) -> CandidateProfile:
    if isinstance(candidate, CandidateProfile):
        return candidate
    try:
        return CandidateProfile.model_validate(candidate)
    except SchemaValidationError as e:
        raise ValidationError(f"Invalid candidate profile: {e}") from e


def _as_job(job: JobPosting | dict) -> JobPosting:
    if isinstance(job, JobPosting):
        return job
    try:
        return JobPosting.model_validate(job)
    except SchemaValidationError as e:
        raise ValidationError(f"Invalid job posting: {e}") from e


def _sort_key(recommendation: Recommendation) -> tuple[int, str]:
    return (-recommendation.match_score, recommendation.job_id)


class RecommendationGenerator:
    """Generates, stores and serves job recommendations for candidates."""

    def __init__(
        self,
        catalog: CatalogStore,
        store: RecommendationStore,
        scorer: MatchScorer | None = None,
        locks: CandidateLocks | None = None,
    ):
        self.catalog = catalog
        self.store = store
        self.scorer = scorer or MatchScorer()
        self.locks = locks or _candidate_locks

    def _load_candidate(self, candidate_id: str) -> CandidateProfile:
        record = self.catalog.get_candidate(candidate_id)
        if record is None:
            raise NotFoundError(f"Candidate {candidate_id} not found")
        return _as_candidate(record)

    def _load_job(self, job_id: str) -> JobPosting:
        record = self.catalog.get_job(job_id)
        if record is None:
            raise NotFoundError(f"Job {job_id} not found")
        return _as_job(record)

    def generate(self, candidate_id: str) -> list[Recommendation]:
        """Regenerate and return the candidate's recommendations.

        Raises:
            NotFoundError: If the candidate is unknown or no job is active.
            ValidationError: If the candidate has no skills.
        """
        _, recommendations = self.generate_with_stats(candidate_id)
        return recommendations

    def generate_with_stats(self, candidate_id: str) -> tuple[dict[str, Any], list[Recommendation]]:
        """Regenerate the candidate's recommendations and report on the run.

        Steps:
        1. Load the candidate and require at least one skill
        2. Stream active jobs, skipping those already applied to
        3. Score each job; malformed job records are skipped and reported
        4. Keep matches scoring at least RECOMMENDATION_THRESHOLD
        5. Replace the stored set and return it, best match first

        Returns:
            Tuple of (stats dict, list of persisted Recommendation objects
            sorted by match_score descending).
        """
        candidate = self._load_candidate(candidate_id)
        if not candidate.skills:
            raise ValidationError("Please add skills to your profile to get job recommendations")

        stats: dict[str, Any] = {
            "jobs_considered": 0,
            "jobs_skipped_applied": 0,
            "jobs_skipped_malformed": [],
            "jobs_scored": 0,
            "recommendations_saved": 0,
        }

        with self.locks.lock_for(candidate_id):
            applied_job_ids = {str(job_id) for job_id in self.catalog.get_applied_job_ids(candidate_id)}
            logger.info(
                f"Generating recommendations for candidate {candidate_id} "
                f"({len(applied_job_ids)} jobs already applied to)"
            )

            recommendations: list[Recommendation] = []
            for record in self.catalog.iter_active_jobs():
                stats["jobs_considered"] += 1
                job_id = str(record.get("id"))

                if job_id in applied_job_ids:
                    stats["jobs_skipped_applied"] += 1
                    continue

                try:
                    job = JobPosting.model_validate(record)
                except SchemaValidationError as e:
                    logger.warning(f"Skipping malformed job {job_id}: {e.error_count()} validation errors")
                    stats["jobs_skipped_malformed"].append(job_id)
                    continue

                result = self.scorer.score_one(candidate, job)
                stats["jobs_scored"] += 1

                if result.match_score >= RECOMMENDATION_THRESHOLD:
                    recommendations.append(Recommendation.from_match(candidate_id, job.id, result))

            if stats["jobs_considered"] == 0:
                logger.warning("No active jobs available")
                raise NotFoundError("No active jobs available")

            recommendations.sort(key=_sort_key)
            saved = self.store.replace_recommendations(candidate_id, recommendations)

        saved.sort(key=_sort_key)
        stats["recommendations_saved"] = len(saved)
        logger.info(f"Generated {len(saved)} job recommendations: {stats}")
        return stats, saved

    def list_recommendations(
        self,
        candidate_id: str,
        min_score: int = DEFAULT_LIST_MIN_SCORE,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[Recommendation]:
        """Return the candidate's unexpired recommendations, best first."""
        return self.store.list_for_candidate(candidate_id, min_score=min_score, limit=limit)

    def get(self, candidate_id: str, recommendation_id: int) -> Recommendation:
        recommendation = self.store.get(candidate_id, recommendation_id)
        if recommendation is None:
            raise NotFoundError("Recommendation not found")
        return recommendation

    def mark_viewed(self, candidate_id: str, recommendation_id: int) -> Recommendation:
        recommendation = self.store.mark_viewed(candidate_id, recommendation_id)
        if recommendation is None:
            raise NotFoundError("Recommendation not found")
        return recommendation

    def stats(self, candidate_id: str) -> dict[str, int]:
        """Summarize the candidate's stored recommendations."""
        return self.store.stats(candidate_id)

    def clear(self, candidate_id: str) -> int:
        with self.locks.lock_for(candidate_id):
            deleted = self.store.delete_for_candidate(candidate_id)
        logger.info(f"Cleared {deleted} recommendations for candidate {candidate_id}")
        return deleted

    def top_candidates(
        self,
        job_id: str,
        min_score: int = JOB_CANDIDATES_MIN_SCORE,
        limit: int = JOB_CANDIDATES_LIMIT,
    ) -> list[Recommendation]:
        """Return the strongest stored recommendations pointing at a job."""
        return self.store.list_for_job(job_id, min_score=min_score, limit=limit)

    def purge_expired(self) -> int:
        return self.store.purge_expired()

    def score_one(self, candidate: CandidateProfile | dict, job: JobPosting | dict) -> MatchResult:
        """Score one candidate against one job without persisting anything."""
        return self.scorer.score_one(_as_candidate(candidate), _as_job(job))

    def score_application(self, candidate_id: str, job_id: str) -> MatchResult:
        """Score a candidate for a job they are applying to.

        Raises:
            NotFoundError: If the candidate or job does not exist.
            ValidationError: If the job no longer accepts applications.
        """
        job = self._load_job(job_id)
        if job.status != JobStatus.ACTIVE:
            raise ValidationError("This job is no longer accepting applications")
        candidate = self._load_candidate(candidate_id)
        return self.scorer.score_one(candidate, job)
