"""Interfaces of the collaborators the recommendation service reads from and writes to."""

from collections.abc import Iterator
from typing import Protocol

from talentmatch.schemas.match import Recommendation


class CatalogStore(Protocol):
    """Source of candidate, job and application records (plain dicts)."""

    def get_candidate(self, candidate_id: str) -> dict | None: ...

    def get_job(self, job_id: str) -> dict | None: ...

    def iter_active_jobs(self) -> Iterator[dict]: ...

    def get_applied_job_ids(self, candidate_id: str) -> set[str]: ...


class RecommendationStore(Protocol):
    """Persistence for recommendation sets."""

    def replace_recommendations(
        self, candidate_id: str, recommendations: list[Recommendation]
    ) -> list[Recommendation]: ...

    def list_for_candidate(self, candidate_id: str, min_score: int, limit: int) -> list[Recommendation]: ...

    def list_for_job(self, job_id: str, min_score: int, limit: int) -> list[Recommendation]: ...

    def get(self, candidate_id: str, recommendation_id: int) -> Recommendation | None: ...

    def mark_viewed(self, candidate_id: str, recommendation_id: int) -> Recommendation | None: ...

    def stats(self, candidate_id: str) -> dict[str, int]: ...

    def delete_for_candidate(self, candidate_id: str) -> int: ...

    def purge_expired(self) -> int: ...
