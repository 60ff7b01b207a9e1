"""Recommendation persistence with per-generation replacement and expiry."""

import json
import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from talentmatch.config import HIGH_MATCH_SCORE, RECOMMENDATION_TTL_DAYS
from talentmatch.db.connection import get_connection
from talentmatch.schemas.match import Recommendation

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id, candidate_id, job_id, match_score, match_details, reasoning, "
    "viewed, viewed_at, created_at, expires_at"
)


def _timestamp(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


def _row_to_recommendation(row: Any) -> Recommendation:
    match_details = row["match_details"]
    if isinstance(match_details, str):
        match_details = json.loads(match_details)

    return Recommendation(
        id=row["id"],
        candidate_id=row["candidate_id"],
        job_id=row["job_id"],
        match_score=row["match_score"],
        match_details=match_details,
        reasoning=row["reasoning"] or "",
        viewed=bool(row["viewed"]),
        viewed_at=row["viewed_at"],
        created_at=row["created_at"],
        expires_at=row["expires_at"],
    )


class SqlRecommendationStore:
    """Stores recommendations keyed by (candidate_id, job_id).

    Records expire ``ttl_days`` after they are written. Expired records are
    never returned by reads and are removed by ``purge_expired``.
    """

    def __init__(self, ttl_days: int = RECOMMENDATION_TTL_DAYS):
        self.ttl = timedelta(days=ttl_days)

    def _now(self) -> datetime:
        return datetime.now(UTC)

    def replace_recommendations(
        self,
        candidate_id: str,
        recommendations: list[Recommendation],
    ) -> list[Recommendation]:
        """Replace a candidate's recommendation set in one transaction.

        Every new recommendation is upserted on (candidate_id, job_id) with
        a fresh generation id, then rows of the candidate carrying any other
        generation id are deleted. Concurrent replacements therefore leave
        exactly one complete generation behind, never a mix or duplicates.

        Args:
            candidate_id: Candidate whose set is replaced.
            recommendations: New recommendations (may be empty).

        Returns:
            The persisted recommendations, sorted by match score descending.
        """
        generation_id = uuid.uuid4().hex
        created_at = self._now()
        expires_at = created_at + self.ttl

        with get_connection() as db:
            cursor = db.cursor(dictionary=True)
            ph = db.placeholder
            try:
                for rec in recommendations:
                    cursor.execute(
                        f"""
                        INSERT INTO recommendations (
                            candidate_id, job_id, match_score, match_details, reasoning,
                            viewed, viewed_at, created_at, expires_at, generation_id
                        ) VALUES ({", ".join([ph] * 10)})
                        ON CONFLICT (candidate_id, job_id) DO UPDATE SET
                            match_score = EXCLUDED.match_score,
                            match_details = EXCLUDED.match_details,
                            reasoning = EXCLUDED.reasoning,
                            viewed = EXCLUDED.viewed,
                            viewed_at = EXCLUDED.viewed_at,
                            created_at = EXCLUDED.created_at,
                            expires_at = EXCLUDED.expires_at,
                            generation_id = EXCLUDED.generation_id
                        """,
                        (
                            candidate_id,
                            rec.job_id,
                            rec.match_score,
                            rec.match_details.model_dump_json(),
                            rec.reasoning,
                            False,
                            None,
                            _timestamp(created_at),
                            _timestamp(expires_at),
                            generation_id,
                        ),
                    )

                cursor.execute(
                    f"""
                    DELETE FROM recommendations
                    WHERE candidate_id = {ph} AND generation_id <> {ph}
                    """,
                    (candidate_id, generation_id),
                )
                pruned = cursor.rowcount

                cursor.execute(
                    f"""
                    SELECT {_COLUMNS} FROM recommendations
                    WHERE candidate_id = {ph} AND generation_id = {ph}
                    ORDER BY match_score DESC, job_id ASC
                    """,
                    (candidate_id, generation_id),
                )
                rows = cursor.fetchall()
                db.commit()
            except Exception:
                db.rollback()
                raise

        logger.info(
            f"Replaced recommendations for candidate {candidate_id}: "
            f"{len(rows)} saved, {pruned} pruned"
        )
        return [_row_to_recommendation(row) for row in rows]

    def list_for_candidate(self, candidate_id: str, min_score: int, limit: int) -> list[Recommendation]:
        return self._list("candidate_id", candidate_id, min_score, limit)

    def list_for_job(self, job_id: str, min_score: int, limit: int) -> list[Recommendation]:
        return self._list("job_id", job_id, min_score, limit)

    def _list(self, key_column: str, key: str, min_score: int, limit: int) -> list[Recommendation]:
        with get_connection() as db:
            cursor = db.cursor(dictionary=True)
            ph = db.placeholder
            cursor.execute(
                f"""
                SELECT {_COLUMNS} FROM recommendations
                WHERE {key_column} = {ph} AND match_score >= {ph} AND expires_at > {ph}
                ORDER BY match_score DESC, job_id ASC, candidate_id ASC
                LIMIT {ph}
                """,
                (key, min_score, _timestamp(self._now()), limit),
            )
            rows = cursor.fetchall()

        return [_row_to_recommendation(row) for row in rows]

    def get(self, candidate_id: str, recommendation_id: int) -> Recommendation | None:
        with get_connection() as db:
            cursor = db.cursor(dictionary=True)
            ph = db.placeholder
            cursor.execute(
                f"""
                SELECT {_COLUMNS} FROM recommendations
                WHERE id = {ph} AND candidate_id = {ph} AND expires_at > {ph}
                """,
                (recommendation_id, candidate_id, _timestamp(self._now())),
            )
            row = cursor.fetchone()

        return _row_to_recommendation(row) if row is not None else None

    def mark_viewed(self, candidate_id: str, recommendation_id: int) -> Recommendation | None:
        """Set the viewed flag on one of the candidate's recommendations.

        Returns:
            The updated recommendation, or None if the candidate has no
            unexpired recommendation with that id.
        """
        with get_connection() as db:
            cursor = db.cursor()
            ph = db.placeholder
            cursor.execute(
                f"""
                UPDATE recommendations SET viewed = {ph}, viewed_at = {ph}
                WHERE id = {ph} AND candidate_id = {ph} AND expires_at > {ph}
                """,
                (
                    True,
                    _timestamp(self._now()),
                    recommendation_id,
                    candidate_id,
                    _timestamp(self._now()),
                ),
            )
            updated = cursor.rowcount
            db.commit()

        if not updated:
            return None
        return self.get(candidate_id, recommendation_id)

    def stats(self, candidate_id: str) -> dict[str, int]:
        with get_connection() as db:
            cursor = db.cursor(dictionary=True)
            ph = db.placeholder
            cursor.execute(
                f"""
                SELECT
                    COUNT(*) AS total,
                    COALESCE(SUM(CASE WHEN viewed THEN 1 ELSE 0 END), 0) AS viewed,
                    COALESCE(SUM(CASE WHEN match_score >= {ph} THEN 1 ELSE 0 END), 0) AS high_match,
                    AVG(match_score) AS average_score
                FROM recommendations
                WHERE candidate_id = {ph} AND expires_at > {ph}
                """,
                (HIGH_MATCH_SCORE, candidate_id, _timestamp(self._now())),
            )
            row = cursor.fetchone()

        total = int(row["total"])
        viewed = int(row["viewed"])
        average = row["average_score"]
        return {
            "total": total,
            "viewed": viewed,
            "unviewed": total - viewed,
            "high_match": int(row["high_match"]),
            "average_score": int(float(average) + 0.5) if average is not None else 0,
        }

    def delete_for_candidate(self, candidate_id: str) -> int:
        with get_connection() as db:
            cursor = db.cursor()
            ph = db.placeholder
            cursor.execute(
                f"DELETE FROM recommendations WHERE candidate_id = {ph}",
                (candidate_id,),
            )
            deleted = cursor.rowcount
            db.commit()

        return deleted

    def purge_expired(self) -> int:
        """Delete every recommendation past its expiry time."""
        with get_connection() as db:
            cursor = db.cursor()
            ph = db.placeholder
            cursor.execute(
                f"DELETE FROM recommendations WHERE expires_at <= {ph}",
                (_timestamp(self._now()),),
            )
            deleted = cursor.rowcount
            db.commit()

        if deleted:
            logger.info(f"Purged {deleted} expired recommendations")
        return deleted
