"""Candidate, job and application records consumed by the matching core."""

import json
from collections.abc import Iterator
from typing import Any

from talentmatch.db.connection import get_connection
from talentmatch.schemas.candidate import CandidateProfile
from talentmatch.schemas.job import JobPosting, JobStatus

JOB_FETCH_BATCH_SIZE = 200


def _load_json(value: Any) -> dict:
    """JSONB columns come back as dicts on PostgreSQL and as text on SQLite."""
    if isinstance(value, str):
        return json.loads(value)
    return dict(value)


class SqlCatalogStore:
    """Reads candidates, active jobs and applications from the database.

    Records are returned as plain dicts; validation into pydantic models is
    left to the caller so that one malformed job does not fail a whole scan.
    """

    def get_candidate(self, candidate_id: str) -> dict | None:
        with get_connection() as db:
            cursor = db.cursor(dictionary=True)
            ph = db.placeholder
            cursor.execute(
                f"SELECT id, profile_json FROM candidates WHERE id = {ph}",
                (candidate_id,),
            )
            row = cursor.fetchone()

        if row is None:
            return None

        record = _load_json(row["profile_json"])
        record["id"] = row["id"]
        return record

    def get_job(self, job_id: str) -> dict | None:
        with get_connection() as db:
            cursor = db.cursor(dictionary=True)
            ph = db.placeholder
            cursor.execute(
                f"SELECT id, status, posting_json FROM jobs WHERE id = {ph}",
                (job_id,),
            )
            row = cursor.fetchone()

        if row is None:
            return None
        return self._job_record(row)

    def iter_active_jobs(self) -> Iterator[dict]:
        """Yield active job records in id order, fetched in batches."""
        with get_connection() as db:
            cursor = db.cursor(dictionary=True)
            ph = db.placeholder
            cursor.execute(
                f"SELECT id, status, posting_json FROM jobs WHERE status = {ph} ORDER BY id",
                (JobStatus.ACTIVE.value,),
            )
            while True:
                rows = cursor.fetchmany(JOB_FETCH_BATCH_SIZE)
                if not rows:
                    break
                for row in rows:
                    yield self._job_record(row)

    def get_applied_job_ids(self, candidate_id: str) -> set[str]:
        with get_connection() as db:
            cursor = db.cursor(dictionary=True)
            ph = db.placeholder
            cursor.execute(
                f"SELECT job_id FROM applications WHERE candidate_id = {ph}",
                (candidate_id,),
            )
            rows = cursor.fetchall()

        return {row["job_id"] for row in rows}

    def save_candidate(self, candidate: CandidateProfile | dict) -> None:
        """Insert or replace a candidate profile."""
        record = candidate.model_dump(mode="json") if isinstance(candidate, CandidateProfile) else dict(candidate)
        candidate_id = str(record.pop("id"))

        with get_connection() as db:
            cursor = db.cursor()
            ph = db.placeholder
            cursor.execute(
                f"""
                INSERT INTO candidates (id, profile_json) VALUES ({ph}, {ph})
                ON CONFLICT (id) DO UPDATE SET profile_json = EXCLUDED.profile_json
                """,
                (candidate_id, json.dumps(record)),
            )
            db.commit()

    def save_job(self, job: JobPosting | dict) -> None:
        """Insert or replace a job posting.

        Raw dicts are stored as given (only ``id`` is required) so that
        partially populated postings from upstream can be mirrored.
        """
        record = job.model_dump(mode="json") if isinstance(job, JobPosting) else dict(job)
        job_id = str(record.pop("id"))
        status = record.get("status") or JobStatus.ACTIVE.value

        with get_connection() as db:
            cursor = db.cursor()
            ph = db.placeholder
            cursor.execute(
                f"""
                INSERT INTO jobs (id, status, posting_json) VALUES ({ph}, {ph}, {ph})
                ON CONFLICT (id) DO UPDATE SET
                    status = EXCLUDED.status,
                    posting_json = EXCLUDED.posting_json
                """,
                (job_id, status, json.dumps(record)),
            )
            db.commit()

    def record_application(self, candidate_id: str, job_id: str) -> bool:
        """Record that a candidate applied to a job.

        Returns:
            True if the application was new, False if it already existed.
        """
        with get_connection() as db:
            cursor = db.cursor()
            ph = db.placeholder
            cursor.execute(
                f"""
                INSERT INTO applications (candidate_id, job_id) VALUES ({ph}, {ph})
                ON CONFLICT (candidate_id, job_id) DO NOTHING
                """,
                (candidate_id, job_id),
            )
            inserted = cursor.rowcount > 0
            db.commit()

        return inserted

    @staticmethod
    def _job_record(row: Any) -> dict:
        record = _load_json(row["posting_json"])
        record["id"] = row["id"]
        record["status"] = row["status"]
        return record
