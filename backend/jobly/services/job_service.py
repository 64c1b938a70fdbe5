import logging
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.database import run_query
from jobly.errors import DuplicateError, InvalidInputError, NotFoundError
from jobly.helpers.sql import sql_for_job_filters, sql_for_partial_update
from jobly.schemas.job import JobCreate, JobFilter

logger = logging.getLogger("jobly.jobs")

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'
JOB_FIELD_COLUMNS = {"companyHandle": "company_handle"}


def _normalize_equity(job: dict) -> dict:
    # SQLite hands NUMERIC back as int/float; go through str to keep 0.1 exact.
    if job.get("equity") is not None:
        job["equity"] = Decimal(str(job["equity"]))
    return job


def _integrity_error(exc: IntegrityError, duplicate_message: str) -> Exception:
    if "UNIQUE" in str(exc.orig):
        return DuplicateError(duplicate_message)
    return InvalidInputError(f"Invalid job data: {exc.orig}")


class JobService:
    def create(self, db: Session, data: JobCreate) -> dict:
        company = run_query(
            db, "SELECT handle FROM companies WHERE handle = $1", [data.company_handle]
        )
        if not company:
            raise InvalidInputError(f"No company: {data.company_handle}")

        duplicate = run_query(
            db,
            "SELECT id FROM jobs WHERE title = $1 AND company_handle = $2",
            [data.title, data.company_handle],
        )
        if duplicate:
            raise DuplicateError(f"Duplicate job: {data.title} at {data.company_handle}")

        try:
            rows = run_query(
                db,
                f"""INSERT INTO jobs (title, salary, equity, company_handle)
                    VALUES ($1, $2, $3, $4)
                    RETURNING {JOB_COLUMNS}""",
                # JobCreate has already parsed equity into a Decimal.
                [data.title, data.salary, data.equity, data.company_handle],
            )
            db.commit()
        except IntegrityError as exc:
            # A concurrent create can slip past the SELECT; UNIQUE still catches it.
            db.rollback()
            raise _integrity_error(
                exc, f"Duplicate job: {data.title} at {data.company_handle}"
            ) from exc

        job = _normalize_equity(rows[0])
        logger.info("Created job %s (%s at %s)", job["id"], job["title"], job["companyHandle"])
        return job

    def find_all(self, db: Session) -> list[dict]:
        rows = run_query(db, f"SELECT {JOB_COLUMNS} FROM jobs ORDER BY title")
        return [_normalize_equity(row) for row in rows]

    def find_filtered(self, db: Session, filters: JobFilter) -> list[dict]:
        where, values = sql_for_job_filters(filters)

        query = f"SELECT {JOB_COLUMNS} FROM jobs"
        if where:
            query += f" WHERE {where}"
        query += " ORDER BY title"

        logger.debug("Job search: %s %s", query, values)
        rows = run_query(db, query, values)
        return [_normalize_equity(row) for row in rows]

    def get(self, db: Session, job_id: int) -> dict:
        rows = run_query(db, f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", [job_id])
        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        return _normalize_equity(rows[0])

    def update(self, db: Session, job_id: int, data: dict[str, Any]) -> dict:
        """Partial update: only the fields present in ``data`` change."""
        set_cols, values = sql_for_partial_update(data, JOB_FIELD_COLUMNS)
        id_idx = f"${len(values) + 1}"

        query = f"""UPDATE jobs
                    SET {set_cols}
                    WHERE id = {id_idx}
                    RETURNING {JOB_COLUMNS}"""
        logger.debug("Job update: %s %s", query, [*values, job_id])

        try:
            rows = run_query(db, query, [*values, job_id])
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise _integrity_error(
                exc, f"Duplicate job: job {job_id} would clash with an existing posting"
            ) from exc

        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        return _normalize_equity(rows[0])

    def remove(self, db: Session, job_id: int) -> None:
        rows = run_query(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
        db.commit()
        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        logger.info("Deleted job %s", job_id)


job_service = JobService()
