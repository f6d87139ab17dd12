"""
CRUD operations for jobs.

Implements the Repository pattern over parameterized SQL. Jobs are listed
in title order; identity is the integer id assigned by the store.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.crud.filters import join_predicates, sql_for_jobs_filter
from jobly.crud.sql import sql_for_partial_update
from jobly.schemas.job import JobCreateRequest, JobFilter

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

JS_TO_SQL = {"companyHandle": "company_handle"}
UPDATABLE_FIELDS = ("title", "salary", "equity", "companyHandle")


def _to_job(row) -> Dict[str, Any]:
    job = dict(row)
    # NUMERIC comes back as Decimal from PostgreSQL
    if job["equity"] is not None:
        job["equity"] = float(job["equity"])
    return job


def create(db: Session, job_data: JobCreateRequest) -> Dict[str, Any]:
    """
    Create a job.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        {id, title, salary, equity, companyHandle} with the generated id

    Raises:
        BadRequestError: companyHandle does not name a company
    """
    try:
        row = db.execute(
            text(
                "INSERT INTO jobs (title, salary, equity, company_handle) "
                "VALUES (:title, :salary, :equity, :company_handle) "
                f"RETURNING {JOB_COLUMNS}"
            ),
            {
                "title": job_data.title,
                "salary": job_data.salary,
                "equity": job_data.equity,
                "company_handle": job_data.company_handle,
            },
        ).mappings().first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"No company: {job_data.company_handle}")

    logger.info(f"Created job {row['id']}: {row['title']}")
    return _to_job(row)


def find_all(db: Session, filters: Optional[JobFilter] = None) -> List[Dict[str, Any]]:
    """
    List jobs ordered by title.

    Args:
        db: Database session
        filters: Optional title / minSalary / hasEquity filter

    Returns:
        List of job dicts; empty when nothing matches
    """
    where, params = join_predicates(sql_for_jobs_filter(filters))
    rows = db.execute(
        text(f"SELECT {JOB_COLUMNS} FROM jobs {where} ORDER BY title"),
        params,
    ).mappings().all()
    return [_to_job(row) for row in rows]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: no such job
    """
    row = db.execute(
        text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = :id"),
        {"id": job_id},
    ).mappings().first()
    if not row:
        raise NotFoundError(f"No job: {job_id}")
    return _to_job(row)


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only the keys present in `data` change.

    Data can include: {title, salary, equity, companyHandle}

    Raises:
        BadRequestError: empty payload, unknown field, or unknown companyHandle
        NotFoundError: no such job
    """
    clause = sql_for_partial_update(data, JS_TO_SQL, UPDATABLE_FIELDS)
    id_var = clause.next_placeholder()
    params = clause.bind_params()
    params[id_var] = job_id

    try:
        row = db.execute(
            text(
                f"UPDATE jobs SET {clause.set_cols} "
                f"WHERE id = :{id_var} "
                f"RETURNING {JOB_COLUMNS}"
            ),
            params,
        ).mappings().first()
    except IntegrityError:
        db.rollback()
        if "companyHandle" in data:
            raise BadRequestError(f"No company: {data['companyHandle']}")
        raise BadRequestError(f"Invalid update for job: {job_id}")

    if not row:
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data.keys())}")
    return _to_job(row)


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: no such job
    """
    row = db.execute(
        text("DELETE FROM jobs WHERE id = :id RETURNING id"),
        {"id": job_id},
    ).first()
    if not row:
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
