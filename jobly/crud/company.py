"""
CRUD operations for companies.

Statements are parameterized SQL: listing filters come from
`filters.sql_for_companies_filter` and partial updates from
`sql.sql_for_partial_update`.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, DuplicateError, NotFoundError
from jobly.crud.filters import join_predicates, sql_for_companies_filter
from jobly.crud.sql import sql_for_partial_update
from jobly.schemas.company import CompanyCreateRequest, CompanyFilter

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'

# Caller-facing field -> column, where they differ
JS_TO_SQL = {"numEmployees": "num_employees", "logoUrl": "logo_url"}
UPDATABLE_FIELDS = ("name", "description", "numEmployees", "logoUrl")


def create(db: Session, company_data: CompanyCreateRequest) -> Dict[str, Any]:
    """
    Create a company.

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        DuplicateError: handle or name already taken
    """
    existing = db.execute(
        text("SELECT handle FROM companies WHERE handle = :handle"),
        {"handle": company_data.handle},
    ).first()
    if existing:
        raise DuplicateError(f"Duplicate company: {company_data.handle}")

    try:
        row = db.execute(
            text(
                "INSERT INTO companies (handle, name, description, num_employees, logo_url) "
                "VALUES (:handle, :name, :description, :num_employees, :logo_url) "
                f"RETURNING {COMPANY_COLUMNS}"
            ),
            {
                "handle": company_data.handle,
                "name": company_data.name,
                "description": company_data.description,
                "num_employees": company_data.num_employees,
                "logo_url": company_data.logo_url,
            },
        ).mappings().first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"Duplicate company: {company_data.name}")

    logger.info(f"Created company {row['handle']}")
    return dict(row)


def find_all(db: Session, filters: Optional[CompanyFilter] = None) -> List[Dict[str, Any]]:
    """
    List companies ordered by name, optionally filtered.

    Raises:
        InvalidRangeError: minEmployees > maxEmployees
    """
    where, params = join_predicates(sql_for_companies_filter(filters))
    rows = db.execute(
        text(f"SELECT {COMPANY_COLUMNS} FROM companies {where} ORDER BY name"),
        params,
    ).mappings().all()
    return [dict(row) for row in rows]


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Get a company with the jobs it offers.

    Raises:
        NotFoundError: no such handle
    """
    row = db.execute(
        text(f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = :handle"),
        {"handle": handle},
    ).mappings().first()
    if not row:
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    jobs = db.execute(
        text("SELECT id, title, salary, equity FROM jobs WHERE company_handle = :handle ORDER BY id"),
        {"handle": handle},
    ).mappings().all()
    company["jobs"] = [
        {**job, "equity": float(job["equity"]) if job["equity"] is not None else None}
        for job in jobs
    ]
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company; only the keys present in `data` change.

    Raises:
        BadRequestError: empty or unknown fields
        NotFoundError: no such handle
        DuplicateError: new name already taken
    """
    clause = sql_for_partial_update(data, JS_TO_SQL, UPDATABLE_FIELDS)
    handle_var = clause.next_placeholder()
    params = clause.bind_params()
    params[handle_var] = handle

    try:
        row = db.execute(
            text(
                f"UPDATE companies SET {clause.set_cols} "
                f"WHERE handle = :{handle_var} "
                f"RETURNING {COMPANY_COLUMNS}"
            ),
            params,
        ).mappings().first()
    except IntegrityError:
        db.rollback()
        if data.get("name") is not None:
            raise DuplicateError(f"Duplicate company: {data['name']}")
        raise BadRequestError(f"Invalid update for company: {handle}")

    if not row:
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data.keys())}")
    return dict(row)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (and, through the foreign key, its jobs).

    Raises:
        NotFoundError: no such handle
    """
    row = db.execute(
        text("DELETE FROM companies WHERE handle = :handle RETURNING handle"),
        {"handle": handle},
    ).first()
    if not row:
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
