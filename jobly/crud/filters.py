"""
Filter clause builders for listing queries.

Each builder turns a typed filter record into an ordered list of
predicates. A predicate is a self-contained boolean SQL condition plus the
values it binds; no user value is ever written into the SQL text.
Predicates are joined with AND by `join_predicates`.
"""

import logging
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from jobly.core.errors import InvalidRangeError
from jobly.schemas.company import CompanyFilter
from jobly.schemas.job import JobFilter

logger = logging.getLogger(__name__)


class Predicate(NamedTuple):
    sql: str
    params: Dict[str, Any]


def _like_pattern(term: str) -> str:
    """Lowercased substring pattern with LIKE wildcards escaped."""
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _contains(column: str, param: str, term: str) -> Predicate:
    return Predicate(
        sql=f"LOWER(\"{column}\") LIKE :{param} ESCAPE '\\'",
        params={param: _like_pattern(term)},
    )


def sql_for_companies_filter(filters: Optional[CompanyFilter]) -> List[Predicate]:
    """
    Predicates for GET /companies, in order: name, then employee bounds.

    Both bounds present collapse into one inclusive BETWEEN.

    Raises:
        InvalidRangeError: minEmployees > maxEmployees
    """
    if filters is None:
        return []

    predicates: List[Predicate] = []
    low, high = filters.min_employees, filters.max_employees

    if low is not None and high is not None and low > high:
        logger.warning(f"Rejected company filter with minEmployees {low} > maxEmployees {high}")
        raise InvalidRangeError("minEmployees cannot be greater than maxEmployees")

    if filters.name:
        predicates.append(_contains("name", "name", filters.name))

    if low is not None and high is not None:
        predicates.append(Predicate(
            sql='"num_employees" BETWEEN :min_employees AND :max_employees',
            params={"min_employees": low, "max_employees": high},
        ))
    elif low is not None:
        predicates.append(Predicate(
            sql='"num_employees" >= :min_employees',
            params={"min_employees": low},
        ))
    elif high is not None:
        predicates.append(Predicate(
            sql='"num_employees" <= :max_employees',
            params={"max_employees": high},
        ))

    return predicates


def sql_for_jobs_filter(filters: Optional[JobFilter]) -> List[Predicate]:
    """
    Predicates for GET /jobs, in order: title, minSalary, hasEquity.

    hasEquity=true keeps jobs with equity above zero; hasEquity=false keeps
    jobs with exactly zero equity; absent imposes nothing.
    """
    if filters is None:
        return []

    predicates: List[Predicate] = []

    if filters.title:
        predicates.append(_contains("title", "title", filters.title))

    if filters.min_salary is not None:
        predicates.append(Predicate(
            sql='"salary" >= :min_salary',
            params={"min_salary": filters.min_salary},
        ))

    if filters.has_equity is True:
        predicates.append(Predicate(sql='"equity" > 0', params={}))
    elif filters.has_equity is False:
        predicates.append(Predicate(sql='"equity" = 0', params={}))

    return predicates


def join_predicates(predicates: List[Predicate]) -> Tuple[str, Dict[str, Any]]:
    """
    AND the predicates together.

    Returns ("WHERE ...", params), or ("", {}) when there is nothing to filter.
    """
    if not predicates:
        return "", {}

    params: Dict[str, Any] = {}
    for predicate in predicates:
        params.update(predicate.params)

    return "WHERE " + " AND ".join(p.sql for p in predicates), params
