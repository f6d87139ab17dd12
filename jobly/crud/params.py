"""
Query string parsing for listing endpoints.

Query values always arrive as strings. These parsers copy only the keys a
resource recognizes, coerce numbers and booleans, and drop anything that
does not parse instead of defaulting it.
"""

import logging
import math
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from jobly.core.errors import BadRequestError
from jobly.schemas.company import CompanyFilter
from jobly.schemas.job import JobFilter

logger = logging.getLogger(__name__)


def parse_number(raw: Optional[str]) -> Optional[Union[int, float]]:
    """
    Numeric value of `raw`: an int when it is written as one, otherwise a float.

    None if absent, non-numeric, or not finite ("inf", "nan").
    """
    if raw is None:
        return None
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_bool(raw: Optional[str]) -> Optional[bool]:
    """True for "true", False for "false", None for anything else."""
    if raw == "true":
        return True
    if raw == "false":
        return False
    return None


def _build(model, parsed: Dict[str, Any]):
    try:
        return model.model_validate(parsed)
    except ValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise BadRequestError(errors)


def parse_companies_query(query_params: Mapping[str, str]) -> CompanyFilter:
    """Build a CompanyFilter from name, minEmployees and maxEmployees."""
    parsed: Dict[str, Any] = {}

    if query_params.get("name"):
        parsed["name"] = query_params["name"]

    for key in ("minEmployees", "maxEmployees"):
        value = parse_number(query_params.get(key))
        if value is not None:
            parsed[key] = value

    return _build(CompanyFilter, parsed)


def parse_jobs_query(query_params: Mapping[str, str]) -> JobFilter:
    """Build a JobFilter from title, minSalary and hasEquity."""
    parsed: Dict[str, Any] = {}

    if query_params.get("title"):
        parsed["title"] = query_params["title"]

    min_salary = parse_number(query_params.get("minSalary"))
    if min_salary is not None:
        parsed["minSalary"] = min_salary

    has_equity = parse_bool(query_params.get("hasEquity"))
    if has_equity is not None:
        parsed["hasEquity"] = has_equity
    elif query_params.get("hasEquity"):
        logger.info(f"Ignoring unrecognized hasEquity value: {query_params['hasEquity']!r}")

    return _build(JobFilter, parsed)
