"""
SQL helper for partial updates.

Converts a sparse update payload into the SET portion of an UPDATE
statement with positional named placeholders:

    {"firstName": "Aliya", "age": 32}
        => '"first_name"=:p1, "age"=:p2', ["Aliya", 32]

Placeholders are numbered from 1 in payload order, so the Nth fragment
binds to the Nth value. The caller binds its identity at
`next_placeholder()`.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional

from jobly.core.errors import BadRequestError

logger = logging.getLogger(__name__)


def placeholder_name(index: int) -> str:
    """Bind parameter name for the 1-based position `index`."""
    return f"p{index}"


class UpdateClause(NamedTuple):
    set_cols: str
    values: List[Any]

    def bind_params(self) -> Dict[str, Any]:
        """Values keyed by their placeholder names, ready for execute()."""
        return {placeholder_name(i): value for i, value in enumerate(self.values, start=1)}

    def next_placeholder(self) -> str:
        """Name of the first placeholder after the SET values."""
        return placeholder_name(len(self.values) + 1)


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
    allowed_fields: Optional[Iterable[str]] = None,
) -> UpdateClause:
    """
    Build the SET clause for a partial update.

    Args:
        data_to_update: caller-facing field name -> new value; only present keys change
        js_to_sql: caller-facing name -> column name, where the two differ
        allowed_fields: the resource's known fields; any other key is rejected

    Raises:
        BadRequestError: empty payload, or a key outside `allowed_fields`
    """
    keys = list(data_to_update.keys()) if data_to_update else []
    if not keys:
        logger.warning("Rejected partial update with no data")
        raise BadRequestError("No data")

    if allowed_fields is not None:
        allowed = set(allowed_fields)
        unknown = [key for key in keys if key not in allowed]
        if unknown:
            raise BadRequestError(f"Unknown field(s): {', '.join(sorted(unknown))}")

    cols = [
        f'"{js_to_sql.get(key, key)}"=:{placeholder_name(idx)}'
        for idx, key in enumerate(keys, start=1)
    ]
    values = [data_to_update[key] for key in keys]

    return UpdateClause(set_cols=", ".join(cols), values=values)
