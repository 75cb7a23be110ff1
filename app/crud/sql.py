"""
SQL fragment builders shared by the CRUD modules.

- sql_for_partial_update: sparse field-update mapping -> SET assignments + values
- Predicate / build_where: optional filter fields -> WHERE clause + values
- bind_positional: $1-style placeholders -> SQLAlchemy named binds

Only column names (fixed in code) are interpolated into SQL text. Every
value travels as a bound parameter.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from app.core.exceptions import InvalidInputError

_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


class PartialUpdate(NamedTuple):
    """Assignments like '"first_name"=$1' and their values, in the same order."""
    assignments: List[str]
    values: List[Any]

    @property
    def set_cols(self) -> str:
        return ", ".join(self.assignments)


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None
) -> PartialUpdate:
    """
    Build the SET part of an UPDATE from the fields being changed.

    Args:
        data_to_update: Field name -> new value. Only these fields are updated.
        js_to_sql: Field name -> column name, for fields whose column differs
            (e.g. {"numEmployees": "num_employees"}). Unmapped fields use
            their own name.

    Returns:
        PartialUpdate. Parameter numbers start at $1, so the caller binds its
        lookup key as ${len(values) + 1}.

    Raises:
        InvalidInputError: If there is nothing to update
    """
    if not data_to_update:
        raise InvalidInputError("No data")

    js_to_sql = js_to_sql or {}

    # {"firstName": "Aliya", "age": 32} => ['"first_name"=$1', '"age"=$2']
    assignments = [
        f'"{js_to_sql.get(field) or field}"=${idx}'
        for idx, field in enumerate(data_to_update, start=1)
    ]

    return PartialUpdate(assignments, list(data_to_update.values()))


def is_present(value: Any) -> bool:
    """A filter field counts when it was given a non-empty value."""
    return value is not None and value != ""


@dataclass(frozen=True)
class Predicate:
    """
    One optional filter condition.

    `template` is the SQL condition; "{param}" marks where the bound value
    goes. Conditions with binds=False (e.g. IS NOT NULL) take no value.
    """
    field: str
    template: str
    binds: bool = True
    applies: Callable[[Any], bool] = is_present
    transform: Optional[Callable[[Any], Any]] = None


class WhereClause(NamedTuple):
    clause: str
    values: List[Any]


def build_where(
    filters: Mapping[str, Any],
    predicates: Sequence[Predicate],
    start: int = 1
) -> WhereClause:
    """
    Combine the predicates whose fields are present in `filters`.

    Predicates are applied in list order and joined with AND. Positional
    numbering begins at `start`, for callers that bind other values first.

    Returns:
        WhereClause("WHERE ...", values), or WhereClause("", []) when no
        filter applies.
    """
    clauses: List[str] = []
    values: List[Any] = []

    for predicate in predicates:
        value = filters.get(predicate.field)
        if not predicate.applies(value):
            continue

        if predicate.binds:
            values.append(predicate.transform(value) if predicate.transform else value)
            clauses.append(predicate.template.format(param=f"${start + len(values) - 1}"))
        else:
            clauses.append(predicate.template)

    if not clauses:
        return WhereClause("", [])

    return WhereClause("WHERE " + " AND ".join(clauses), values)


def bind_positional(sql: str, values: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite $1, $2, ... into :p1, :p2, ... for sqlalchemy.text().

    Raises:
        ValueError: If the statement references a parameter with no value
    """
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}

    def _named(match: "re.Match[str]") -> str:
        name = f"p{match.group(1)}"
        if name not in params:
            raise ValueError(f"No value bound for ${match.group(1)}")
        return f":{name}"

    return _POSITIONAL_PARAM.sub(_named, sql), params
