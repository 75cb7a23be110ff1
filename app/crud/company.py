"""
CRUD operations for companies.

Every function runs one parameterized statement through SqlStore and
returns plain dicts keyed by the API's field names.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import InvalidInputError, NotFoundError
from app.crud import job as job_crud
from app.crud.sql import Predicate, WhereClause, build_where, is_present, sql_for_partial_update
from app.crud.store import SqlStore, TableSpec
from app.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

COMPANIES = TableSpec(
    name="companies",
    key="handle",
    projection=(
        ("handle", "handle"),
        ("name", "name"),
        ("description", "description"),
        ("num_employees", "numEmployees"),
        ("logo_url", "logoUrl"),
    ),
)

# API field -> column, for fields whose names differ
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

EMPLOYEE_PREDICATES = [
    Predicate("minEmployees", "num_employees >= {param}"),
    Predicate("maxEmployees", "num_employees <= {param}"),
]


def escape_like(value: str) -> str:
    """Make %, _ and \\ match themselves in a LIKE pattern using ESCAPE '\\'."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def name_predicate(match: str) -> Predicate:
    """
    "exact": name equals the filter.
    "partial": name contains the filter, ignoring case.
    """
    if match == "partial":
        return Predicate(
            "name",
            "LOWER(name) LIKE LOWER({param}) ESCAPE '\\'",
            transform=lambda value: f"%{escape_like(value)}%"
        )
    return Predicate("name", "name = {param}")


def build_company_filter(filters: Mapping[str, Any], name_match: Optional[str] = None) -> WhereClause:
    """
    Build the WHERE clause for listing companies.

    Args:
        filters: Any of name, minEmployees, maxEmployees
        name_match: "exact" or "partial"; defaults to COMPANY_NAME_MATCH

    Raises:
        InvalidInputError: If minEmployees > maxEmployees
    """
    min_employees = filters.get("minEmployees")
    max_employees = filters.get("maxEmployees")

    if is_present(min_employees) and is_present(max_employees) and min_employees > max_employees:
        raise InvalidInputError("minEmployees must be less than maxEmployees")

    predicates = [name_predicate(name_match or settings.COMPANY_NAME_MATCH), *EMPLOYEE_PREDICATES]
    return build_where(filters, predicates)


def create(db: Session, company_data: CompanyCreateRequest) -> Dict[str, Any]:
    """
    Create a company.

    Raises:
        InvalidInputError: If a company with this handle already exists
    """
    store = SqlStore(db)

    if store.select_one(COMPANIES, company_data.handle):
        raise InvalidInputError(f"Duplicate company: {company_data.handle}")

    company = store.insert(
        COMPANIES,
        ["handle", "name", "description", "num_employees", "logo_url"],
        [
            company_data.handle,
            company_data.name,
            company_data.description,
            company_data.num_employees,
            company_data.logo_url,
        ]
    )

    logger.info(f"Created company {company['handle']}")
    return company


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List companies matching the filters, ordered by name.

    No filters returns every company.
    """
    where = build_company_filter(filters or {})
    return SqlStore(db).select_where(COMPANIES, where, order_by="name")


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Get a company with its jobs.

    Raises:
        NotFoundError: If no such company
    """
    company = SqlStore(db).select_one(COMPANIES, handle)
    if not company:
        raise NotFoundError(f"No company: {handle}")

    company["jobs"] = job_crud.find_by_company(db, handle)
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partial update: only the fields in `data` change.

    Data can include: name, description, numEmployees, logoUrl

    Raises:
        InvalidInputError: If data is empty
        NotFoundError: If no such company
    """
    set_update = sql_for_partial_update(data, JS_TO_SQL)
    company = SqlStore(db).update_by_key(COMPANIES, set_update.set_cols, set_update.values, handle)

    if not company:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If no such company
    """
    if not SqlStore(db).delete_by_key(COMPANIES, handle):
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
