"""
CRUD operations for jobs.

Same shape as the company module: one statement per call, rows returned as
dicts keyed by API field names.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.crud.sql import Predicate, WhereClause, build_where, sql_for_partial_update
from app.crud.store import SqlStore, TableSpec
from app.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

JOBS = TableSpec(
    name="jobs",
    key="id",
    projection=(
        ("id", "id"),
        ("title", "title"),
        ("salary", "salary"),
        ("equity", "equity"),
        ("company_handle", "companyHandle"),
    ),
)

# hasEquity=false means "don't care", not "no equity"
JOB_PREDICATES = [
    Predicate("title", "title = {param}"),
    Predicate("minSalary", "salary >= {param}"),
    Predicate("hasEquity", "equity IS NOT NULL", binds=False, applies=lambda value: value is True),
]

COMPANY_PREDICATE = Predicate("companyHandle", "company_handle = {param}")


def build_job_filter(filters: Mapping[str, Any]) -> WhereClause:
    """WHERE clause for title, minSalary and hasEquity filters."""
    return build_where(filters, JOB_PREDICATES)


def create(db: Session, job_data: JobCreateRequest) -> Dict[str, Any]:
    """
    Create a job. The company must exist (enforced by the foreign key).
    """
    job = SqlStore(db).insert(
        JOBS,
        ["title", "salary", "equity", "company_handle"],
        [job_data.title, job_data.salary, job_data.equity, job_data.company_handle]
    )

    logger.info(f"Created job {job['id']}: {job['title']} at {job['companyHandle']}")
    return job


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List jobs matching the filters, ordered by id.

    An empty result is an empty list, not an error.
    """
    where = build_job_filter(filters or {})
    return SqlStore(db).select_where(JOBS, where, order_by="id")


def find_by_company(db: Session, handle: str) -> List[Dict[str, Any]]:
    """All jobs of one company, ordered by id."""
    where = build_where({"companyHandle": handle}, [COMPANY_PREDICATE])
    return SqlStore(db).select_where(JOBS, where, order_by="id")


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Raises:
        NotFoundError: If no such job
    """
    job = SqlStore(db).select_one(JOBS, job_id)
    if not job:
        raise NotFoundError(f"No job with id: {job_id}")
    return job


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partial update of title, salary and/or equity.

    Raises:
        InvalidInputError: If data is empty
        NotFoundError: If no such job
    """
    # Field names match the column names
    set_update = sql_for_partial_update(data)
    job = SqlStore(db).update_by_key(JOBS, set_update.set_cols, set_update.values, job_id)

    if not job:
        raise NotFoundError(f"No job with id: {job_id}")

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Raises:
        NotFoundError: If no such job
    """
    if not SqlStore(db).delete_by_key(JOBS, job_id):
        raise NotFoundError(f"No job with id: {job_id}")

    logger.info(f"Deleted job {job_id}")
