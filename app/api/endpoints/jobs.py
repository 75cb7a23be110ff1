from typing import Any, Dict
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user, get_job_filter
from app.crud import job as job_crud
from app.schemas.common import DeletedResponse
from app.schemas.job import JobCreateRequest, JobUpdateRequest, JobFilter, JobEnvelope, JobListResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin_user: Dict[str, Any] = Depends(get_admin_user)
):
    """
    Create a job posting for an existing company.

    Authorization required: admin
    """
    job = job_crud.create(db, request)
    return {"job": job}


@router.get("/", response_model=JobListResponse)
def list_jobs(
    filters: JobFilter = Depends(get_job_filter),
    db: Session = Depends(get_db)
):
    """
    List jobs ordered by id.

    Optional query filters:
    - title: exact job title
    - minSalary: salary >= minSalary
    - hasEquity: true limits to jobs offering equity; false does not filter

    Returns 422 for unknown filters or values of the wrong type.
    """
    jobs = job_crud.find_all(db, filters.model_dump(by_alias=True, exclude_none=True))
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: Dict[str, Any] = Depends(get_admin_user)
):
    """
    Partially update a job.

    Fields can be: title, salary, equity

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request.model_dump(exclude_unset=True))
    return {"job": job}


@router.delete("/{job_id}", response_model=DeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin_user: Dict[str, Any] = Depends(get_admin_user)
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return {"deleted": str(job_id)}
