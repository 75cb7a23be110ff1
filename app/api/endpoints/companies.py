"""
Company endpoints.

Reads are public; creating, updating and deleting need an admin token.
"""

from typing import Any, Dict
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user, get_company_filter
from app.crud import company as company_crud
from app.schemas.common import DeletedResponse
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyFilter,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListResponse
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("/", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin_user: Dict[str, Any] = Depends(get_admin_user)
):
    """
    Create a company.

    Returns 400 if the handle is already taken.
    """
    company = company_crud.create(db, request)
    return {"company": company}


@router.get("/", response_model=CompanyListResponse)
def list_companies(
    filters: CompanyFilter = Depends(get_company_filter),
    db: Session = Depends(get_db)
):
    """
    List companies ordered by name.

    Optional query filters:
    - name: company name (exact match unless COMPANY_NAME_MATCH=partial)
    - minEmployees / maxEmployees: inclusive bounds on num_employees

    Returns 400 if minEmployees > maxEmployees, 422 for unknown or
    non-numeric filters.
    """
    companies = company_crud.find_all(db, filters.model_dump(by_alias=True, exclude_none=True))
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Get a company and its jobs."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: Dict[str, Any] = Depends(get_admin_user)
):
    """
    Partially update a company.

    Fields can be: name, description, numEmployees, logoUrl
    """
    company = company_crud.update(db, handle, request.model_dump(by_alias=True, exclude_unset=True))
    return {"company": company}


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin_user: Dict[str, Any] = Depends(get_admin_user)
):
    """Delete a company and its jobs."""
    company_crud.remove(db, handle)
    return {"deleted": handle}
