"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract user context.
"""

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session
from typing import Any, Dict, Optional, Type, TypeVar

from app.core.database import get_db
from app.core.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from app.core.security import decode_token
from app.crud import user as user_crud
from app.schemas.company import CompanyFilter
from app.schemas.job import JobFilter


# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error=False so a missing header is a 401 from us, not a 403 from FastAPI
security = HTTPBearer(auto_error=False)

FilterT = TypeVar("FilterT", bound=BaseModel)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Extract and validate the current user from JWT token.

    This dependency:
    1. Extracts the Bearer token from Authorization header
    2. Decodes and validates the JWT
    3. Fetches the user from the database

    Raises:
        UnauthorizedError: If token is missing/invalid or user no longer exists
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise UnauthorizedError("Could not validate credentials")

    username: Optional[str] = payload.get("sub")
    if username is None:
        raise UnauthorizedError("Could not validate credentials")

    try:
        return user_crud.get(db, username)
    except NotFoundError:
        raise UnauthorizedError("Could not validate credentials")


async def get_admin_user(
    user: Dict[str, Any] = Depends(get_current_user),
) -> Dict[str, Any]:
    """
    Require an admin account.

    Raises:
        ForbiddenError: If the user is not an admin
    """
    if not user["isAdmin"]:
        raise ForbiddenError("Admin privileges required")
    return user


async def get_admin_or_same_user(
    username: str,
    user: Dict[str, Any] = Depends(get_current_user),
) -> Dict[str, Any]:
    """
    Require an admin, or the user named in the `username` path parameter.

    Raises:
        ForbiddenError: If neither
    """
    if not user["isAdmin"] and user["username"] != username:
        raise ForbiddenError("Not allowed to access another user's account")
    return user


def _parse_query(request: Request, schema: Type[FilterT]) -> FilterT:
    """
    Validate the raw query string against a filter schema.

    Unknown keys are rejected, the same as unknown body fields.
    """
    try:
        return schema.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


def get_company_filter(request: Request) -> CompanyFilter:
    return _parse_query(request, CompanyFilter)


def get_job_filter(request: Request) -> JobFilter:
    return _parse_query(request, JobFilter)
