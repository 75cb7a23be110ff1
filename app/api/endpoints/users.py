"""
User management endpoints.

Admins can list, add and manage every account. A regular user can read,
update and delete only their own.
"""

from typing import Any, Dict
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user, get_admin_or_same_user
from app.core.security import create_access_token
from app.crud import user as user_crud
from app.schemas.common import DeletedResponse
from app.schemas.user import (
    UserCreateRequest,
    UserUpdateRequest,
    UserCreatedResponse,
    UserEnvelope,
    UserListResponse
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/", status_code=201, response_model=UserCreatedResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin_user: Dict[str, Any] = Depends(get_admin_user)
):
    """
    Add a user, optionally as admin. Returns the user and a token for them.
    """
    user = user_crud.register(db, request)
    return {
        "user": user,
        "access_token": create_access_token(user["username"], user["isAdmin"]),
    }


@router.get("/", response_model=UserListResponse)
def list_users(
    db: Session = Depends(get_db),
    admin_user: Dict[str, Any] = Depends(get_admin_user)
):
    """List all users."""
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserEnvelope)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: Dict[str, Any] = Depends(get_admin_or_same_user)
):
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: Dict[str, Any] = Depends(get_admin_or_same_user)
):
    """
    Partially update a user.

    Fields can be: password, firstName, lastName, email
    """
    user = user_crud.update(db, username, request.model_dump(by_alias=True, exclude_unset=True))
    return {"user": user}


@router.delete("/{username}", response_model=DeletedResponse)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: Dict[str, Any] = Depends(get_admin_or_same_user)
):
    user_crud.remove(db, username)
    return {"deleted": username}
