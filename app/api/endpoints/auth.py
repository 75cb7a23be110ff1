"""
Authentication endpoints.

Implements JWT-based stateless authentication:
- POST /token: Exchange username/password for an access token
- POST /register: Create a (non-admin) account and log it in
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_access_token
from app.crud import user as user_crud
from app.schemas.user import UserLoginRequest, UserRegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a JWT access token.

    Returns 401 on unknown username or wrong password.
    """
    user = user_crud.authenticate(db, request.username, request.password)

    logger.info(f"User logged in: {user['username']}")

    return TokenResponse(access_token=create_access_token(user["username"], user["isAdmin"]))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    Returns a JWT token for immediate login; 400 if the username is taken.
    """
    user = user_crud.register(db, request)
    return TokenResponse(access_token=create_access_token(user["username"], user["isAdmin"]))
