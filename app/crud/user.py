"""
CRUD operations for users, plus password authentication.

Password hashes are only ever read by authenticate(); every other query
uses the public projection.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidInputError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.crud.sql import WhereClause, sql_for_partial_update
from app.crud.store import SqlStore, TableSpec
from app.schemas.user import UserCreateRequest, UserRegisterRequest

logger = logging.getLogger(__name__)

USERS = TableSpec(
    name="users",
    key="username",
    projection=(
        ("username", "username"),
        ("first_name", "firstName"),
        ("last_name", "lastName"),
        ("email", "email"),
        ("is_admin", "isAdmin"),
    ),
)

USERS_WITH_PASSWORD = USERS._replace(projection=USERS.projection + (("password", "password"),))

JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: If the user doesn't exist or the password is wrong
    """
    user = SqlStore(db).select_one(USERS_WITH_PASSWORD, username)

    if user and verify_password(password, user.pop("password")):
        return user

    raise UnauthorizedError("Invalid username/password")


def register(db: Session, user_data: UserRegisterRequest) -> Dict[str, Any]:
    """
    Create a user with a hashed password.

    Raises:
        InvalidInputError: If the username is taken
    """
    store = SqlStore(db)

    if store.select_one(USERS, user_data.username):
        raise InvalidInputError(f"Duplicate username: {user_data.username}")

    is_admin = user_data.is_admin if isinstance(user_data, UserCreateRequest) else False

    user = store.insert(
        USERS,
        ["username", "password", "first_name", "last_name", "email", "is_admin"],
        [
            user_data.username,
            get_password_hash(user_data.password),
            user_data.first_name,
            user_data.last_name,
            user_data.email,
            is_admin,
        ]
    )

    logger.info(f"Registered user {user['username']} (admin: {is_admin})")
    return user


def find_all(db: Session) -> List[Dict[str, Any]]:
    """All users, ordered by username."""
    return SqlStore(db).select_where(USERS, WhereClause("", []), order_by="username")


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Raises:
        NotFoundError: If no such user
    """
    user = SqlStore(db).select_one(USERS, username)
    if not user:
        raise NotFoundError(f"No user: {username}")
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partial update: firstName, lastName, email, password.

    A new password is hashed before it is stored.

    Raises:
        InvalidInputError: If data is empty
        NotFoundError: If no such user
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = get_password_hash(data["password"])

    set_update = sql_for_partial_update(data, JS_TO_SQL)
    user = SqlStore(db).update_by_key(USERS, set_update.set_cols, set_update.values, username)

    if not user:
        raise NotFoundError(f"No user: {username}")

    logger.info(f"Updated user {username}: {', '.join(data)}")
    return user


def remove(db: Session, username: str) -> None:
    """
    Raises:
        NotFoundError: If no such user
    """
    if not SqlStore(db).delete_by_key(USERS, username):
        raise NotFoundError(f"No user: {username}")

    logger.info(f"Deleted user {username}")
