"""
Data access for users.
"""

import logging
from typing import Any, Dict, Mapping
from sqlalchemy.orm import Session

from jobly.core.database import execute
from jobly.core.errors import InvalidInput, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


def register(db: Session, data: Mapping[str, Any], is_admin: bool = False) -> Dict[str, Any]:
    """
    Register a user with a bcrypt-hashed password.

    Args:
        db: Database session
        data: {username, password, firstName, lastName, email}
        is_admin: Whether the new user is an admin

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        InvalidInput: If the username is taken
    """
    duplicate = execute(
        db,
        """SELECT username
           FROM users
           WHERE username = $1""",
        [data["username"]])

    if duplicate:
        raise InvalidInput(f"Duplicate username: {data['username']}")

    rows = execute(
        db,
        f"""INSERT INTO users
              (username, password, first_name, last_name, email, is_admin)
           VALUES ($1, $2, $3, $4, $5, $6)
           RETURNING {USER_COLUMNS}""",
        [
            data["username"],
            get_password_hash(data["password"]),
            data["firstName"],
            data["lastName"],
            data["email"],
            is_admin,
        ])
    db.commit()

    logger.info(f"New user registered: {data['username']}")
    return rows[0]


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check credentials.

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        UnauthorizedError: If the user is missing or the password is wrong
    """
    rows = execute(
        db,
        f"""SELECT {USER_COLUMNS}, password
           FROM users
           WHERE username = $1""",
        [username])

    if rows:
        user = rows[0]
        hashed = user.pop("password")
        if verify_password(password, hashed):
            return user

    logger.info(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Get a user by username.

    Raises:
        NotFoundError: If no such user
    """
    rows = execute(
        db,
        f"""SELECT {USER_COLUMNS}
           FROM users
           WHERE username = $1""",
        [username])

    if not rows:
        raise NotFoundError(f"No user: {username}")

    return rows[0]
