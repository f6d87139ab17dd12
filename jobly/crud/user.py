"""
CRUD operations for users and their job applications.

Passwords are stored as bcrypt hashes and never returned.
"""

import logging
from typing import Any, Dict, List, Mapping, Union

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, DuplicateError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.crud.sql import sql_for_partial_update
from jobly.schemas.user import UserCreateRequest, UserRegisterRequest

logger = logging.getLogger(__name__)

USER_COLUMNS = 'username, first_name AS "firstName", last_name AS "lastName", email, is_admin AS "isAdmin"'

JS_TO_SQL = {"firstName": "first_name", "lastName": "last_name", "isAdmin": "is_admin"}
UPDATABLE_FIELDS = ("firstName", "lastName", "password", "email", "isAdmin")


def _to_user(row) -> Dict[str, Any]:
    user = dict(row)
    # SQLite hands booleans back as 0/1
    user["isAdmin"] = bool(user["isAdmin"])
    return user


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: unknown user or wrong password
    """
    row = db.execute(
        text(f"SELECT {USER_COLUMNS}, password FROM users WHERE username = :username"),
        {"username": username},
    ).mappings().first()

    if row and verify_password(password, row["password"]):
        user = _to_user(row)
        del user["password"]
        return user

    raise UnauthorizedError("Invalid username/password")


def register(
    db: Session,
    user_data: Union[UserRegisterRequest, UserCreateRequest],
) -> Dict[str, Any]:
    """
    Create a user with a hashed password.

    Self-registration payloads have no admin flag and always create
    non-admin users.

    Raises:
        DuplicateError: username already taken
    """
    existing = db.execute(
        text("SELECT username FROM users WHERE username = :username"),
        {"username": user_data.username},
    ).first()
    if existing:
        raise DuplicateError(f"Duplicate username: {user_data.username}")

    try:
        row = db.execute(
            text(
                "INSERT INTO users (username, password, first_name, last_name, email, is_admin) "
                "VALUES (:username, :password, :first_name, :last_name, :email, :is_admin) "
                f"RETURNING {USER_COLUMNS}"
            ),
            {
                "username": user_data.username,
                "password": get_password_hash(user_data.password),
                "first_name": user_data.first_name,
                "last_name": user_data.last_name,
                "email": str(user_data.email),
                "is_admin": getattr(user_data, "is_admin", False),
            },
        ).mappings().first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"Duplicate username: {user_data.username}")

    logger.info(f"Registered user {row['username']} (admin: {bool(row['isAdmin'])})")
    return _to_user(row)


def find_all(db: Session) -> List[Dict[str, Any]]:
    """List users ordered by username."""
    rows = db.execute(
        text(f"SELECT {USER_COLUMNS} FROM users ORDER BY username")
    ).mappings().all()
    return [_to_user(row) for row in rows]


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Get a user plus the ids of the jobs they applied to.

    Raises:
        NotFoundError: no such user
    """
    row = db.execute(
        text(f"SELECT {USER_COLUMNS} FROM users WHERE username = :username"),
        {"username": username},
    ).mappings().first()
    if not row:
        raise NotFoundError(f"No user: {username}")

    user = _to_user(row)
    applied = db.execute(
        text("SELECT job_id FROM applications WHERE username = :username ORDER BY job_id"),
        {"username": username},
    ).scalars().all()
    user["jobs"] = list(applied)
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user.

    Data can include: {firstName, lastName, password, email, isAdmin}.
    A new password is hashed before it is stored.

    Raises:
        BadRequestError: empty payload or unknown field
        NotFoundError: no such user
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = get_password_hash(data["password"])
    if data.get("email") is not None:
        data["email"] = str(data["email"])

    clause = sql_for_partial_update(data, JS_TO_SQL, UPDATABLE_FIELDS)
    username_var = clause.next_placeholder()
    params = clause.bind_params()
    params[username_var] = username

    try:
        row = db.execute(
            text(
                f"UPDATE users SET {clause.set_cols} "
                f"WHERE username = :{username_var} "
                f"RETURNING {USER_COLUMNS}"
            ),
            params,
        ).mappings().first()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Invalid update for user: {username}")

    if not row:
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Updated user {username}: {', '.join(data.keys())}")
    return _to_user(row)


def remove(db: Session, username: str) -> None:
    """
    Delete a user.

    Raises:
        NotFoundError: no such user
    """
    row = db.execute(
        text("DELETE FROM users WHERE username = :username RETURNING username"),
        {"username": username},
    ).first()
    if not row:
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Deleted user {username}")


def apply_to_job(db: Session, username: str, job_id: int) -> None:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: no such job or user
        DuplicateError: the user already applied to this job
    """
    job = db.execute(text("SELECT id FROM jobs WHERE id = :id"), {"id": job_id}).first()
    if not job:
        raise NotFoundError(f"No job: {job_id}")

    user = db.execute(
        text("SELECT username FROM users WHERE username = :username"),
        {"username": username},
    ).first()
    if not user:
        raise NotFoundError(f"No username: {username}")

    try:
        db.execute(
            text("INSERT INTO applications (job_id, username) VALUES (:job_id, :username)"),
            {"job_id": job_id, "username": username},
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"{username} already applied to job {job_id}")

    logger.info(f"User {username} applied to job {job_id}")
