"""
User endpoints.

Admins manage every account; other logged-in users may only read, change
or delete their own account and apply to jobs as themselves.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin, ensure_correct_user_or_admin
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import (
    CurrentUser,
    UserCreateRequest,
    UserUpdateRequest,
    UserCreatedResponse,
    UserEnvelope,
    UserDetailEnvelope,
    UserListEnvelope,
    UserDeletedResponse,
    ApplicationResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=UserCreatedResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(ensure_admin),
):
    """
    Add a user. This is not the registration endpoint; it lets admins add
    users, who may themselves be admins.

    Returns the new user and a token for them.
    """
    user = user_crud.register(db, request)
    return {"user": user, "token": create_token(user)}


@router.post("/{username}/jobs/{job_id}", status_code=201, response_model=ApplicationResponse)
def apply_to_job(
    username: str,
    job_id: int,
    db: Session = Depends(get_db),
    caller: CurrentUser = Depends(ensure_correct_user_or_admin),
):
    """Apply `username` to a job. Authorization required: same user or admin"""
    user_crud.apply_to_job(db, username, job_id)
    return {"applied": job_id}


@router.get("/", response_model=UserListEnvelope)
def list_users(
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(ensure_admin),
):
    """List all users. Authorization required: admin"""
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserDetailEnvelope)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    caller: CurrentUser = Depends(ensure_correct_user_or_admin),
):
    """Get a user with the ids of jobs they applied to."""
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    caller: CurrentUser = Depends(ensure_correct_user_or_admin),
):
    """
    Partially update a user.

    Data can include: { firstName, lastName, password, email }
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return {"user": user_crud.update(db, username, data)}


@router.delete("/{username}", response_model=UserDeletedResponse)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    caller: CurrentUser = Depends(ensure_correct_user_or_admin),
):
    """Delete a user. Authorization required: same user or admin"""
    user_crud.remove(db, username)
    logger.info(f"{caller.username} deleted user {username}")
    return {"deleted": username}
