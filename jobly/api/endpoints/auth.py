"""
Authentication endpoints.

- POST /token: exchange username/password for a JWT
- POST /register: create a (non-admin) account and receive a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import UserLoginRequest, UserRegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(request: UserLoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate a user and return a JWT.

    Raises 401 on an unknown username or wrong password.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user['username']}")
    return TokenResponse(token=create_token(user))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(request: UserRegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account and return a JWT for immediate use.
    """
    user = user_crud.register(db, request)
    return TokenResponse(token=create_token(user))
