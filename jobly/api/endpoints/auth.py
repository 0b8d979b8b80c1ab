"""
Authentication endpoints.

- POST /token: Exchange username/password for a JWT
- POST /register: Create a (non-admin) account and return a JWT
- GET /me: Profile of the caller
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_logged_in
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from jobly.schemas.user import (
    UserRegisterRequest,
    UserLoginRequest,
    TokenResponse,
    UserEnvelope,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/token", response_model=TokenResponse)
def login(request: UserLoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate and receive a JWT.

    Raises 401 on unknown username or wrong password.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    token = create_access_token(user["username"], is_admin=user["isAdmin"])
    return TokenResponse(token=token)


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(request: UserRegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account.

    Returns a JWT for immediate use. New accounts are never admins.
    """
    user = user_crud.register(db, request.model_dump(by_alias=True))
    token = create_access_token(user["username"], is_admin=user["isAdmin"])
    return TokenResponse(token=token)


@router.get("/me", response_model=UserEnvelope)
def read_me(claims: dict = Depends(ensure_logged_in), db: Session = Depends(get_db)):
    """
    Get the profile of the authenticated user.
    """
    user = user_crud.get(db, claims["sub"])
    return {"user": user}
