# expense_tracker/auth.py

from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from . import accounts
from .database import get_db
from .exceptions import AuthError
from .models import User
from .schemas import AuthOut, LoginIn, ProfileOut, RegisterIn
from .security import decode_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


def bearer_token(authorization: Optional[str]) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise AuthError("Access denied. No token provided.")
    return authorization.split(" ", 1)[1].strip()


# Dependency to get the logged-in user, re-derived from the token on every call
def get_current_user(
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    user_id = decode_access_token(bearer_token(authorization))
    return accounts.get_profile(db, user_id)


@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def register(body: RegisterIn, db: Session = Depends(get_db)):
    token, user = accounts.register(db, body.name, body.email, body.secret)
    return {
        "message": "Account created successfully!",
        "token": token,
        "user": accounts.account_view(user),
    }


@router.post("/login", response_model=AuthOut)
def login(body: LoginIn, db: Session = Depends(get_db)):
    token, user = accounts.authenticate(db, body.name, body.secret)
    return {
        "message": "Login successful!",
        "token": token,
        "user": accounts.account_view(user),
    }


@router.get("/me", response_model=ProfileOut)
def me(user: User = Depends(get_current_user)):
    return {"user": accounts.account_view(user)}
