# expense_tracker/accounts.py

import logging
import math

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .exceptions import AuthError, ConflictError, ValidationError
from .models import User
from .security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_amount(value):
    """Coerce a wire amount to float, or None when it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def account_view(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "budget": user.budget,
    }


def register(db: Session, name, email, password):
    name, email = _clean(name), _clean(email).lower()
    if not name or not email or not password:
        raise ValidationError("All fields are required.")
    if len(name) < MIN_NAME_LENGTH:
        raise ValidationError(f"Username must be at least {MIN_NAME_LENGTH} characters.")
    if len(str(password)) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")

    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered.")
    if db.query(User).filter(User.name == name).first():
        raise ConflictError("Username already taken.")

    try:
        hashed = hash_password(str(password))
    except ValueError:
        # passlib refuses NUL bytes and secrets over 4096 bytes
        raise ValidationError("Password is too long or contains unsupported characters.")

    user = User(name=name, email=email, password=hashed, budget=0.0)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent signup for the same name/email
        db.rollback()
        raise ConflictError("Username or email already registered.")
    db.refresh(user)

    logger.info("Registered account %s", user.id)
    return create_access_token(user.id), user


def authenticate(db: Session, name, password):
    name = _clean(name)
    if not name or not password:
        raise ValidationError("Username and password are required.")

    user = db.query(User).filter(User.name == name).first()
    if not user or not verify_password(str(password), user.password):
        logger.info("Failed login for %r", name)
        raise AuthError("Invalid username or password.")

    return create_access_token(user.id), user


def get_profile(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise AuthError("Invalid token. User not found.")
    return user


def set_budget(db: Session, user: User, amount) -> float:
    value = parse_amount(amount)
    if value is None or value < 0:
        raise ValidationError("Please provide a valid budget amount.")
    user.budget = value
    db.commit()
    return user.budget


def add_to_budget(db: Session, user: User, amount) -> float:
    value = parse_amount(amount)
    if value is None or value <= 0:
        raise ValidationError("Please provide a valid amount to add.")
    total = user.budget + value
    if not math.isfinite(total):
        raise ValidationError("Budget total is too large.")
    user.budget = total
    db.commit()
    return user.budget
