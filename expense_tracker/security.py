# expense_tracker/security.py

import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.hash import bcrypt

from . import config
from .exceptions import AuthError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.verify(password, hashed)
    except ValueError:
        # stored value is not a bcrypt hash
        logger.warning("Unreadable password hash encountered")
        return False


def create_access_token(user_id: int) -> str:
    exp = datetime.now(timezone.utc) + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    return jwt.encode({"sub": str(user_id), "exp": exp}, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> int:
    """Return the user id carried by ``token`` or raise AuthError."""
    if not token:
        raise AuthError("Access denied. No token provided.")
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise AuthError("Invalid or expired token.")
    except JWTError as e:
        logger.info("Rejected malformed token: %s", e)
        raise AuthError("Invalid or expired token.")

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        logger.info("Rejected token without a usable subject")
        raise AuthError("Invalid or expired token.")
