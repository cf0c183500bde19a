# expense_tracker/config.py

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEV_SECRET_KEY = "dev-secret-change-me"

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./expenses.db")

SECRET_KEY = os.getenv("SECRET_KEY", DEV_SECRET_KEY)
ALGORITHM = "HS256"
# 7 days
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "10080"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def warn_if_insecure():
    if SECRET_KEY == DEV_SECRET_KEY:
        logger.warning("SECRET_KEY is not set, tokens are signed with the development key")
