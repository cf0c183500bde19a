# expense_tracker/models.py

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .database import Base


def _utcnow():
    # naive UTC, matching the DateTime columns
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    email = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash
    budget = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, nullable=False, default=_utcnow)

    expenses = relationship("Expense", back_populates="owner")


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(String, nullable=False)  # ISO YYYY-MM-DD
    item = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    quantity = Column(String, nullable=False)
    mode = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=_utcnow)

    owner = relationship("User", back_populates="expenses")
