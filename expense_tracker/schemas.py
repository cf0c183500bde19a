# expense_tracker/schemas.py
# Fields are optional so that missing values reach the services and are
# reported with their own messages instead of a generic body error.

from typing import Any, Optional

from pydantic import BaseModel


class RegisterIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    secret: Optional[str] = None


class LoginIn(BaseModel):
    name: Optional[str] = None
    secret: Optional[str] = None


class AmountIn(BaseModel):
    amount: Any = None


class ExpenseIn(BaseModel):
    date: Optional[str] = None
    item: Optional[str] = None
    amount: Any = None
    quantity: Any = None
    mode: Optional[str] = None


class AccountOut(BaseModel):
    id: int
    name: str
    email: str
    budget: float


class AuthOut(BaseModel):
    message: str
    token: str
    user: AccountOut


class ProfileOut(BaseModel):
    user: AccountOut


class BudgetOut(BaseModel):
    message: str
    budget: float


class ExpenseOut(BaseModel):
    id: int
    date: str
    item: str
    amount: float
    quantity: str
    mode: str
    created_at: Optional[str] = None


class MessageOut(BaseModel):
    message: str
