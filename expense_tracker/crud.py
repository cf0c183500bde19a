# expense_tracker/crud.py

import logging
from datetime import date as calendar_date

from sqlalchemy.orm import Session

from .accounts import parse_amount
from .exceptions import NotFoundError, ValidationError
from .models import Expense, User

logger = logging.getLogger(__name__)

# signed 64-bit integer primary keys
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def expense_view(expense: Expense) -> dict:
    return {
        "id": expense.id,
        "date": expense.date,
        "item": expense.item,
        "amount": expense.amount,
        "quantity": expense.quantity,
        "mode": expense.mode,
        "created_at": expense.created_at.isoformat() if expense.created_at else None,
    }


def list_expenses(user_id: int, db: Session):
    return (
        db.query(Expense)
        .filter(Expense.user_id == user_id)
        .order_by(Expense.date.asc(), Expense.created_at.asc(), Expense.id.asc())
        .all()
    )


def add_expense(user_id: int, date, item, amount, quantity, mode, db: Session) -> Expense:
    fields = [str(v).strip() if v is not None else "" for v in (date, item, quantity, mode)]
    if not all(fields) or amount is None or amount == "":
        raise ValidationError("All fields are required.")
    date, item, quantity, mode = fields

    try:
        date = calendar_date.fromisoformat(date).isoformat()
    except ValueError:
        raise ValidationError("Date must be a valid YYYY-MM-DD calendar date.")

    value = parse_amount(amount)
    if value is None or value <= 0:
        raise ValidationError("Amount must be a positive number.")

    expense = Expense(
        user_id=user_id,
        date=date,
        item=item,
        amount=value,
        quantity=quantity,
        mode=mode,
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


def remove_expense(user_id: int, expense_id, db: Session):
    try:
        expense_id = int(expense_id)
    except (TypeError, ValueError):
        raise NotFoundError("Expense not found.")
    if not MIN_ID <= expense_id <= MAX_ID:
        raise NotFoundError("Expense not found.")
    expense = db.query(Expense).filter(Expense.id == expense_id, Expense.user_id == user_id).first()
    if not expense:
        raise NotFoundError("Expense not found.")
    db.delete(expense)
    db.commit()


def clear_ledger(user: User, db: Session):
    """Delete every expense of ``user`` and reset the budget, in one commit."""
    try:
        removed = (
            db.query(Expense)
            .filter(Expense.user_id == user.id)
            .delete(synchronize_session=False)
        )
        user.budget = 0.0
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Cleared %d expenses for account %s", removed, user.id)
