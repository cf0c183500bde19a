# expense_tracker/dashboard.py
"""Client-side ledger view.

``LedgerState`` is the only mutable state; ``Dashboard`` owns one and applies
the result of each successful API call to it. Rendering is done by pure
functions over the state so it can be checked without a server.
"""

import enum
import logging
import math
from dataclasses import dataclass, field
from datetime import date as calendar_date
from typing import List, Optional

from .client import ApiClient, ApiError, Unauthenticated

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again."
LOGIN_PAGE = "login"


class Phase(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    LOADING = "loading"
    READY = "ready"


@dataclass
class LedgerState:
    phase: Phase = Phase.UNAUTHENTICATED
    user: Optional[dict] = None
    budget: float = 0.0
    expenses: List[dict] = field(default_factory=list)
    alerts: List[str] = field(default_factory=list)
    redirect: Optional[str] = None


@dataclass
class Row:
    id: int
    date: str
    item: str
    amount: float
    quantity: str
    mode: str
    balance: float
    negative: bool


@dataclass
class Summary:
    total_budget: float
    total_spent: float
    balance_left: float
    negative: bool


def format_date(value: str) -> str:
    """2024-01-05 -> 05-01-2024"""
    try:
        return calendar_date.fromisoformat(value).strftime("%d-%m-%Y")
    except (TypeError, ValueError):
        return value


def build_rows(budget: float, expenses: List[dict]) -> List[Row]:
    rows = []
    running = budget
    # sorted() is stable, so same-date rows keep their creation order
    for exp in sorted(expenses, key=lambda e: e["date"]):
        amount = float(exp["amount"])
        running -= amount
        rows.append(Row(
            id=exp["id"],
            date=format_date(exp["date"]),
            item=exp["item"],
            amount=amount,
            quantity=exp["quantity"],
            mode=exp["mode"],
            balance=running,
            negative=running < 0,
        ))
    return rows


def summarize(budget: float, expenses: List[dict]) -> Summary:
    spent = sum(float(e["amount"]) for e in expenses)
    left = budget - spent
    return Summary(total_budget=budget, total_spent=spent, balance_left=left, negative=left < 0)


def render(state: LedgerState) -> dict:
    user = state.user or {}
    return {
        "welcome": f"Welcome, {user['name']}!" if user.get("name") else "",
        "summary": summarize(state.budget, state.expenses),
        "rows": build_rows(state.budget, state.expenses),
    }


def _to_number(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class Dashboard:
    def __init__(self, api: ApiClient, state: Optional[LedgerState] = None):
        self.api = api
        self.state = state or LedgerState()

    def view(self) -> dict:
        return render(self.state)

    def _reset(self):
        self.api.store.clear()
        self.state = LedgerState(redirect=LOGIN_PAGE)

    def _call(self, fn, *args):
        """Run an API call; returns (ok, result). Failures go to alerts or reset the session."""
        try:
            return True, fn(*args)
        except Unauthenticated:
            logger.info("Session rejected by server, returning to login")
            self._reset()
        except ApiError as e:
            if e.status_code >= 500:
                self.state.alerts.append(GENERIC_ERROR)
            else:
                self.state.alerts.append(e.message)
        return False, None

    def load(self) -> LedgerState:
        if not self.api.store.token:
            self._reset()
            return self.state

        state, previous = self.state, self.state.phase
        state.phase = Phase.LOADING
        state.user = self.api.store.user
        ok, user = self._call(self.api.profile)
        if ok:
            ok, expenses = self._call(self.api.expenses)
        if not ok:
            # auth failures already replaced the state; anything else keeps the old view
            if state is self.state:
                state.phase = previous
            return self.state

        self.state.user = user
        self.state.budget = user.get("budget") or 0.0
        self.state.expenses = list(expenses)
        self.state.phase = Phase.READY
        return self.state

    def logout(self):
        self._reset()

    def add_expense(self, date: str, item: str, amount, quantity: str, mode: str) -> bool:
        value = _to_number(amount)
        if not date or not (item or "").strip() or not (quantity or "").strip() or value is None or not mode:
            self.state.alerts.append("Please fill in all fields.")
            return False
        ok, created = self._call(self.api.add_expense, date, item.strip(), value, quantity.strip(), mode)
        if ok:
            self.state.expenses.append(created)
        return ok

    def delete_expense(self, expense_id: int) -> bool:
        ok, _ = self._call(self.api.delete_expense, expense_id)
        if ok:
            self.state.expenses = [e for e in self.state.expenses if e["id"] != expense_id]
        return ok

    def clear_all(self) -> bool:
        ok, _ = self._call(self.api.clear_all)
        if ok:
            self.state.budget = 0.0
            self.state.expenses = []
        return ok

    def set_budget(self, amount) -> bool:
        value = _to_number(amount)
        if value is None or value < 0:
            self.state.alerts.append("Please enter a valid positive number.")
            return False
        ok, total = self._call(self.api.set_budget, value)
        if ok:
            self.state.budget = total
        return ok

    def add_money(self, amount) -> bool:
        value = _to_number(amount)
        if value is None or value <= 0:
            self.state.alerts.append("Please enter a valid positive number.")
            return False
        ok, total = self._call(self.api.add_to_budget, value)
        if ok:
            self.state.budget = total
        return ok
