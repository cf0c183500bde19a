# expense_tracker/client.py

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

CONNECT_ERROR = "Cannot connect to server. Please make sure the backend is running."


class ApiError(Exception):
    """Non-2xx answer from the API; status 0 means the request never got through."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class Unauthenticated(ApiError):
    def __init__(self, message: str = "Please log in again."):
        super().__init__(401, message)


class SessionStore:
    """Token and cached account view kept between calls."""

    def __init__(self, token: Optional[str] = None, user: Optional[dict] = None):
        self.token = token
        self.user = user

    def save(self, token: str, user: dict):
        self.token = token
        self.user = user

    def clear(self):
        self.token = None
        self.user = None


class ApiClient:
    def __init__(self, base_url: str = "http://localhost:8000", store: Optional[SessionStore] = None,
                 http: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.store = store or SessionStore()
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.store.token:
            headers["Authorization"] = f"Bearer {self.store.token}"
        return headers

    def _request(self, method: str, url: str, payload=None):
        try:
            response = self.http.request(method, url, json=payload, headers=self._headers())
        except httpx.TransportError as e:
            logger.error("API request %s %s failed: %s", method, url, e)
            raise ApiError(0, CONNECT_ERROR)

        if response.status_code == 401:
            # token expired or invalid
            self.store.clear()
            raise Unauthenticated(_error_message(response, "Please log in again."))
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response, "Request failed."))
        return response.json()

    # auth

    def register(self, name: str, email: str, secret: str) -> dict:
        data = self._request("POST", "/auth/register", {"name": name, "email": email, "secret": secret})
        self.store.save(data["token"], data["user"])
        return data["user"]

    def login(self, name: str, secret: str) -> dict:
        # a bad password is a 401 too, but there is no session to drop yet
        data = self._request("POST", "/auth/login", {"name": name, "secret": secret})
        self.store.save(data["token"], data["user"])
        return data["user"]

    def profile(self) -> dict:
        user = self._request("GET", "/auth/me")["user"]
        self.store.user = user
        return user

    # budget

    def set_budget(self, amount: float) -> float:
        return self._request("PUT", "/budget/set", {"amount": amount})["budget"]

    def add_to_budget(self, amount: float) -> float:
        return self._request("PUT", "/budget/add", {"amount": amount})["budget"]

    # expenses

    def expenses(self) -> list:
        return self._request("GET", "/expenses")

    def add_expense(self, date: str, item: str, amount: float, quantity: str, mode: str) -> dict:
        payload = {"date": date, "item": item, "amount": amount, "quantity": quantity, "mode": mode}
        return self._request("POST", "/expenses", payload)

    def delete_expense(self, expense_id: int):
        self._request("DELETE", f"/expenses/{expense_id}")

    def clear_all(self):
        self._request("DELETE", "/expenses")


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return default
    if isinstance(data, dict) and data.get("error"):
        return data["error"]
    return default
