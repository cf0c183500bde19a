import os

# must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from expense_tracker.database import Base, SessionLocal, engine
from expense_tracker.main import app


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def signup(client):
    """Register an account through the API and return its auth headers."""

    def _signup(name="alice", email="a@x.com", secret="secret1"):
        res = client.post("/auth/register", json={"name": name, "email": email, "secret": secret})
        assert res.status_code == 201, res.text
        return {"Authorization": f"Bearer {res.json()['token']}"}

    return _signup
