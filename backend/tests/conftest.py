"""Shared fixtures: an in-memory database behind the real FastAPI app."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Must be set before interviewexp.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from interviewexp.database import Base, enable_sqlite_foreign_keys, get_db
from interviewexp.main import app
from interviewexp.middleware.auth import hash_password
from interviewexp.models import Company, User

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(test_engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def session_factory():
    """Open extra sessions to interleave work with the ``db`` session."""
    return TestingSessionLocal


@pytest.fixture
def client():
    return TestClient(app)


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Register a student and return ``(user_dict, headers, refresh_token)``."""

    def _register(email="alice@uni.edu", name="Alice", college="State University", password="secret123"):
        resp = client.post("/api/auth/register", json={
            "name": name,
            "email": email,
            "password": password,
            "college": college,
            "course": "B.Tech CSE",
            "year": "3",
        })
        assert resp.status_code == 201, resp.text
        data = resp.json()["data"]
        return data["user"], auth_headers(data["access_token"]), data["refresh_token"]

    return _register


@pytest.fixture
def admin(client, db):
    """Create a system admin in the database and sign it in."""
    user = User(
        name="Admin",
        email="admin@uni.edu",
        password_hash=hash_password("adminpass"),
        college="System",
        course="System Administration",
        year="Admin",
        role="admin",
        is_verified=True,
    )
    db.add(user)
    db.commit()
    resp = client.post("/api/auth/admin/login", json={"email": "admin@uni.edu", "password": "adminpass"})
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    return data["user"], auth_headers(data["access_token"])


@pytest.fixture
def company(db):
    row = Company(name="Google", slug="google", tier="FAANG", category="Product")
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture
def submit(client, company):
    """Submit an experience as the given user; returns the experience dict."""

    def _submit(headers, **overrides):
        body = {
            "companyId": company.id,
            "role": "SDE Intern",
            "experienceType": "Internship",
            "result": "Selected",
            "overallExperience": "Two coding rounds and a chat with the manager.",
        }
        body.update(overrides)
        resp = client.post("/api/experiences", json=body, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]["experience"]

    return _submit


@pytest.fixture
def approved(client, admin, submit):
    """Submit and approve an experience; returns the approved experience dict."""

    def _approved(headers, **overrides):
        experience = submit(headers, **overrides)
        _, admin_headers = admin
        resp = client.put(f"/api/admin/experiences/{experience['id']}/approve", headers=admin_headers)
        assert resp.status_code == 200, resp.text
        return resp.json()["data"]["experience"]

    return _approved
