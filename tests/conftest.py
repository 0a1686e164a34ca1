# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Shared fixtures.

The application reads its settings at import time, so the environment is
prepared before anything from ``backend/`` is imported.  Every test gets a
fresh in-memory SQLite schema; ``database.SessionLocal`` is pointed at it so
request handlers, the dashboard guard and the fixtures share one database.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production-use-0123456789"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["MEDIA_BACKEND"] = "local"
os.environ["GOOGLE_CLIENT_ID"] = ""
os.environ["GOOGLE_CLIENT_SECRET"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import database  # noqa: E402
from database import Base  # noqa: E402
from main import app  # noqa: E402
from core.roles import ADMIN, SUPER_ADMIN, USER  # noqa: E402
from core.security import create_session_token, hash_password  # noqa: E402
from core.storage import MediaStorage, UploadResult, get_storage  # noqa: E402
from models.user import User  # noqa: E402

PASSWORD = "Passw0rdOK"

_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


@pytest.fixture(autouse=True)
def _database(monkeypatch):
    Base.metadata.create_all(_engine)
    monkeypatch.setattr(database, "SessionLocal", TestingSessionLocal)
    yield
    Base.metadata.drop_all(_engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# -- Users -----------------------------------------------------------------


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role=USER, is_active=True, email=None, password=PASSWORD, name=None):
        counter["n"] += 1
        user = User(
            name=name or f"{role.title()} {counter['n']}",
            email=email or f"{role.lower()}{counter['n']}@moha.test",
            password_hash=hash_password(password) if password else None,
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_session_token(user)}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def staff(make_user):
    return make_user(USER, name="Staff Member")


@pytest.fixture
def admin(make_user):
    return make_user(ADMIN, name="Admin User")


@pytest.fixture
def super_admin(make_user):
    return make_user(SUPER_ADMIN, name="Super Admin")


@pytest.fixture
def staff_headers(staff):
    return auth_headers(staff)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def super_headers(super_admin):
    return auth_headers(super_admin)


# -- Media storage ---------------------------------------------------------


class FakeStorage(MediaStorage):
    """Records uploads instead of writing them anywhere."""

    def __init__(self):
        self.calls = []

    def upload(self, data, folder, filename, content_type):
        self.calls.append((folder, filename, content_type, len(data)))
        key = f"{folder}/{len(self.calls)}-{filename}"
        return UploadResult(url=f"https://media.test/{key}", public_id=key)


@pytest.fixture
def fake_storage():
    storage = FakeStorage()
    app.dependency_overrides[get_storage] = lambda: storage
    yield storage
    app.dependency_overrides.pop(get_storage, None)
