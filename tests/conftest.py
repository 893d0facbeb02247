"""Shared fixtures: in-memory MongoDB, FastAPI test client, auth tokens."""

import os

# Must be set before database/config are imported
os.environ.setdefault("MONGO_URL", "mongodb://localhost:27017/college_discovery_test")
os.environ.setdefault("JWT_SECRET", "test-secret")

import mongomock
import pytest
from fastapi.testclient import TestClient

from auth.auth_utils import create_access_token, hash_password
from colleges.repository import CollegeRepository
from database import ensure_indexes, get_database
from main import app


@pytest.fixture
def db():
    database = mongomock.MongoClient().get_database("college_discovery_test")
    ensure_indexes(database)
    return database


@pytest.fixture
def repo(db):
    return CollegeRepository(db)


@pytest.fixture
def client(db):
    app.dependency_overrides[get_database] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _add_user(db, email, role, password="secret123"):
    db["users"].insert_one({
        "name": role.title(),
        "email": email,
        "password": hash_password(password),
        "role": role,
    })
    return create_access_token(data={"sub": email})


@pytest.fixture
def admin_token(db):
    return _add_user(db, "admin@example.com", "admin")


@pytest.fixture
def student_token(db):
    return _add_user(db, "student@example.com", "student")


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def student_headers(student_token):
    return {"Authorization": f"Bearer {student_token}"}
