"""Shared fixtures: a fresh in-memory SQLite database per test."""

import os

# Settings are read at import time, so the environment must be set first
os.environ["ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STATIC_DIR"] = "__no_static_dir__"
os.environ.pop("LOG_FILE_PATH", None)
os.environ.pop("ERROR_LOG_FILE_PATH", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.db import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Base  # noqa: E402
from app.services.store import CourseStore, StudentStore  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def students(db) -> StudentStore:
    return StudentStore(db)


@pytest.fixture
def courses(db) -> CourseStore:
    return CourseStore(db)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def course_payload():
    return {
        "name": "CS101",
        "description": "Introduction to Computer Science",
        "duration": 12,
    }


@pytest.fixture
def student_payload():
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "course": "CS101",
        "enrollmentDate": "2024-01-15",
    }
