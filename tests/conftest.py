"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite)
- FastAPI test client
- Seeded companies, jobs and users plus their tokens
"""

import os

# Settings are read at import time; keep tests off PostgreSQL and fast at hashing
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, enable_sqlite_foreign_keys, get_db
from jobly.core.security import create_token
from jobly.crud import company as company_crud
from jobly.crud import job as job_crud
from jobly.crud import user as user_crud
from jobly.models import Company, Job, User, Application  # noqa: F401 - register tables
from jobly.schemas.company import CompanyCreateRequest
from jobly.schemas.job import JobCreateRequest
from jobly.schemas.user import UserCreateRequest
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed(db_session):
    """
    Three companies, three jobs, two users and an admin.

    c1/c2/c3 have 1/2/3 employees. j1 (c1) pays 10 with no equity,
    j2 (c2) pays 20 with 0.1 equity, j3 (c3) pays 30 with 0.2 equity.
    u1 has applied to j1.
    """
    for n in (1, 2, 3):
        company_crud.create(db_session, CompanyCreateRequest(
            handle=f"c{n}",
            name=f"C{n}",
            num_employees=n,
            description=f"Desc{n}",
            logo_url=f"http://c{n}.img",
        ))

    jobs = {}
    for n, (salary, equity) in enumerate([(10, 0), (20, 0.1), (30, 0.2)], start=1):
        created = job_crud.create(db_session, JobCreateRequest(
            title=f"j{n}",
            salary=salary,
            equity=equity,
            company_handle=f"c{n}",
        ))
        jobs[f"j{n}"] = created["id"]

    for username, is_admin in (("u1", False), ("u2", False), ("u4", True)):
        user_crud.register(db_session, UserCreateRequest(
            username=username,
            password=f"password{username[-1]}",
            first_name=f"U{username[-1]}F",
            last_name=f"U{username[-1]}L",
            email=f"{username}@example.com",
            is_admin=is_admin,
        ))

    user_crud.apply_to_job(db_session, "u1", jobs["j1"])

    return {"jobs": jobs}


@pytest.fixture
def u1_headers():
    """Bearer headers for regular user u1"""
    token = create_token({"username": "u1", "isAdmin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def u2_headers():
    """Bearer headers for regular user u2"""
    token = create_token({"username": "u2", "isAdmin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    """Bearer headers for admin u4"""
    token = create_token({"username": "u4", "isAdmin": True})
    return {"Authorization": f"Bearer {token}"}
