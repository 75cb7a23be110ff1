"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite, foreign keys on)
- Seed data: companies c1-c3, jobs j1-j3, a regular user and an admin
- FastAPI test client and auth headers
"""

import os

# Keep the app's own engine off Postgres while tests import it
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_access_token, get_password_hash
from app.models import Company, Job, User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores foreign keys (and ON DELETE CASCADE) unless asked."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
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
def seed(db_session):
    """
    Insert the shared test data and return the job ids in order.

    Companies c1..c3 have 1..3 employees. Jobs j1 and j2 offer equity,
    j3 does not.
    """
    db_session.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
    ])
    db_session.flush()

    jobs = [
        Job(title="j1", salary=100, equity=Decimal("0.1"), company_handle="c1"),
        Job(title="j2", salary=200, equity=Decimal("0.2"), company_handle="c2"),
        Job(title="j3", salary=300, equity=None, company_handle="c3"),
    ]
    db_session.add_all(jobs)

    db_session.add_all([
        User(
            username="u1",
            password=get_password_hash("password1"),
            first_name="U1F",
            last_name="U1L",
            email="user1@example.com",
            is_admin=False
        ),
        User(
            username="admin",
            password=get_password_hash("adminpass"),
            first_name="AdF",
            last_name="AdL",
            email="admin@example.com",
            is_admin=True
        ),
    ])
    db_session.commit()

    return [job.id for job in jobs]


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
def u1_headers():
    return {"Authorization": f"Bearer {create_access_token('u1', False)}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_access_token('admin', True)}"}


@pytest.fixture
def sample_company_data():
    """Sample company payload for testing"""
    return {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "numEmployees": 10,
        "logoUrl": "http://new.img"
    }


@pytest.fixture
def sample_job_data():
    """Sample job payload for testing"""
    return {
        "title": "new",
        "salary": 1000,
        "equity": "0.5",
        "companyHandle": "c1"
    }
