"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- Seeded companies and jobs
- FastAPI test client wired with the exception handlers
"""

import os

# Point settings at SQLite before anything builds the application engine
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite:///:memory:")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, init_db
from jobly.core.exception_handlers import register_exception_handlers
from jobly.models.company import Company
from jobly.models.job import Job

init_db()

# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
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
def seeded_db(db_session):
    """
    Three companies and three jobs:

    c1 (1 employee)  - J1: 60000, equity 0.75
    c2 (2 employees) - J2: 75000, equity 0
    c3 (3 employees) - J3: 125000, equity 0.3
    """
    db_session.add_all([
        Company(handle="c1", name="C1", description="Desc1", num_employees=1, logo_url="http://c1.img"),
        Company(handle="c2", name="C2", description="Desc2", num_employees=2, logo_url="http://c2.img"),
        Company(handle="c3", name="C3", description="Desc3", num_employees=3, logo_url="http://c3.img"),
    ])
    db_session.flush()
    db_session.add_all([
        Job(title="J1", salary=60000, equity="0.75", company_handle="c1"),
        Job(title="J2", salary=75000, equity="0", company_handle="c2"),
        Job(title="J3", salary=125000, equity="0.3", company_handle="c3"),
    ])
    db_session.commit()
    return db_session


@pytest.fixture
def client():
    """
    Test client for a bare application that only carries the exception
    handlers. Tests add their own routes through client.app.
    """
    app = FastAPI()
    register_exception_handlers(app)

    # raise_server_exceptions=False so the catch-all handler's 500 is returned
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
