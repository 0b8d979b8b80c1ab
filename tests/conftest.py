"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown with seeded companies, jobs, and users
- FastAPI test client
- Auth tokens for a regular user and an admin
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, get_db
from jobly.core.security import create_access_token, get_password_hash
from jobly.models import Company, Job, User
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
    """SQLite only enforces ON DELETE CASCADE with foreign_keys on"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@event.listens_for(engine, "before_cursor_execute", retval=True)
def _ilike_to_like(conn, cursor, statement, parameters, context, executemany):
    """SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII"""
    return statement.replace(" ILIKE ", " LIKE "), parameters


PASSWORD = "password1"


def seed(db):
    """Insert the fixture rows every test starts from"""
    db.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
    ])
    db.flush()

    db.add_all([
        Job(id=1, title="J1", salary=1, equity=0.1, company_handle="c1"),
        Job(id=2, title="J2", salary=2, equity=0.2, company_handle="c1"),
        Job(id=3, title="J3", salary=3, equity=0, company_handle="c1"),
        Job(id=4, title="J4", salary=None, equity=None, company_handle="c2"),
    ])

    hashed = get_password_hash(PASSWORD)
    db.add_all([
        User(username="u1", password=hashed, first_name="U1F", last_name="U1L",
             email="user1@user.com", is_admin=False),
        User(username="admin", password=hashed, first_name="AdF", last_name="AdL",
             email="admin@user.com", is_admin=True),
    ])
    db.commit()


@pytest.fixture
def db_session():
    """
    Create a fresh, seeded database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    seed(db)
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
def u1_token():
    return create_access_token("u1", is_admin=False)


@pytest.fixture
def admin_token():
    return create_access_token("admin", is_admin=True)


@pytest.fixture
def u1_headers(u1_token):
    return {"Authorization": f"Bearer {u1_token}"}


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
