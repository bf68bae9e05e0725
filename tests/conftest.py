"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Users, organizations and auth headers
"""

import os

# Must be set before the application settings are imported
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite:///:memory:")
os.environ.setdefault("JSON_LOGS", "false")

import uuid
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pipeline_tracker.core.database import Base, get_db
from pipeline_tracker.core.security import get_password_hash
from pipeline_tracker.models import Organization, User, UserRole
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "TestPass123!"


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


def create_organization(db_session, name="Acme Corp"):
    organization = Organization(id=uuid.uuid4(), name=name)
    db_session.add(organization)
    db_session.commit()
    return organization


def create_user(db_session, organization, email="recruiter@example.com", role=UserRole.RECRUITER,
                password=DEFAULT_PASSWORD, is_active=True):
    """Helper to create a user inside an organization"""
    user = User(
        id=uuid.uuid4(),
        organization_id=organization.id,
        role=role,
        email=email,
        hashed_password=get_password_hash(password),
        full_name=email.split("@")[0],
        is_active=is_active,
    )
    db_session.add(user)
    db_session.commit()
    return user


def get_auth_headers(client, email="recruiter@example.com", password=DEFAULT_PASSWORD):
    """Helper to get authentication headers"""
    response = client.post(
        "/api/v1/auth/login",
        json={"username": email, "password": password}
    )
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def organization(db_session):
    return create_organization(db_session)


@pytest.fixture
def recruiter(db_session, organization):
    return create_user(db_session, organization)


@pytest.fixture
def admin(db_session, organization):
    return create_user(db_session, organization, email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def auth_headers(client, recruiter):
    return get_auth_headers(client)


@pytest.fixture
def admin_headers(client, admin):
    return get_auth_headers(client, email="admin@example.com")


@pytest.fixture
def sample_candidate_data():
    """Sample candidate form data for testing"""
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "phone": "+1 555 0100",
        "source": "LinkedIn",
        "location": "London, UK",
    }
