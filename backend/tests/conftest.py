"""
Shared fixtures for the Case Manager test suite.
Every test gets its own in-memory SQLite database wired into the app
through a get_db dependency override.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from case_manager.database import Base, get_db
from case_manager.main import app
from case_manager.models.patient import Patient
from case_manager.models.user import User
from case_manager.services.auth import get_password_hash

PASSWORD = "Hotline@123"


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_user(db_session, username="hotline", full_name="Hotline Volunteer", is_active=True):
    user = User(
        username=username,
        full_name=full_name,
        hashed_password=get_password_hash(PASSWORD),
        is_active=is_active,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def login(client, username):
    resp = client.post("/api/auth/login", json={"username": username, "password": PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def user(db_session):
    return make_user(db_session)


@pytest.fixture
def auth_headers(client, user):
    return login(client, user.username)


@pytest.fixture
def patient(db_session):
    patient = Patient(name="Susan Everyteen", primary_phone="123-123-1234")
    db_session.add(patient)
    db_session.commit()
    db_session.refresh(patient)
    return patient
