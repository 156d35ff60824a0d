import os

os.environ.setdefault("JWT_KEY", "test-signing-key-that-is-long-enough-for-hs256")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from course_portal.database import Base, get_db
from course_portal.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def fresh_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client, username="jdoe", password="Secret123", name="Jane Doe", email="jdoe@example.com"):
    return client.post(
        "/api/authentication/register",
        json={"name": name, "username": username, "password": password, "email": email},
    )


def login(client, username="jdoe", password="Secret123"):
    return client.post(
        "/api/authentication/login",
        json={"username": username, "password": password},
    )


@pytest.fixture
def auth_headers(client):
    register(client, username="admin", password="AdminPass1")
    token = login(client, username="admin", password="AdminPass1").json()["token"]
    return {"Authorization": f"Bearer {token}"}
