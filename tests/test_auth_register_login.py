import sys
import os
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

os.environ.setdefault("database_url", "sqlite:///:memory:")
os.environ.setdefault("secret_key", "testsecret")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine, select
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api.endpoints import auth as auth_endpoints
from app.models.role import Role
from app.models.user import User
from app.database import get_session
from app.core.config import get_settings
from app.core.errors import INVALID_CREDENTIALS_MESSAGE, UNAUTHORIZED_MESSAGE
from app.core.security import TokenIssuer
from app.init_db import seed_roles


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
SQLModel.metadata.create_all(engine)


def override_get_session():
    with Session(engine) as session:
        yield session


@pytest.fixture(autouse=True)
def setup_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        seed_roles(session)


@pytest.fixture
def client():
    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def role_id(name):
    with Session(engine) as session:
        return str(session.exec(select(Role).where(Role.name == name)).one().id)


def register(client, email="alice@example.com", password="secret123", role="employee"):
    return client.post(
        "/api/auth/register",
        json={
            "fullName": "Alice Doe",
            "email": email,
            "password": password,
            "roleId": role_id(role),
        },
    )


def test_register_success(client):
    response = register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["ok"] is True
    assert body["message"] == "User registered successfully"
    data = body["data"]
    assert data["fullName"] == "Alice Doe"
    assert data["email"] == "alice@example.com"
    assert data["role"]["name"] == "employee"
    assert "password" not in data and "passwordHash" not in data


def test_register_duplicate_email(client):
    assert register(client).status_code == 201

    response = register(client, email="ALICE@example.com")
    assert response.status_code == 400
    assert response.json() == {"ok": False, "message": "Email already registered"}

    with Session(engine) as session:
        assert len(session.exec(select(User)).all()) == 1


def test_register_unknown_role(client):
    missing = "00000000-0000-0000-0000-000000000000"
    response = client.post(
        "/api/auth/register",
        json={"fullName": "Bob", "email": "bob@example.com", "password": "secret123", "roleId": missing},
    )
    assert response.status_code == 400
    assert response.json()["message"] == f"Role with id: {missing} not found"

    with Session(engine) as session:
        assert session.exec(select(User)).all() == []


def test_register_validation_errors_use_envelope(client):
    response = register(client, password="short")
    assert response.status_code == 400
    body = response.json()
    assert body["ok"] is False
    assert "password" in body["message"]


def test_login_success_and_token_claims(client):
    user_id = register(client).json()["data"]["id"]

    response = client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "secret123"}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == 60 * 60

    claims = TokenIssuer.from_settings(get_settings()).decode_access_token(data["access_token"])
    assert claims["sub"] == user_id
    assert claims["role"] == "employee"
    assert claims["name"] == "Alice Doe"
    assert claims["email"] == "alice@example.com"
    assert claims["iss"] == get_settings().jwt_issuer
    assert claims["aud"] == get_settings().jwt_audience


def test_login_failures_share_one_message(client):
    register(client)

    wrong_password = client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "wrong-password"}
    )
    unknown_email = client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"}
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {
        "ok": False,
        "message": INVALID_CREDENTIALS_MESSAGE,
    }


def test_login_unknown_email_still_checks_a_password(client, monkeypatch):
    checked = []

    def recording_verify(password, password_hash):
        checked.append(password_hash)
        return False

    monkeypatch.setattr(auth_endpoints, "verify_password", recording_verify)
    response = client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"}
    )
    assert response.status_code == 401
    assert checked == [auth_endpoints.DUMMY_PASSWORD_HASH]


def test_me_requires_token_and_returns_profile(client):
    register(client)
    anonymous = client.get("/api/auth/me")
    assert anonymous.status_code == 401
    assert anonymous.json()["message"] == UNAUTHORIZED_MESSAGE

    token = client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "secret123"}
    ).json()["data"]["access_token"]
    me_resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me_resp.status_code == 200
    assert me_resp.json()["data"]["email"] == "alice@example.com"
