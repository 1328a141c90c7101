import sys
import os
import uuid
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

os.environ.setdefault("database_url", "sqlite:///:memory:")
os.environ.setdefault("secret_key", "testsecret")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine, select
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import get_session
from app.core.policies import Role, TokenClaims, get_current_claims
from app.models.material import Material
from app.models.requisition import Requisition
from app.models.requisition_item import RequisitionItem


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
SQLModel.metadata.create_all(engine)


def override_get_session():
    with Session(engine) as session:
        yield session


def as_role(role):
    claims = TokenClaims(sub=uuid.uuid4(), name="Admin", email="admin@example.com", role=role)
    app.dependency_overrides[get_current_claims] = lambda: claims


@pytest.fixture
def client():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    app.dependency_overrides[get_session] = override_get_session
    as_role(Role.ADMIN)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def add_material(**overrides):
    values = {"name": "Cement", "description": "50kg bag", "unit": "bag"}
    values.update(overrides)
    with Session(engine) as session:
        material = Material(**values)
        session.add(material)
        session.commit()
        session.refresh(material)
        return material.id


def test_create_and_get_material(client):
    response = client.post(
        "/api/materials",
        json={"name": "Steel rod", "description": "12mm", "unit": "piece", "barCode": "7501234"},
    )
    assert response.status_code == 201
    created = response.json()["data"]
    assert created["barCode"] == "7501234"

    fetched = client.get(f"/api/materials/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["data"]["name"] == "Steel rod"

    listed = client.get("/api/materials")
    assert [m["name"] for m in listed.json()["data"]] == ["Steel rod"]


def test_create_material_validates_lengths(client):
    response = client.post("/api/materials", json={"name": "x" * 201, "unit": "bag"})
    assert response.status_code == 400
    assert response.json()["ok"] is False
    assert response.json()["message"].startswith("name:")

    response = client.post(
        "/api/materials", json={"name": "ok", "description": "d" * 501, "unit": "bag"}
    )
    assert response.status_code == 400
    assert "description" in response.json()["message"]


def test_get_missing_material_returns_404(client):
    missing = uuid.uuid4()
    response = client.get(f"/api/materials/{missing}")
    assert response.status_code == 404
    assert response.json() == {"ok": False, "message": f"Material with id: {missing} not found"}


def test_partial_update_skips_blank_fields(client):
    material_id = add_material()

    response = client.put(
        f"/api/materials/{material_id}",
        json={"name": "Portland cement", "description": "   ", "unit": ""},
    )
    assert response.status_code == 200

    with Session(engine) as session:
        material = session.get(Material, material_id)
        assert material.name == "Portland cement"
        assert material.description == "50kg bag"
        assert material.unit == "bag"
        assert material.updated_at >= material.created_at


def test_write_endpoints_require_admin(client):
    material_id = add_material()
    as_role(Role.EMPLOYEE)

    assert client.get("/api/materials").status_code == 200
    assert client.post("/api/materials", json={"name": "a", "unit": "b"}).status_code == 403
    assert client.put(f"/api/materials/{material_id}", json={"name": "a"}).status_code == 403
    assert client.delete(f"/api/materials/{material_id}").status_code == 403


def test_delete_material_refused_while_requisitions_use_it(client):
    material_id = add_material()
    other_id = add_material(name="Sand")
    with Session(engine) as session:
        requisition = Requisition(requested_user_id=uuid.uuid4(), description="Site A", status="Approved")
        session.add(requisition)
        session.commit()
        session.add(RequisitionItem(requisition_id=requisition.id, material_id=material_id, quantity=3))
        session.add(RequisitionItem(requisition_id=requisition.id, material_id=other_id, quantity=1))
        session.commit()

    response = client.delete(f"/api/materials/{material_id}")
    assert response.status_code == 400
    assert response.json() == {"ok": False, "message": "Material is still used by requisition items"}

    with Session(engine) as session:
        assert session.get(Material, material_id) is not None
        remaining = session.exec(select(RequisitionItem)).all()
        assert sorted(str(i.material_id) for i in remaining) == sorted([str(material_id), str(other_id)])


def test_delete_unused_material(client):
    material_id = add_material()

    response = client.delete(f"/api/materials/{material_id}")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "message": "Material deleted successfully"}

    with Session(engine) as session:
        assert session.get(Material, material_id) is None
    assert client.delete(f"/api/materials/{material_id}").status_code == 404


def test_timestamps_are_timezone_aware():
    material = Material(name="Gravel", unit="m3")
    assert material.created_at.tzinfo is not None
    assert material.updated_at.tzinfo is not None

    before = material.updated_at
    material.touch()
    assert material.updated_at.tzinfo is not None
    assert material.updated_at >= before

    assert Material.__table__.c.created_at.type.timezone is True
    assert Material.__table__.c.updated_at.type.timezone is True
