import logging
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session, select

from app.core.errors import bad_request, not_found
from app.core.policies import TokenClaims, admin_only, get_current_claims
from app.database import get_session
from app.models.material import Material
from app.models.requisition_item import RequisitionItem
from app.schemas.common import envelope
from app.schemas.material import MaterialCreate, MaterialRead, MaterialUpdate
from app.services.partial_update import apply_partial_update

logger = logging.getLogger(__name__)

router = APIRouter()


def get_material_or_404(session: Session, material_id: uuid.UUID) -> Material:
    material = session.get(Material, material_id)
    if not material:
        raise not_found("Material", material_id)
    return material


@router.get("")
def list_materials(
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    materials = session.exec(select(Material).order_by(Material.name)).all()
    logger.info("Got all materials")
    return envelope(data=[MaterialRead.model_validate(m) for m in materials])


@router.get("/{material_id}")
def get_material(
    material_id: uuid.UUID,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    material = get_material_or_404(session, material_id)
    return envelope(data=MaterialRead.model_validate(material))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_material(
    material_in: MaterialCreate,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(admin_only),
):
    material = Material(**material_in.model_dump())
    session.add(material)
    session.commit()
    session.refresh(material)
    logger.info("Material %s created by %s", material.id, claims.sub)
    return envelope(data=MaterialRead.model_validate(material), message="Material created successfully")


@router.put("/{material_id}")
def update_material(
    material_id: uuid.UUID,
    material_in: MaterialUpdate,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(admin_only),
):
    material = get_material_or_404(session, material_id)
    apply_partial_update(material, material_in)
    session.add(material)
    session.commit()
    session.refresh(material)
    return envelope(data=MaterialRead.model_validate(material), message="Material updated successfully")


@router.delete("/{material_id}")
def delete_material(
    material_id: uuid.UUID,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(admin_only),
):
    material = get_material_or_404(session, material_id)
    in_use = session.exec(
        select(RequisitionItem.id).where(RequisitionItem.material_id == material.id)
    ).first()
    if in_use is not None:
        raise bad_request("Material is still used by requisition items")
    session.delete(material)
    session.commit()
    logger.info("Material %s deleted by %s", material_id, claims.sub)
    return envelope(message="Material deleted successfully")
