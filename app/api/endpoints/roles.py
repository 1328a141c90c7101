import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from app.core.errors import not_found
from app.core.policies import admin_only
from app.database import get_session
from app.models.role import Role
from app.models.user import User
from app.schemas.common import envelope
from app.schemas.role import RoleCreate, RoleRead, RoleUpdate
from app.services.partial_update import apply_partial_update

logger = logging.getLogger(__name__)

# Every role endpoint is admin only.
router = APIRouter(dependencies=[Depends(admin_only)])


def get_role_or_404(session: Session, role_id: uuid.UUID) -> Role:
    role = session.get(Role, role_id)
    if not role:
        raise not_found("Role", role_id)
    return role


@router.get("")
def list_roles(session: Session = Depends(get_session)):
    roles = session.exec(select(Role).order_by(Role.name)).all()
    return envelope(data=[RoleRead.model_validate(r) for r in roles])


@router.get("/{role_id}")
def get_role(role_id: uuid.UUID, session: Session = Depends(get_session)):
    return envelope(data=RoleRead.model_validate(get_role_or_404(session, role_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_role(role_in: RoleCreate, session: Session = Depends(get_session)):
    role = Role(name=role_in.name, description=role_in.description)
    session.add(role)
    session.commit()
    session.refresh(role)
    logger.info("Role %s (%s) created", role.id, role.name)
    return envelope(data=RoleRead.model_validate(role), message="Role created successfully")


@router.put("/{role_id}")
def update_role(role_id: uuid.UUID, role_in: RoleUpdate, session: Session = Depends(get_session)):
    role = get_role_or_404(session, role_id)
    apply_partial_update(role, role_in)
    session.add(role)
    session.commit()
    session.refresh(role)
    return envelope(data=RoleRead.model_validate(role), message="Role updated successfully")


@router.delete("/{role_id}")
def delete_role(role_id: uuid.UUID, session: Session = Depends(get_session)):
    role = get_role_or_404(session, role_id)
    if session.exec(select(User.id).where(User.role_id == role.id)).first():
        raise HTTPException(status_code=400, detail="Role is still assigned to users")
    session.delete(role)
    session.commit()
    logger.info("Role %s deleted", role_id)
    return envelope(message="Role deleted successfully")
