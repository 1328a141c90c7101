import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from app.api.endpoints.auth import to_user_read
from app.core.errors import not_found
from app.core.policies import admin_only
from app.database import get_session
from app.models.role import Role
from app.models.user import User
from app.schemas.common import envelope

router = APIRouter(dependencies=[Depends(admin_only)])


@router.get("")
def list_users(session: Session = Depends(get_session)):
    rows = session.exec(
        select(User, Role).join(Role, Role.id == User.role_id, isouter=True).order_by(User.full_name)
    ).all()
    return envelope(data=[to_user_read(user, role) for user, role in rows])


@router.get("/{user_id}")
def get_user(user_id: uuid.UUID, session: Session = Depends(get_session)):
    user = session.get(User, user_id)
    if not user:
        raise not_found("User", user_id)
    return envelope(data=to_user_read(user, session.get(Role, user.role_id)))
