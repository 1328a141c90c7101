import logging

from fastapi import APIRouter, HTTPException, status, Depends
from sqlalchemy import func
from sqlmodel import Session, select

from app.models.role import Role as RoleModel
from app.models.user import User
from app.schemas.common import envelope
from app.schemas.role import RoleRead
from app.schemas.user import RegisterRequest, LoginRequest, UserRead, Token
from app.core.errors import INVALID_CREDENTIALS_MESSAGE
from app.core.policies import TokenClaims, get_current_claims, unauthorized
from app.core.security import TokenIssuer, get_password_hash, get_token_issuer, verify_password
from app.database import get_session

logger = logging.getLogger(__name__)

router = APIRouter()

DUMMY_PASSWORD_HASH = get_password_hash("placeholder-password-never-assigned")


def to_user_read(user: User, role: RoleModel = None) -> UserRead:
    return UserRead(
        id=user.id,
        full_name=user.full_name,
        email=user.email,
        role_id=user.role_id,
        role=RoleRead.model_validate(role) if role else None,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def find_user_by_email(session: Session, email: str):
    return session.exec(select(User).where(func.lower(User.email) == email.lower())).first()


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(user_in: RegisterRequest, session: Session = Depends(get_session)):
    if find_user_by_email(session, user_in.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    role = session.get(RoleModel, user_in.role_id)
    if not role:
        raise HTTPException(status_code=400, detail=f"Role with id: {user_in.role_id} not found")
    user = User(
        full_name=user_in.full_name,
        email=user_in.email,
        password_hash=get_password_hash(user_in.password),
        role_id=role.id,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Registered user %s with role %s", user.id, role.name)
    return envelope(data=to_user_read(user, role), message="User registered successfully")


@router.post("/login")
def login(
    credentials: LoginRequest,
    session: Session = Depends(get_session),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    user = find_user_by_email(session, credentials.email)
    # Unknown emails still pay for a bcrypt check so both failures take as long.
    password_hash = user.password_hash if user else DUMMY_PASSWORD_HASH
    password_ok = verify_password(credentials.password, password_hash)
    if not user or not password_ok:
        logger.warning("Failed login attempt for %s", credentials.email)
        raise HTTPException(
            status_code=401,
            detail=INVALID_CREDENTIALS_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"},
        )
    role = session.get(RoleModel, user.role_id)
    token = issuer.create_access_token(user, role.name if role else "")
    logger.info("User %s logged in", user.id)
    return envelope(data=Token(access_token=token, expires_in=issuer.expires_in))


def get_current_user(
    claims: TokenClaims = Depends(get_current_claims),
    session: Session = Depends(get_session),
) -> User:
    user = session.get(User, claims.sub)
    if user is None:
        raise unauthorized()
    return user


@router.get("/me")
def me(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    role = session.get(RoleModel, current_user.role_id)
    return envelope(data=to_user_read(current_user, role))
