import logging
import uuid
from enum import Enum
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import BaseModel, ValidationError, field_validator

from app.core.errors import FORBIDDEN_MESSAGE, UNAUTHORIZED_MESSAGE
from app.core.security import TokenIssuer, get_token_issuer

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


class Role(str, Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class TokenClaims(BaseModel):
    sub: uuid.UUID
    name: str
    email: str
    role: Optional[Role] = None

    @field_validator("role", mode="before")
    @classmethod
    def unknown_role_is_none(cls, value):
        # Roles outside the closed set grant no capability.
        try:
            return Role(value) if value is not None else None
        except ValueError:
            return None


def has_role(claims: TokenClaims, role: Role) -> bool:
    return claims.role is role


def unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED_MESSAGE,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_claims(
    token: Optional[str] = Depends(oauth2_scheme),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenClaims:
    if not token:
        raise unauthorized()
    try:
        payload = issuer.decode_access_token(token)
        return TokenClaims(**payload)
    except (JWTError, ValidationError) as exc:
        logger.warning("Rejected bearer token: %s", exc)
        raise unauthorized()


def require_role(role: Role):
    """Build a dependency that lets through only callers holding ``role``."""

    def dependency(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if not has_role(claims, role):
            logger.warning("User %s denied: %s role required", claims.sub, role.value)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_MESSAGE)
        return claims

    dependency.__name__ = f"require_{role.value}"
    return dependency


admin_only = require_role(Role.ADMIN)
employee_access = require_role(Role.EMPLOYEE)
