from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt
from passlib.context import CryptContext

from app.core.config import Settings, get_settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
ALGORITHM = "HS256"


def verify_password(plain, hashed):
    return pwd_context.verify(plain, hashed)


def get_password_hash(password):
    return pwd_context.hash(password)


class TokenIssuer:
    """Signs and validates bearer tokens with explicitly injected settings."""

    def __init__(
        self,
        secret_key: str,
        issuer: str,
        audience: str,
        expire_minutes: int = 60,
        algorithm: str = ALGORITHM,
    ):
        self.secret_key = secret_key
        self.issuer = issuer
        self.audience = audience
        self.expire_minutes = expire_minutes
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret_key=settings.secret_key,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            expire_minutes=settings.access_token_expire_minutes,
        )

    @property
    def expires_in(self) -> int:
        return self.expire_minutes * 60

    def create_access_token(self, user, role_name: str) -> str:
        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": str(user.id),
            "name": user.full_name,
            "email": user.email,
            "role": role_name,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_access_token(self, token: str) -> Dict[str, Any]:
        # Raises JWTError on a bad signature, issuer, audience or an expired token.
        return jwt.decode(
            token,
            self.secret_key,
            algorithms=[self.algorithm],
            audience=self.audience,
            issuer=self.issuer,
        )


def get_token_issuer() -> TokenIssuer:
    return TokenIssuer.from_settings(get_settings())
