# schemas/user.py

import uuid
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from app.schemas.common import CamelModel
from app.schemas.role import RoleRead


class RegisterRequest(CamelModel):
    full_name: str = Field(min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(min_length=8)
    role_id: uuid.UUID


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserBasic(CamelModel):
    id: uuid.UUID
    name: str
    email: str


class UserRead(CamelModel):
    id: uuid.UUID
    full_name: str
    email: str
    role_id: uuid.UUID
    role: Optional[RoleRead] = None
    created_at: datetime
    updated_at: datetime


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
