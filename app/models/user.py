import uuid

from sqlmodel import Field

from app.models.base import TimestampedModel


class User(TimestampedModel, table=True):
    full_name: str = Field(max_length=255)
    email: str = Field(index=True, max_length=320)
    password_hash: str
    role_id: uuid.UUID = Field(foreign_key="role.id", index=True)
