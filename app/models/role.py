from typing import Optional

from sqlmodel import Field

from app.models.base import TimestampedModel


class Role(TimestampedModel, table=True):
    name: str = Field(index=True, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
