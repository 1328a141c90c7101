from typing import Optional

from sqlmodel import Field

from app.models.base import TimestampedModel


class Material(TimestampedModel, table=True):
    name: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    unit: str = Field(max_length=50)
    bar_code: Optional[str] = Field(default=None, max_length=100)
