import uuid
from typing import Optional
from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class MaterialCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    unit: str = Field(min_length=1, max_length=50)
    bar_code: Optional[str] = Field(default=None, max_length=100)


class MaterialUpdate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    unit: Optional[str] = Field(default=None, max_length=50)
    bar_code: Optional[str] = Field(default=None, max_length=100)


class MaterialRead(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str]
    unit: str
    bar_code: Optional[str]
    created_at: datetime
    updated_at: datetime
