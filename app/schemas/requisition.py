# schemas/requisition.py

import uuid
from typing import List, Optional
from datetime import datetime

from pydantic import Field

from app.models.requisition import RequisitionStatus
from app.schemas.common import CamelModel
from app.schemas.user import UserBasic


class RequisitionItemIn(CamelModel):
    material_id: uuid.UUID
    quantity: int = Field(gt=0)


class RequisitionCreate(CamelModel):
    description: str = Field(min_length=1, max_length=500)
    status: RequisitionStatus = RequisitionStatus.PENDING
    # Emptiness is checked by the endpoint so the error message stays stable.
    items: Optional[List[RequisitionItemIn]] = None


class RequisitionUpdate(CamelModel):
    description: Optional[str] = Field(default=None, max_length=500)
    status: Optional[RequisitionStatus] = None
    items: Optional[List[RequisitionItemIn]] = None


class RequisitionStatusUpdate(CamelModel):
    status: RequisitionStatus


class RemarkCreate(CamelModel):
    content: str = Field(min_length=20, max_length=500)


class MaterialDetail(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    unit: str
    bar_code: Optional[str] = None


class RequisitionItemRead(CamelModel):
    id: uuid.UUID
    quantity: int
    material: Optional[MaterialDetail] = None


class RequisitionRemarkRead(CamelModel):
    id: uuid.UUID
    content: str
    author_id: uuid.UUID
    author: Optional[UserBasic] = None
    created_at: datetime


class RequisitionRead(CamelModel):
    id: uuid.UUID
    status: str
    description: str
    created_at: datetime
    updated_at: datetime
    requested_user: Optional[UserBasic] = None
    requisition_items: List[RequisitionItemRead] = []
    requisition_remarks: List[RequisitionRemarkRead] = []
