import uuid

from sqlmodel import Field

from app.models.base import TimestampedModel


class RequisitionItem(TimestampedModel, table=True):
    requisition_id: uuid.UUID = Field(foreign_key="requisition.id", index=True)
    material_id: uuid.UUID = Field(foreign_key="material.id", index=True)
    quantity: int
