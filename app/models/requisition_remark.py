import uuid

from sqlmodel import Field

from app.models.base import TimestampedModel


class RequisitionRemark(TimestampedModel, table=True):
    """Free-text comment left on a requisition, typically by a reviewer."""

    requisition_id: uuid.UUID = Field(foreign_key="requisition.id", index=True)
    author_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    content: str = Field(max_length=500)
