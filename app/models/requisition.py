import uuid
from enum import Enum

from sqlmodel import Field

from app.models.base import TimestampedModel


class RequisitionStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    NEEDS_MODIFICATION = "NeedsModification"


# Once a requisition reaches one of these it can no longer be edited.
LOCKED_STATUSES = {RequisitionStatus.APPROVED, RequisitionStatus.REJECTED}


class Requisition(TimestampedModel, table=True):
    requested_user_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    status: str = Field(default=RequisitionStatus.PENDING.value, index=True, max_length=30)
    description: str = Field(max_length=500)

    @property
    def is_locked(self) -> bool:
        return self.status in {s.value for s in LOCKED_STATUSES}
