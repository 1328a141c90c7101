# api/endpoints/requisitions.py

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from app.api.endpoints.auth import get_current_user
from app.core.errors import FORBIDDEN_MESSAGE, not_found
from app.core.policies import Role, TokenClaims, admin_only, get_current_claims, has_role
from app.database import get_session
from app.models.requisition import LOCKED_STATUSES, Requisition, RequisitionStatus
from app.models.requisition_remark import RequisitionRemark
from app.models.user import User
from app.schemas.common import envelope
from app.schemas.requisition import (
    RemarkCreate,
    RequisitionCreate,
    RequisitionStatusUpdate,
    RequisitionUpdate,
)
from app.services.partial_update import apply_partial_update
from app.services.requisition_service import (
    assemble_requisition,
    assemble_requisitions,
    build_items,
    delete_requisition_tree,
    ensure_items_present,
    replace_items,
    validate_materials,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_requisition_or_404(session: Session, requisition_id: uuid.UUID) -> Requisition:
    requisition = session.get(Requisition, requisition_id)
    if not requisition:
        raise not_found("Requisition", requisition_id)
    return requisition


def ensure_status_allowed(claims: TokenClaims, requested) -> None:
    # Approving or rejecting is an admin decision, whichever route carries it.
    if requested in LOCKED_STATUSES and not has_role(claims, Role.ADMIN):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_MESSAGE)


@router.get("")
def list_requisitions(
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(admin_only),
):
    requisitions = session.exec(select(Requisition).order_by(Requisition.created_at.desc())).all()
    return envelope(data=assemble_requisitions(session, requisitions))


@router.get("/user/{user_id}")
def list_requisitions_by_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    requisitions = session.exec(
        select(Requisition)
        .where(Requisition.requested_user_id == user_id)
        .order_by(Requisition.created_at.desc())
    ).all()
    return envelope(data=assemble_requisitions(session, requisitions))


@router.get("/status/{requisition_status}")
def list_requisitions_by_status(
    requisition_status: RequisitionStatus,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    requisitions = session.exec(
        select(Requisition)
        .where(Requisition.status == requisition_status.value)
        .order_by(Requisition.created_at.desc())
    ).all()
    return envelope(data=assemble_requisitions(session, requisitions))


@router.get("/{requisition_id}")
def get_requisition(
    requisition_id: uuid.UUID,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    requisition = get_requisition_or_404(session, requisition_id)
    return envelope(data=assemble_requisition(session, requisition))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_requisition(
    requisition_in: RequisitionCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
    claims: TokenClaims = Depends(get_current_claims),
):
    ensure_status_allowed(claims, requisition_in.status)
    ensure_items_present(requisition_in.items)
    validate_materials(session, requisition_in.items)

    requisition = Requisition(
        requested_user_id=current_user.id,
        status=requisition_in.status.value,
        description=requisition_in.description,
    )
    session.add(requisition)
    # Parent row first, then its items, committed together.
    session.flush()
    session.add_all(build_items(requisition.id, requisition_in.items))
    session.commit()
    session.refresh(requisition)
    logger.info("Requisition %s submitted by %s", requisition.id, current_user.id)
    return envelope(
        data=assemble_requisition(session, requisition),
        message="Requisition submitted successfully",
    )


@router.put("/{requisition_id}")
def update_requisition(
    requisition_id: uuid.UUID,
    requisition_in: RequisitionUpdate,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    requisition = get_requisition_or_404(session, requisition_id)
    if requisition.is_locked:
        raise HTTPException(
            status_code=400,
            detail=f"Requisition is {requisition.status} and can no longer be modified",
        )
    ensure_status_allowed(claims, requisition_in.status)

    if requisition_in.items is not None:
        ensure_items_present(requisition_in.items)
        validate_materials(session, requisition_in.items)
        replace_items(session, requisition, requisition_in.items)
        requisition.touch()

    apply_partial_update(requisition, requisition_in, exclude={"items"})
    session.add(requisition)
    session.commit()
    session.refresh(requisition)
    logger.info("Requisition %s updated by %s", requisition.id, claims.sub)
    return envelope(
        data=assemble_requisition(session, requisition),
        message="Requisition updated successfully",
    )


@router.patch("/{requisition_id}/status")
def update_requisition_status(
    requisition_id: uuid.UUID,
    status_in: RequisitionStatusUpdate,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(admin_only),
):
    requisition = get_requisition_or_404(session, requisition_id)
    previous = requisition.status
    # No transition table: any status may follow any other.
    requisition.status = status_in.status.value
    requisition.touch()
    session.add(requisition)
    session.commit()
    session.refresh(requisition)
    logger.info(
        "Requisition %s status %s -> %s by %s", requisition.id, previous, requisition.status, claims.sub
    )
    return envelope(
        data=assemble_requisition(session, requisition),
        message="Requisition status updated successfully",
    )


@router.delete("/{requisition_id}")
def delete_requisition(
    requisition_id: uuid.UUID,
    session: Session = Depends(get_session),
    claims: TokenClaims = Depends(get_current_claims),
):
    requisition = get_requisition_or_404(session, requisition_id)
    if requisition.status != RequisitionStatus.PENDING.value:
        raise HTTPException(
            status_code=400,
            detail="Only pending requisitions can be deleted",
        )
    delete_requisition_tree(session, requisition)
    session.commit()
    logger.info("Requisition %s deleted by %s", requisition_id, claims.sub)
    return envelope(message="Requisition deleted successfully")


@router.post("/{requisition_id}/remarks", status_code=status.HTTP_201_CREATED)
def add_remark(
    requisition_id: uuid.UUID,
    remark_in: RemarkCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    requisition = get_requisition_or_404(session, requisition_id)
    remark = RequisitionRemark(
        requisition_id=requisition.id,
        author_id=current_user.id,
        content=remark_in.content,
    )
    session.add(remark)
    session.commit()
    logger.info("Remark added to requisition %s by %s", requisition.id, current_user.id)
    return envelope(
        data=assemble_requisition(session, requisition),
        message="Remark added successfully",
    )
