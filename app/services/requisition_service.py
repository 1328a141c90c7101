import logging
import uuid
from typing import Dict, Iterable, List, Sequence

from sqlmodel import Session, select, delete

from app.core.errors import bad_request
from app.models.material import Material
from app.models.requisition import Requisition
from app.models.requisition_item import RequisitionItem
from app.models.requisition_remark import RequisitionRemark
from app.models.user import User
from app.schemas.requisition import (
    MaterialDetail,
    RequisitionItemIn,
    RequisitionItemRead,
    RequisitionRead,
    RequisitionRemarkRead,
)
from app.schemas.user import UserBasic

logger = logging.getLogger(__name__)

EMPTY_ITEMS_MESSAGE = "Items should not be null or empty"


def ensure_items_present(items) -> None:
    if not items:
        raise bad_request(EMPTY_ITEMS_MESSAGE)


def find_missing_materials(session: Session, material_ids: Iterable[uuid.UUID]) -> List[uuid.UUID]:
    """Return the ids that have no material row, once each, in request order."""
    wanted = list(dict.fromkeys(material_ids))
    if not wanted:
        return []
    found = set(session.exec(select(Material.id).where(Material.id.in_(wanted))).all())
    return [mid for mid in wanted if mid not in found]


def validate_materials(session: Session, items: Sequence[RequisitionItemIn]) -> None:
    missing = find_missing_materials(session, (item.material_id for item in items))
    if missing:
        ids = ", ".join(str(mid) for mid in missing)
        logger.info("Rejected requisition items, missing materials: %s", ids)
        raise bad_request(f"Materials not found: {ids}")


def build_items(requisition_id: uuid.UUID, items: Sequence[RequisitionItemIn]) -> List[RequisitionItem]:
    return [
        RequisitionItem(
            requisition_id=requisition_id,
            material_id=item.material_id,
            quantity=item.quantity,
        )
        for item in items
    ]


def replace_items(session: Session, requisition: Requisition, items: Sequence[RequisitionItemIn]) -> None:
    """Swap the whole item set; the caller commits."""
    session.exec(delete(RequisitionItem).where(RequisitionItem.requisition_id == requisition.id))
    session.add_all(build_items(requisition.id, items))


def delete_requisition_tree(session: Session, requisition: Requisition) -> None:
    # Children first so no row is left pointing at a missing parent.
    session.exec(delete(RequisitionRemark).where(RequisitionRemark.requisition_id == requisition.id))
    session.exec(delete(RequisitionItem).where(RequisitionItem.requisition_id == requisition.id))
    session.delete(requisition)


def _user_basic(user: User) -> UserBasic:
    return UserBasic(id=user.id, name=user.full_name, email=user.email)


def assemble_requisitions(session: Session, requisitions: Sequence[Requisition]) -> List[RequisitionRead]:
    """Join requester, items with material detail and remarks with author.

    Runs one query per related table regardless of how many requisitions
    are passed in.
    """
    if not requisitions:
        return []
    ids = [r.id for r in requisitions]

    items = session.exec(
        select(RequisitionItem)
        .where(RequisitionItem.requisition_id.in_(ids))
        .order_by(RequisitionItem.created_at)
    ).all()
    remarks = session.exec(
        select(RequisitionRemark)
        .where(RequisitionRemark.requisition_id.in_(ids))
        .order_by(RequisitionRemark.created_at)
    ).all()

    material_ids = {i.material_id for i in items}
    materials: Dict[uuid.UUID, Material] = {}
    if material_ids:
        materials = {
            m.id: m for m in session.exec(select(Material).where(Material.id.in_(material_ids))).all()
        }

    user_ids = {r.requested_user_id for r in requisitions} | {rm.author_id for rm in remarks}
    users = {u.id: u for u in session.exec(select(User).where(User.id.in_(user_ids))).all()}

    items_by_req: Dict[uuid.UUID, List[RequisitionItemRead]] = {rid: [] for rid in ids}
    for item in items:
        material = materials.get(item.material_id)
        items_by_req[item.requisition_id].append(
            RequisitionItemRead(
                id=item.id,
                quantity=item.quantity,
                material=MaterialDetail.model_validate(material) if material else None,
            )
        )

    remarks_by_req: Dict[uuid.UUID, List[RequisitionRemarkRead]] = {rid: [] for rid in ids}
    for remark in remarks:
        author = users.get(remark.author_id)
        remarks_by_req[remark.requisition_id].append(
            RequisitionRemarkRead(
                id=remark.id,
                content=remark.content,
                author_id=remark.author_id,
                author=_user_basic(author) if author else None,
                created_at=remark.created_at,
            )
        )

    result = []
    for req in requisitions:
        requester = users.get(req.requested_user_id)
        result.append(
            RequisitionRead(
                id=req.id,
                status=req.status,
                description=req.description,
                created_at=req.created_at,
                updated_at=req.updated_at,
                requested_user=_user_basic(requester) if requester else None,
                requisition_items=items_by_req[req.id],
                requisition_remarks=remarks_by_req[req.id],
            )
        )
    return result


def assemble_requisition(session: Session, requisition: Requisition) -> RequisitionRead:
    return assemble_requisitions(session, [requisition])[0]
