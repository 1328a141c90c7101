import logging

from sqlmodel import SQLModel, Session, select

from app.core.policies import Role as RoleName
from app.database import engine
from app.models.role import Role
import app.models.user  # noqa
import app.models.material  # noqa
import app.models.requisition  # noqa
import app.models.requisition_item  # noqa
import app.models.requisition_remark  # noqa

logger = logging.getLogger(__name__)

DEFAULT_ROLE_DESCRIPTIONS = {
    RoleName.ADMIN: "Reviews and approves requisitions, manages catalog and roles",
    RoleName.EMPLOYEE: "Submits requisitions for materials",
}


def create_db_and_tables():
    SQLModel.metadata.create_all(engine)


def seed_roles(session: Session):
    """Insert the built-in roles that are missing. Safe to run repeatedly."""
    existing = set(session.exec(select(Role.name)).all())
    created = []
    for name, description in DEFAULT_ROLE_DESCRIPTIONS.items():
        if name.value not in existing:
            session.add(Role(name=name.value, description=description))
            created.append(name.value)
    session.commit()
    if created:
        logger.info("Seeded roles: %s", ", ".join(created))
    return created


if __name__ == "__main__":
    create_db_and_tables()
    with Session(engine) as session:
        seed_roles(session)
