from logging.config import fileConfig

from alembic import context
from sqlmodel import SQLModel

from app.database import engine

import app.models.role  # noqa
import app.models.user  # noqa
import app.models.material  # noqa
import app.models.requisition  # noqa
import app.models.requisition_item  # noqa
import app.models.requisition_remark  # noqa

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata

# SQLite cannot ALTER most column properties; batch mode rebuilds the table instead.
RENDER_AS_BATCH = engine.dialect.name == "sqlite"


def run_migrations_offline() -> None:
    context.configure(
        url=engine.url.render_as_string(hide_password=False),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=RENDER_AS_BATCH,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=RENDER_AS_BATCH,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
