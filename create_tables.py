# create_tables.py
from sqlmodel import Session

from app.database import engine
from app.init_db import create_db_and_tables, seed_roles


if __name__ == "__main__":
    create_db_and_tables()
    with Session(engine) as session:
        seed_roles(session)
