# medplanner/db/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from medplanner.config import DATABASE_URL


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """
    SQLite ignores FOREIGN KEY / ON DELETE clauses unless the pragma is set on every connection
    """
    if target.dialect.name != "sqlite":
        return

    @event.listens_for(target, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(DATABASE_URL)
enable_sqlite_foreign_keys(engine)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Shared declarative Base, imported by models.py
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    # Import so every table is registered on Base before create_all
    from medplanner.db import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
