import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from medplanner.db.database import Base, enable_sqlite_foreign_keys
from medplanner.db import models  # noqa: F401  (registers the tables)


def _memory_session():
    # Each call = a separate, empty SQLite memory database
    engine = create_engine("sqlite:///:memory:")
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)()


@pytest.fixture
def db_session():
    engine, session = _memory_session()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def other_session():
    """A second, independent store (restore target)"""
    engine, session = _memory_session()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
