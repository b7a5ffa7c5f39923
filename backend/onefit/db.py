import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from .errors import InternalError
from .settings import get_settings

log = logging.getLogger(__name__)

settings = get_settings()

# SQLite connections are shared across the threadpool that serves sync routes
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Create the SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)

# Define the base class that all models should inherit from
class Base(DeclarativeBase):
    pass

# Session factory
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

# Dependency for FastAPI routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    One unit of work: commit if the block finishes, roll back otherwise.

    Multi-row writes (template -> session copy, template duplication,
    cascading deletes) run inside a single block so they land all-or-nothing.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        log.exception("storage failure, transaction rolled back")
        raise InternalError("Internal storage error") from exc
    except Exception:
        db.rollback()
        raise
