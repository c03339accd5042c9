"""
Database schema and connection management.

Uses SQLite with SQLAlchemy as a byte-oriented key-value substrate: one table
maps gig ids to serialized records, another holds named counter cells.
"""

from pathlib import Path
from sqlalchemy import create_engine, Column, Integer, LargeBinary, String
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from .errors import StorageFault

Base = declarative_base()


class GigRow(Base):
    """Serialized gig keyed by its id."""

    __tablename__ = "gigs"

    id = Column(Integer, primary_key=True, autoincrement=False)
    data = Column(LargeBinary, nullable=False)  # UTF-8 JSON of Gig.to_dict()


class CounterCell(Base):
    """Named persisted integer."""

    __tablename__ = "counters"

    name = Column(String, primary_key=True)
    value = Column(Integer, nullable=False, default=0)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Existing tables and their rows are left as they are, so reopening a
    database restores the previous state.

    Args:
        db_path: Path to SQLite database file

    Raises:
        StorageFault: If the file or its directory cannot be created
    """
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(f"sqlite:///{db_path}")
        Base.metadata.create_all(engine)
        engine.dispose()
    except (OSError, SQLAlchemyError) as e:
        raise StorageFault(f"Cannot initialize database at {db_path}: {e}") from e


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
