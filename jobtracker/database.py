"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for job storage.
"""

from pathlib import Path
from sqlalchemy import create_engine, Column, Integer, String
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .schema import DEFAULT_STATUS

Base = declarative_base()


class Job(Base):
    """Tracked job application."""

    __tablename__ = "jobs"
    # AUTOINCREMENT keeps ids from being reused after a delete
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False, default="")
    company = Column(String, nullable=False, default="")
    location = Column(String, nullable=False, default="")
    url = Column(String, nullable=False, default="")
    date_posted = Column(String, nullable=False, default="")
    status = Column(String, nullable=False, default=DEFAULT_STATUS, server_default=DEFAULT_STATUS)


def create_db_engine(db_path: Path) -> Engine:
    """
    Create an engine for the SQLite file at db_path.

    Args:
        db_path: Path to SQLite database file
    """
    return create_engine(f"sqlite:///{db_path}")


def init_database(db_path: Path) -> Engine:
    """
    Initialize database and create tables. Safe to call on every start.

    Args:
        db_path: Path to SQLite database file

    Returns:
        Engine bound to the database
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    Base.metadata.create_all(engine)
    return engine


def get_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to engine; sessions keep loaded values after commit."""
    return sessionmaker(bind=engine, expire_on_commit=False)
