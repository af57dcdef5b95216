"""
Job record store.

Owns the SQLite connection for the lifetime of the process and exposes
single-row CRUD operations. Nothing is cached: every read goes to the
database, so listings always reflect the latest committed state.
"""

from contextlib import contextmanager
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from .database import Base, Job, get_session_factory, init_database
from .errors import StoreClosedError, StoreError
from .logger import StructuredLogger, get_logger
from .schema import DEFAULT_STATUS


@dataclass(frozen=True)
class JobRecord:
    """A stored job, detached from any database session."""

    id: int
    title: str
    company: str
    location: str
    url: str
    date_posted: str
    status: str

    @classmethod
    def from_model(cls, job: Job) -> "JobRecord":
        return cls(
            id=job.id,
            title=job.title or "",
            company=job.company or "",
            location=job.location or "",
            url=job.url or "",
            date_posted=job.date_posted or "",
            status=job.status or DEFAULT_STATUS,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class JobStore:
    """SQLite-backed store for JobRecord rows."""

    def __init__(self, db_path: Union[str, Path], logger: Optional[StructuredLogger] = None):
        self.db_path = Path(db_path)
        self.logger = logger or get_logger()
        self._engine = None
        self._session_factory = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def initialize(self) -> None:
        """Open the database, creating the file and jobs table if absent."""
        self._check_open()
        try:
            if self._engine is None:
                self._engine = init_database(self.db_path)
                self._session_factory = get_session_factory(self._engine)
            else:
                Base.metadata.create_all(self._engine)
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Could not open database {self.db_path}: {e}") from e
        self.logger.debug("Store ready", db_path=str(self.db_path))

    def insert(
        self,
        title: str = "",
        company: str = "",
        location: str = "",
        url: str = "",
        date_posted: str = "",
        status: Optional[str] = None,
    ) -> int:
        """Insert a job and return its newly assigned id."""
        with self._transaction("insert") as session:
            job = Job(
                title=title or "",
                company=company or "",
                location=location or "",
                url=url or "",
                date_posted=date_posted or "",
                status=status or DEFAULT_STATUS,
            )
            session.add(job)
            session.flush()
            job_id = job.id
        self.logger.debug("Inserted job", job_id=job_id)
        return job_id

    def list_all(self) -> Iterator[JobRecord]:
        """Lazily yield every job ordered by id. Each call runs a fresh query."""
        self._check_ready()
        return self._iter_jobs()

    def _iter_jobs(self) -> Iterator[JobRecord]:
        session = self._session_factory()
        try:
            stmt = select(Job).order_by(Job.id).execution_options(yield_per=50)
            for job in session.scalars(stmt):
                yield JobRecord.from_model(job)
        except SQLAlchemyError as e:
            raise StoreError(f"list failed: {e}") from e
        finally:
            session.close()

    def update_status(self, job_id: int, new_status: str) -> int:
        """Set the status of one job. Returns rows affected (0 or 1)."""
        with self._transaction("update") as session:
            result = session.execute(
                update(Job)
                .where(Job.id == job_id)
                .values(status=new_status)
                .execution_options(synchronize_session=False)
            )
            affected = result.rowcount
        self.logger.debug("Updated job status", job_id=job_id, status=new_status, affected=affected)
        return affected

    def delete(self, job_id: int) -> int:
        """Delete one job. Returns rows affected (0 or 1)."""
        with self._transaction("delete") as session:
            result = session.execute(
                delete(Job)
                .where(Job.id == job_id)
                .execution_options(synchronize_session=False)
            )
            affected = result.rowcount
        self.logger.debug("Deleted job", job_id=job_id, affected=affected)
        return affected

    def close(self) -> None:
        """Release the database. Every later call, close included, raises StoreClosedError."""
        self._check_open()
        self._closed = True
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None
        self.logger.info("Closed the database connection.")

    def _check_open(self) -> None:
        if self._closed:
            raise StoreClosedError()

    def _check_ready(self) -> None:
        self._check_open()
        if self._session_factory is None:
            raise StoreError("store not initialized; call initialize() first")

    @contextmanager
    def _transaction(self, operation: str):
        self._check_ready()
        try:
            with self._session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as e:
            raise StoreError(f"{operation} failed: {e}") from e
