from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from sqlalchemy import create_engine, event, inspect, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.projekt.config import Settings
from app.projekt.models import Base, Customer, Project

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)
R = TypeVar("R")

# Widest primary key any supported backend stores (BIGINT).
MAX_ID = 2**63 - 1


class StorageError(RuntimeError):
    pass


def create_db_engine(settings: Settings) -> Engine:
    db_url = settings.database_url
    is_postgres = db_url.startswith("postgres")
    engine_kwargs: dict[str, object] = {
        "future": True,
        "pool_pre_ping": True,
    }
    if is_postgres:
        engine_kwargs.update(
            {
                "pool_recycle": 1800,
                "pool_size": 5,
                "max_overflow": 10,
                "pool_timeout": 30,
            }
        )
    engine = create_engine(db_url, **engine_kwargs)
    if not settings.is_production:
        @event.listens_for(engine, "checkout")
        def _receive_checkout(dbapi_connection, connection_record, connection_proxy):  # type: ignore[no-redef]
            logger.debug("DB connection checkout from pool")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


def init_schema(bind: Engine | Connection) -> None:
    """Create any missing tables. Existing tables are left untouched."""
    Base.metadata.create_all(bind=bind)


def is_transient(exc: BaseException) -> bool:
    """
    Connectivity faults worth another attempt: dropped/invalidated connections
    and driver-level operational errors (timeouts, locked database, failover).
    Constraint violations and programming errors are never retried.
    """
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(exc, OperationalError)


class EntitySet(Generic[T]):
    """Typed view of one entity kind inside a PersistenceContext."""

    def __init__(self, context: "PersistenceContext", model: type[T]) -> None:
        self.context = context
        self.model = model

    def all(self) -> list[T]:
        return self.context.query_all(self.model)

    def find(self, entity_id: int) -> T | None:
        return self.context.find(self.model, entity_id)

    def add(self, entity: T) -> None:
        self.context.add(entity)

    def update(self, entity: T) -> None:
        self.context.update(entity)

    def remove(self, entity: T) -> None:
        self.context.remove(entity)


class PersistenceContext:
    """
    Unit of work around a single Session.

    add/update/remove only record changes; save() writes everything recorded
    since the last save in one transaction. A failed save leaves the recorded
    changes in place so the caller may call save() again.

    Transient connectivity faults are retried with exponential backoff before
    StorageError is raised, for reads as well as saves.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        max_retries: int = 6,
        retry_delay: float = 0.5,
        max_retry_delay: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None
        # (operation, entity, column snapshot for updates)
        self._pending: list[tuple[str, Base, dict[str, Any] | None]] = []
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.max_retry_delay = max_retry_delay
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, session_factory: Callable[[], Session]) -> "PersistenceContext":
        return cls(
            session_factory,
            max_retries=settings.db_max_retries,
            retry_delay=settings.db_retry_delay,
            max_retry_delay=settings.db_max_retry_delay,
        )

    @property
    def session(self) -> Session:
        if self._session is None:
            self._session = self._session_factory()
        return self._session

    @property
    def customers(self) -> EntitySet[Customer]:
        return self.set(Customer)

    @property
    def projects(self) -> EntitySet[Project]:
        return self.set(Project)

    def set(self, model: type[T]) -> EntitySet[T]:
        return EntitySet(self, model)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    # --- change tracking ---

    def add(self, entity: Base) -> None:
        self._pending.append(("add", entity, None))

    def update(self, entity: Base) -> None:
        # Snapshot now: a rollback expires in-memory edits on persistent objects.
        mapper = inspect(entity).mapper
        pk_keys = {mapper.get_property_by_column(col).key for col in mapper.primary_key}
        values = {
            attr.key: getattr(entity, attr.key)
            for attr in mapper.column_attrs
            if attr.key not in pk_keys
        }
        self._pending.append(("update", entity, values))

    def remove(self, entity: Base) -> None:
        self._pending.append(("remove", entity, None))

    # --- reads ---

    def query_all(self, model: type[T]) -> list[T]:
        def _q(s: Session) -> list[T]:
            return list(s.scalars(select(model).order_by(model.id)).all())  # type: ignore[attr-defined]

        return self._run(_q, what=f"{model.__name__} query")

    def find(self, model: type[T], entity_id: int) -> T | None:
        if entity_id is None or not 1 <= entity_id <= MAX_ID:
            return None
        return self._run(lambda s: s.get(model, entity_id), what=f"{model.__name__} lookup")

    # --- writes ---

    def init_schema(self) -> None:
        """Create missing tables under the same transient-fault retry as saves."""

        def _create(s: Session) -> None:
            init_schema(s.connection())
            s.commit()

        self._run(_create, what="schema init")

    def save(self) -> int:
        """Persist all recorded changes; returns how many were written."""
        if not self._pending:
            return 0
        count = len(self._pending)

        def _commit(s: Session) -> None:
            self._apply(s)
            s.commit()

        self._run(_commit, what="save")
        self._pending.clear()
        logger.debug("Saved %d change(s)", count)
        return count

    def _apply(self, s: Session) -> None:
        for op, entity, values in self._pending:
            if op == "add":
                s.add(entity)
                continue
            target = entity if inspect(entity).session is s else s.merge(entity)
            if op == "update":
                for key, value in (values or {}).items():
                    setattr(target, key, value)
            elif op == "remove":
                s.delete(target)

    def _run(self, fn: Callable[[Session], R], *, what: str) -> R:
        attempt = 0
        while True:
            s = self.session
            try:
                return fn(s)
            except SQLAlchemyError as e:
                s.rollback()
                if is_transient(e) and attempt < self.max_retries:
                    delay = min(self.retry_delay * (2 ** attempt), self.max_retry_delay)
                    attempt += 1
                    logger.warning(
                        "Transient DB error during %s (retry %d/%d in %.2fs): %s",
                        what,
                        attempt,
                        self.max_retries,
                        delay,
                        e,
                    )
                    self._sleep(delay)
                    continue
                logger.error("DB %s failed after %d attempt(s): %s", what, attempt + 1, e)
                raise StorageError(f"Database {what} failed: {e}") from e

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "PersistenceContext":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()
