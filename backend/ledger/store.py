"""Shared state store with single-writer serialization."""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .database import Base, build_engine, is_memory_sqlite
from .domain_errors import DomainError
from .models import LedgerSequence

logger = logging.getLogger(__name__)


def next_sequence_value(db: Session, name: str) -> int:
    """Advance the named counter and return the new value (first value is 1)."""
    sequence = db.get(LedgerSequence, name)
    if sequence is None:
        sequence = LedgerSequence(name=name, last_value=0)
        db.add(sequence)
    sequence.last_value = (sequence.last_value or 0) + 1
    db.flush()
    return sequence.last_value


class LedgerStore:
    """Owns the session factory and admits one mutation at a time.

    * ``write()`` holds the writer lock for the whole transaction and commits
      on success; any exception rolls the transaction back.
    * ``read()`` joins the session already active on this thread, so lookups
      made while a write is in progress observe the same snapshot.
    """

    def __init__(self, engine: Engine, *, serialize_reads: bool | None = None):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False, future=True)
        self._write_lock = threading.RLock()
        self._local = threading.local()
        if serialize_reads is None:
            serialize_reads = is_memory_sqlite(engine.url.render_as_string(hide_password=False))
        self._serialize_reads = serialize_reads

    @classmethod
    def from_url(cls, url: str, *, echo: bool = False) -> "LedgerStore":
        engine = build_engine(url, echo=echo)
        Base.metadata.create_all(engine)
        logger.info("store.ready backend=%s", engine.url.get_backend_name())
        return cls(engine)

    def _active_session(self) -> Session | None:
        return getattr(self._local, "session", None)

    @contextmanager
    def read(self) -> Iterator[Session]:
        active = self._active_session()
        if active is not None:
            yield active
            return

        if self._serialize_reads:
            with self._write_lock, self._session_factory() as session:
                yield session
        else:
            with self._session_factory() as session:
                yield session

    @contextmanager
    def write(self) -> Iterator[Session]:
        with self._write_lock:
            active = self._active_session()
            if active is not None:
                # Nested writes join the outer transaction.
                yield active
                return

            session = self._session_factory()
            self._local.session = session
            try:
                yield session
                session.commit()
            except DomainError:
                session.rollback()
                raise
            except Exception:
                logger.exception("store.write_failed")
                session.rollback()
                raise
            finally:
                self._local.session = None
                session.close()
