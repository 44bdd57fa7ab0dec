"""SQLite engine for the local documents file.

The engine follows ``Settings.database_path``: when the configured path
changes (tests point every case at a fresh file) the old engine is disposed
and a new one opened. The ``documents`` table is created on first use.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from fridgeraider.config import get_settings
from fridgeraider.db.models import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_engine_path: Path | None = None
_session_factory: sessionmaker[Session] | None = None
_schema_ready = False


def get_engine() -> Engine:
    """Return the engine bound to the configured documents file."""
    global _engine, _engine_path, _session_factory, _schema_ready

    db_path = get_settings().database_path
    if _engine is not None and _engine_path == db_path:
        return _engine

    if _engine is not None:
        logger.info("Documents file changed %s -> %s", _engine_path, db_path)
        _engine.dispose()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    _engine = create_engine(f"sqlite:///{db_path}", echo=False)
    _engine_path = db_path
    _session_factory = sessionmaker(bind=_engine, autoflush=False, expire_on_commit=False)
    _schema_ready = False
    return _engine


def _ensure_schema(engine: Engine) -> None:
    global _schema_ready

    if _schema_ready:
        return
    Base.metadata.create_all(engine, checkfirst=True)
    _schema_ready = True
    logger.debug("Documents table ready at %s", _engine_path)


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Yield a session on the documents file; commit on success, roll back on error."""

    engine = get_engine()
    _ensure_schema(engine)
    assert _session_factory is not None
    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_repository_state() -> None:
    """Drop the cached engine so the next call reopens the configured file."""

    global _engine, _engine_path, _session_factory, _schema_ready
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _engine_path = None
    _session_factory = None
    _schema_ready = False


__all__ = ["get_engine", "session_scope", "reset_repository_state"]
