"""
Engine and session handling for the SQLite store.

One engine and one session factory live at module level. They are built
lazily from settings, or bound to an explicit file by init_db_with_path,
and dropped by reset_database so tests and AppContext can
point the app at another database.
"""

from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from investsim.config.settings import get_settings

Base = declarative_base()

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _configure(database_url: str) -> sessionmaker:
    """Bind the module engine and session factory to ``database_url``."""
    global _engine, _SessionLocal

    # FastAPI runs sync endpoints on worker threads
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    _engine = create_engine(database_url, connect_args=connect_args, echo=False)
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _SessionLocal


def _create_tables(engine: Engine) -> None:
    from investsim.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_session_factory() -> sessionmaker:
    if _SessionLocal is None:
        return _configure(get_settings().get_database_url())
    return _SessionLocal


def get_engine() -> Engine:
    get_session_factory()
    return _engine


def get_session() -> Session:
    """Open a session the caller must close."""
    return get_session_factory()()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request."""
    db = get_session()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create missing tables in the configured database."""
    _create_tables(get_engine())


def init_db_with_path(db_path: Path) -> None:
    """Point the app at the SQLite file ``db_path`` and create its tables."""
    reset_database()
    _configure(f"sqlite:///{db_path}")
    _create_tables(_engine)


def reset_database() -> None:
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
