# courtbook/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from courtbook.logger import get_logger

logger = get_logger(__name__)

_engine = None
_SessionLocal = None


def build_engine(db_url: str) -> Engine:
    if not db_url:
        raise RuntimeError("DATABASE_URL not set")

    kwargs = {}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # in-memory databases vanish per connection unless pinned to one
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(db_url, **kwargs)


def configure(db_url: str) -> Engine:
    """Bind the process-wide engine and session factory to ``db_url``."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = build_engine(db_url)
    _SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=_engine,
    )
    logger.info("Database configured: %s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Database not configured; call courtbook.db.session.configure() first")
    return _engine


def get_session() -> Session:
    if _SessionLocal is None:
        raise RuntimeError("Database not configured; call courtbook.db.session.configure() first")
    return _SessionLocal()
