"""
Database bootstrap check, run once at process start.
Creates the schema when any mapped table is missing.
"""
from sqlalchemy import inspect

from courtbook.db.base import Base
from courtbook.db.init_db import init_db
from courtbook.db.session import get_engine
from courtbook.logger import get_logger

logger = get_logger(__name__)


def missing_tables() -> list:
    inspector = inspect(get_engine())
    existing = set(inspector.get_table_names())
    return sorted(name for name in Base.metadata.tables if name not in existing)


def auto_init():
    logger.info("Checking database schema...")

    missing = missing_tables()
    if not missing:
        logger.info("Database tables already exist")
        return

    logger.info("Database tables missing (%s), creating...", ", ".join(missing))
    try:
        init_db()
    except Exception:
        logger.exception("Failed to create database tables")
        raise
    logger.info("Database tables created")
