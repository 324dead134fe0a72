from courtbook.db.base import Base
from courtbook.db.session import get_engine

# register every table on Base.metadata
from courtbook.models.user import User  # noqa: F401
from courtbook.models.court_request import CourtRequest  # noqa: F401
from courtbook.models.audit_log import AuditLog  # noqa: F401


def init_db():
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
