# courtbook/routes/context.py
"""
Per-request wiring shared by all blueprints: one DB session per request,
services built on it from the app's settings, and the role decorator.
"""
from functools import wraps

from flask import current_app, g, request

from courtbook.db.session import get_session
from courtbook.services.audit_log_service import AuditLogService
from courtbook.services.auth_service import AuthService
from courtbook.services.authorization import AuthorizationGate, Operation
from courtbook.services.court_request_service import CourtRequestService
from courtbook.services.guard_service import GuardService
from courtbook.services.notification_service import NotificationService
from courtbook.services.request_query_service import RequestQueryService
from courtbook.services.token_service import TokenService
from courtbook.services.user_service import UserService


def settings():
    return current_app.config["COURTBOOK_SETTINGS"]


def clock():
    return current_app.config.get("COURTBOOK_CLOCK")


def db_session():
    if "db" not in g:
        g.db = get_session()
    return g.db


def close_db_session(exc=None):
    db = g.pop("db", None)
    if db is not None:
        db.close()


def token_service() -> TokenService:
    return TokenService(settings())


def authorization_gate() -> AuthorizationGate:
    return AuthorizationGate(token_service())


def user_service() -> UserService:
    return UserService(db_session(), clock=clock())


def audit_log_service() -> AuditLogService:
    return AuditLogService(db_session(), clock=clock())


def auth_service() -> AuthService:
    return AuthService(
        db_session(),
        settings(),
        user_service=user_service(),
        token_service=token_service(),
        email_sender=current_app.extensions["courtbook.email_sender"],
        audit_log_service=audit_log_service(),
        clock=clock(),
    )


def guard_service() -> GuardService:
    return GuardService(db_session(), user_service(), audit_log_service())


def court_request_service() -> CourtRequestService:
    return CourtRequestService(
        db_session(),
        audit_log_service(),
        NotificationService(settings().whatsapp_country_code),
        clock=clock(),
    )


def request_query_service() -> RequestQueryService:
    return RequestQueryService(db_session())


def require_operation(operation: Operation):
    """Authenticate the bearer token, then check the role for ``operation``."""
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.identity = authorization_gate().check(
                request.headers.get("Authorization"), operation
            )
            return view(*args, **kwargs)
        return wrapper
    return decorator
