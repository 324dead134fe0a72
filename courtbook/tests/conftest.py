from datetime import datetime, timedelta

import pytest

from courtbook.config import Settings
from courtbook.db import session as db_session
from courtbook.db.base import Base
from courtbook.db.enums import Role
from courtbook.db.init_db import init_db
from courtbook.errors import DependencyError
from courtbook.services.audit_log_service import AuditLogService
from courtbook.services.auth_service import AuthService
from courtbook.services.court_request_service import CourtRequestService
from courtbook.services.guard_service import GuardService
from courtbook.services.notification_service import NotificationService
from courtbook.services.request_query_service import RequestQueryService
from courtbook.services.token_service import TokenService
from courtbook.services.user_service import UserService


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeEmailSender:
    def __init__(self):
        self.sent = []
        self.fail = False

    def send_verification_email(self, to_email: str, code: str) -> None:
        if self.fail:
            raise DependencyError("Erro ao enviar email de verificação")
        self.sent.append((to_email, code))

    def last_code_for(self, email: str) -> str:
        return [code for to, code in self.sent if to == email][-1]


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(datetime(2025, 6, 1, 10, 0, 0))


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        jwt_secret="test-secret",
        setup_key="setup-123",
    )


@pytest.fixture()
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture()
def db(settings):
    db_session.configure(settings.database_url)
    init_db()
    session = db_session.get_session()
    yield session
    session.close()
    Base.metadata.drop_all(bind=db_session.get_engine())


@pytest.fixture()
def user_service(db, clock) -> UserService:
    return UserService(db, clock=clock)


@pytest.fixture()
def audit_log_service(db, clock) -> AuditLogService:
    return AuditLogService(db, clock=clock)


@pytest.fixture()
def token_service(settings) -> TokenService:
    return TokenService(settings)


@pytest.fixture()
def auth_service(db, settings, user_service, token_service, email_sender, audit_log_service, clock) -> AuthService:
    return AuthService(
        db,
        settings,
        user_service=user_service,
        token_service=token_service,
        email_sender=email_sender,
        audit_log_service=audit_log_service,
        clock=clock,
    )


@pytest.fixture()
def guard_service(db, user_service, audit_log_service) -> GuardService:
    return GuardService(db, user_service, audit_log_service)


@pytest.fixture()
def court_request_service(db, audit_log_service, clock) -> CourtRequestService:
    return CourtRequestService(db, audit_log_service, NotificationService("55"), clock=clock)


@pytest.fixture()
def query_service(db) -> RequestQueryService:
    return RequestQueryService(db)


@pytest.fixture()
def make_user(db, user_service):
    """Commit a user directly, bypassing registration."""
    counter = {"n": 0}

    def _make(role=Role.STUDENT, *, name="Ana Souza", email=None, whatsapp=None,
              password="secret123", username=None, email_verified=True):
        counter["n"] += 1
        user = user_service.create_user(
            name=name,
            email=email or f"user{counter['n']}@acad.ifma.edu.br",
            password=password,
            role=role,
            username=username,
            whatsapp=whatsapp,
            email_verified=email_verified,
        )
        db.commit()
        return user

    return _make
