import logging
import smtplib
from datetime import datetime
from logging.handlers import RotatingFileHandler

import pytest

from courtbook.config import Settings
from courtbook.db import session as db_session
from courtbook.db.auto_init import auto_init, missing_tables
from courtbook.db.base import Base
from courtbook.db.init_db import init_db
from courtbook.db.enums import Role
from courtbook.errors import DependencyError
from courtbook.logger import configure_logging, get_logger
from courtbook.models.audit_log import AuditLog
from courtbook.services import email_service
from courtbook.services.email_service import EmailSender
from courtbook.services.verification import (
    generate_verification_code,
    is_expired,
    issue_verification_code,
)


def test_codes_are_four_digits():
    codes = {generate_verification_code() for _ in range(200)}

    assert all(len(code) == 4 and 1000 <= int(code) <= 9999 for code in codes)


def test_issued_code_expires_after_ttl():
    now = datetime(2025, 6, 1, 10, 0)
    _, expires = issue_verification_code(now, 10)

    assert expires == datetime(2025, 6, 1, 10, 10)
    assert not is_expired(expires, datetime(2025, 6, 1, 10, 10))
    assert is_expired(expires, datetime(2025, 6, 1, 10, 10, 1))
    assert is_expired(None, now)


def test_verification_message_contains_code(settings):
    msg = EmailSender(settings).build_verification_message("a@acad.ifma.edu.br", "4321")

    assert msg["To"] == "a@acad.ifma.edu.br"
    assert "4321" in msg.get_content()
    assert "10 minutos" in msg.get_content()


def test_smtp_failure_becomes_dependency_error(settings, monkeypatch):
    class BrokenSMTP:
        def __init__(self, *args, **kwargs):
            raise smtplib.SMTPConnectError(421, "unavailable")

    monkeypatch.setattr(email_service.smtplib, "SMTP", BrokenSMTP)

    with pytest.raises(DependencyError):
        EmailSender(settings).send_verification_email("a@acad.ifma.edu.br", "4321")


def test_settings_require_database_url_and_secret():
    with pytest.raises(RuntimeError) as err:
        Settings().validate_required()

    assert "DATABASE_URL" in str(err.value)
    assert "JWT_SECRET" in str(err.value)
    Settings(database_url="sqlite://", jwt_secret="x").validate_required()


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///x.db")
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("WHATSAPP_COUNTRY_CODE", "351")
    monkeypatch.setenv("VERIFICATION_TTL_MINUTES", "15")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("LOG_DIR", raising=False)

    settings = Settings.from_env(str(tmp_path / "missing.env"))

    assert settings.database_url == "sqlite:///x.db"
    assert settings.whatsapp_country_code == "351"
    assert settings.verification_ttl_minutes == 15
    assert settings.jwt_expires_days == 7
    assert settings.log_level == "debug"
    assert settings.log_dir == "logs"


def test_create_admin_script_creates_then_promotes(db, user_service, make_user):
    from create_admin import create_or_update_admin

    admin = create_or_update_admin(db, name="Coord", email="coord@ifma.edu.br", password="secret123")
    assert admin.role == Role.ADMIN
    assert admin.email_verified is True

    student = make_user(email="promote@acad.ifma.edu.br", email_verified=False)
    promoted = create_or_update_admin(db, name="x", email="promote@acad.ifma.edu.br", password="newpass1")

    assert promoted.id == student.id
    assert promoted.role == Role.ADMIN
    assert promoted.email_verified is True
    assert user_service.authenticate(identifier="promote@acad.ifma.edu.br", password="newpass1") is not None


def test_configure_logging_writes_to_log_dir(tmp_path):
    base = configure_logging(str(tmp_path), "debug")
    try:
        get_logger("courtbook.tests.support").debug("schema checked")
        for handler in base.handlers:
            handler.flush()

        assert base.level == logging.DEBUG
        assert "schema checked" in (tmp_path / "courtbook.log").read_text(encoding="utf-8")
    finally:
        for handler in [h for h in base.handlers if isinstance(h, RotatingFileHandler)]:
            base.removeHandler(handler)
            handler.close()
        base.setLevel(logging.INFO)


def test_get_logger_nests_under_package_logger():
    assert get_logger("create_admin").name == "courtbook.create_admin"
    assert get_logger("courtbook.run").name == "courtbook.run"


def test_auto_init_recreates_missing_audit_table(settings):
    db_session.configure(settings.database_url)
    init_db()
    engine = db_session.get_engine()
    AuditLog.__table__.drop(bind=engine)
    try:
        assert missing_tables() == ["audit_logs"]

        auto_init()

        assert missing_tables() == []
    finally:
        Base.metadata.drop_all(bind=engine)
