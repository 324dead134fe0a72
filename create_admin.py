# create_admin.py
"""
Create or update an ADMIN account.
For manual maintenance only:

    python create_admin.py --name "Coordenação" --email coord@ifma.edu.br --password secret123

An existing account with that email gets the new password, is forced to
ADMIN and marked verified.
"""
import argparse
import sys

from courtbook.config import Settings
from courtbook.db import session as db_session
from courtbook.db.auto_init import auto_init
from courtbook.db.enums import AuditEntityType, Role
from courtbook.logger import configure_logging, get_logger
from courtbook.services.audit_log_service import AuditLogService
from courtbook.services.user_service import UserService

logger = get_logger("courtbook.create_admin")


def create_or_update_admin(db, *, name: str, email: str, password: str):
    user_service = UserService(db)
    audit_log_service = AuditLogService(db)

    existing = user_service.get_user_by_email(email)
    if existing:
        before_role = existing.role
        user_service.reset_password(user=existing, new_password=password)
        existing.role = Role.ADMIN
        existing.email_verified = True
        existing.verification_code = None
        existing.verification_expires = None
        audit_log_service.record_system_update(
            entity_type=AuditEntityType.User,
            entity_id=existing.id,
            changed_attribute="role",
            before_value=before_role,
            after_value=Role.ADMIN,
        )
        db.commit()
        logger.info("Admin updated: %s", email)
        return existing

    user = user_service.create_user(
        name=name,
        email=email,
        password=password,
        role=Role.ADMIN,
        email_verified=True,
    )
    audit_log_service.record_create(
        entity_type=AuditEntityType.User,
        entity_id=user.id,
        operator_id="SYSTEM",
    )
    db.commit()
    logger.info("Admin created: %s (%s)", email, user.id)
    return user


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create or update an ADMIN account")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args(argv)

    if len(args.password) < 6:
        parser.error("password must have at least 6 characters")

    settings = Settings.from_env()
    configure_logging(settings.log_dir, settings.log_level)
    if not settings.database_url:
        logger.error("DATABASE_URL not set")
        sys.exit(1)

    db_session.configure(settings.database_url)
    auto_init()

    db = db_session.get_session()
    try:
        create_or_update_admin(db, name=args.name, email=args.email, password=args.password)
    except Exception:
        db.rollback()
        logger.exception("Failed to create/update admin")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
