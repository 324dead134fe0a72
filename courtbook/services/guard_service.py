# courtbook/services/guard_service.py
from sqlalchemy.orm import Session

from courtbook.db.enums import AuditEntityType, Role
from courtbook.errors import ValidationError
from courtbook.logger import get_logger
from courtbook.models.user import User
from courtbook.schemas.auth_schemas import CreateGuardInput
from courtbook.services.audit_log_service import AuditLogService
from courtbook.services.user_service import UserService

logger = get_logger(__name__)


def placeholder_guard_email(username: str) -> str:
    return f"vigia.{username}@ifma.local"


class GuardService:
    """
    Provisioning of GUARD accounts. Only reachable through the ADMIN gate.
    """

    def __init__(self, db: Session, user_service: UserService, audit_log_service: AuditLogService):
        self.db = db
        self.user_service = user_service
        self.audit_log_service = audit_log_service

    def create_guard(self, data: CreateGuardInput, *, operator_id: str) -> User:
        '''
        Create a verified GUARD that logs in with its email or its username.
        When only a username is given a placeholder email is stored.

        :param operator_id: id of the admin creating the guard
        :raises ValidationError: neither email nor username given
        :raises ConflictError: email or username already taken
        '''
        if not data.email and not data.username:
            raise ValidationError(
                "Email ou username é obrigatório",
                details=[{"field": "email", "message": "Email ou username é obrigatório"}],
            )

        email = str(data.email) if data.email else placeholder_guard_email(data.username)

        user = self.user_service.create_user(
            name=data.name,
            email=email,
            username=data.username or None,
            password=data.password,
            role=Role.GUARD,
            whatsapp=data.whatsapp or None,
            email_verified=True,
        )
        self.audit_log_service.record_create(
            entity_type=AuditEntityType.User,
            entity_id=user.id,
            operator_id=operator_id,
        )
        self.db.commit()

        logger.info("Guard created by %s: %s", operator_id, user.username or user.email)
        return user
