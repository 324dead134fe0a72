# courtbook/services/auth_service.py
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from courtbook.config import Settings
from courtbook.db.enums import AuditEntityType, Role
from courtbook.errors import (
    AuthenticationError,
    AuthorizationError,
    DependencyError,
    UnverifiedAccountError,
    ValidationError,
    VerificationError,
)
from courtbook.logger import get_logger
from courtbook.schemas.auth_schemas import (
    CreateAdminInput,
    LoginInput,
    RegisterStudentInput,
)
from courtbook.schemas.dto import PublicUserDTO
from courtbook.services.audit_log_service import AuditLogService
from courtbook.services.email_service import EmailSender
from courtbook.services.token_service import TokenService
from courtbook.services.user_service import UserService
from courtbook.services.verification import is_expired, issue_verification_code

logger = get_logger(__name__)


class AuthService:
    """
    Registration, email verification, login and admin bootstrap.

    Registration is two-phase: the student is staged in the session, the
    verification email is sent, and only then is the session committed.
    If the email fails the session is rolled back, so the tentative user is
    never visible to anyone else.
    """

    def __init__(
        self,
        db: Session,
        settings: Settings,
        user_service: UserService,
        token_service: TokenService,
        email_sender: EmailSender,
        audit_log_service: AuditLogService,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.settings = settings
        self.user_service = user_service
        self.token_service = token_service
        self.email_sender = email_sender
        self.audit_log_service = audit_log_service
        self._now = clock or datetime.now

    def register_student(self, data: RegisterStudentInput) -> dict:
        '''
        Create an unverified STUDENT and email them a 4-digit code.
        The student is not logged in by this call.

        :raises ValidationError: email outside the institutional domain
        :raises ConflictError: email already registered
        :raises DependencyError: the email could not be sent (nothing is kept)
        '''
        email = str(data.email)
        domain = self.settings.student_email_domain
        if not email.lower().endswith(domain.lower()):
            raise ValidationError(
                f"Email deve ser do domínio {domain}",
                details=[{"field": "email", "message": f"Email deve ser do domínio {domain}"}],
            )

        code, expires = issue_verification_code(
            self._now(), self.settings.verification_ttl_minutes
        )

        # 1️⃣ tentative create
        user = self.user_service.create_user(
            name=data.name,
            email=email,
            password=data.password,
            role=Role.STUDENT,
            whatsapp=data.whatsapp,
            birth_date=data.birthDate,
            email_verified=False,
            verification_code=code,
            verification_expires=expires,
        )
        self.audit_log_service.record_create(
            entity_type=AuditEntityType.User,
            entity_id=user.id,
            operator_id=user.id,
        )

        # 2️⃣ side effect
        try:
            self.email_sender.send_verification_email(email, code)
        except DependencyError:
            self.db.rollback()
            logger.warning("Registration of %s rolled back: verification email not sent", email)
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("Registration of %s rolled back: verification email not sent", email)
            raise DependencyError("Erro ao enviar email de verificação") from e

        # 3️⃣ commit
        self.db.commit()
        logger.info("Student registered, pending verification: %s", email)
        return {"message": "Cadastro iniciado. Verifique seu e-mail."}

    def login(self, data: LoginInput) -> dict:
        user = self.user_service.authenticate(identifier=data.email, password=data.password)
        if not user:
            logger.info("Failed login for %s", data.email)
            raise AuthenticationError("Email/usuário ou senha inválidos")

        # ADMIN and GUARD never need to verify
        if user.role == Role.STUDENT and not user.email_verified:
            logger.info("Login refused, email not verified: %s", user.email)
            raise UnverifiedAccountError("Verifique seu e-mail antes de entrar.")

        logger.info("User logged in: %s (%s)", user.id, user.role.value)
        return {
            "token": self.token_service.generate_token(user),
            "user": PublicUserDTO.from_orm_model(user).model_dump(mode="json"),
        }

    def verify_email(self, email: str, code: str) -> dict:
        user = self.user_service.get_user_by_email(email)
        if not user:
            raise VerificationError("Usuário não encontrado", VerificationError.NOT_FOUND)
        if user.email_verified:
            raise VerificationError("Email já foi verificado", VerificationError.ALREADY_VERIFIED)
        if not user.verification_code:
            raise VerificationError(
                "Código de verificação não encontrado", VerificationError.MISSING_CODE
            )
        if user.verification_code != code:
            raise VerificationError("Código de verificação inválido", VerificationError.MISMATCH)
        # an expired code is left in place, not consumed
        if is_expired(user.verification_expires, self._now()):
            raise VerificationError("Código de verificação expirado", VerificationError.EXPIRED)

        user.email_verified = True
        user.verification_code = None
        user.verification_expires = None
        self.audit_log_service.record_system_update(
            entity_type=AuditEntityType.User,
            entity_id=user.id,
            changed_attribute="email_verified",
            before_value=False,
            after_value=True,
        )
        self.db.commit()

        logger.info("Email verified: %s", email)
        return {"message": "E-mail verificado com sucesso."}

    def create_admin(self, data: CreateAdminInput) -> dict:
        '''
        Privileged registration guarded by the configured setup key.
        The admin is verified immediately and logged in.
        '''
        if not self.settings.setup_key or data.setupKey != self.settings.setup_key:
            logger.warning("Admin creation refused: bad setup key")
            raise AuthorizationError("Setup key inválida")

        user = self.user_service.create_user(
            name=data.name,
            email=str(data.email),
            password=data.password,
            role=Role.ADMIN,
            email_verified=True,
        )
        self.audit_log_service.record_create(
            entity_type=AuditEntityType.User,
            entity_id=user.id,
            operator_id="SETUP_KEY",
        )
        self.db.commit()

        logger.info("Admin created: %s", user.email)
        return {
            "token": self.token_service.generate_token(user),
            "user": PublicUserDTO.from_orm_model(user).model_dump(mode="json"),
        }
