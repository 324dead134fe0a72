# courtbook/services/email_service.py
import smtplib
from email.message import EmailMessage

from courtbook.config import Settings
from courtbook.errors import DependencyError
from courtbook.logger import get_logger

logger = get_logger(__name__)


class EmailSender:
    """SMTP transport for the one email the system sends: the verification code."""

    def __init__(self, settings: Settings, timeout: int = 10):
        self.host = settings.email_host
        self.port = settings.email_port
        self.user = settings.email_user
        self.password = settings.email_pass
        self.ttl_minutes = settings.verification_ttl_minutes
        self.timeout = timeout

    def build_verification_message(self, to_email: str, code: str) -> EmailMessage:
        msg = EmailMessage()
        msg.set_content(
            f"Seu código de verificação é: {code}. "
            f"Ele expira em {self.ttl_minutes} minutos."
        )
        msg["Subject"] = "Código de Verificação - IFMA Quadra"
        msg["From"] = self.user
        msg["To"] = to_email
        return msg

    def send_verification_email(self, to_email: str, code: str) -> None:
        msg = self.build_verification_message(to_email, code)
        try:
            if self.port == 465:
                with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as s:
                    s.login(self.user, self.password)
                    s.send_message(msg)
            else:
                with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as s:
                    s.starttls()
                    s.login(self.user, self.password)
                    s.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send verification email to %s: %s", to_email, e)
            raise DependencyError("Erro ao enviar email de verificação") from e
        logger.info("Verification email sent to %s", to_email)
