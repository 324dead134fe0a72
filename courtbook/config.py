# courtbook/config.py
"""
Process configuration.

Built once at start (``Settings.from_env()``) and handed to ``create_app`` and
to every service constructor. Nothing else in the package reads ``os.environ``;
the entry points pass log_dir and log_level to courtbook.logger.configure_logging().
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    database_url: str = ""
    jwt_secret: str = ""
    jwt_expires_days: int = 7

    # out-of-band secret guarding admin creation; empty disables it
    setup_key: str = ""

    email_host: str = "smtp.gmail.com"
    email_port: int = 587
    email_user: str = ""
    email_pass: str = ""

    student_email_domain: str = "@acad.ifma.edu.br"
    whatsapp_country_code: str = "55"
    verification_ttl_minutes: int = 10

    host: str = "0.0.0.0"
    port: int = 3001

    log_dir: str = "logs"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        load_dotenv(dotenv_path)
        return cls(
            database_url=os.getenv("DATABASE_URL", ""),
            jwt_secret=os.getenv("JWT_SECRET", ""),
            jwt_expires_days=int(os.getenv("JWT_EXPIRES_DAYS", "7")),
            setup_key=os.getenv("SETUP_KEY", ""),
            email_host=os.getenv("EMAIL_HOST", "smtp.gmail.com"),
            email_port=int(os.getenv("EMAIL_PORT", "587")),
            email_user=os.getenv("EMAIL_USER", ""),
            email_pass=os.getenv("EMAIL_PASS", ""),
            student_email_domain=os.getenv("STUDENT_EMAIL_DOMAIN", "@acad.ifma.edu.br"),
            whatsapp_country_code=os.getenv("WHATSAPP_COUNTRY_CODE", "55"),
            verification_ttl_minutes=int(os.getenv("VERIFICATION_TTL_MINUTES", "10")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3001")),
            log_dir=os.getenv("LOG_DIR", "logs"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def validate_required(self) -> None:
        missing = [
            key
            for key, value in (
                ("DATABASE_URL", self.database_url),
                ("JWT_SECRET", self.jwt_secret),
            )
            if not value
        ]
        if missing:
            raise RuntimeError(
                f"Required environment variables not set: {', '.join(missing)}"
            )
