# courtbook/models/user.py
from sqlalchemy import (
    String,
    Boolean,
    Date,
    DateTime,
    Enum,
    func,
)
from courtbook.db.base import Base
from courtbook.db.enums import Role
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import date, datetime
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from courtbook.models.court_request import CourtRequest


class User(Base):
    """
    Anyone who can log in: students, guards and admins.

    GUARD accounts may log in by username; every account still carries an
    email (a placeholder one for username-only guards).
    ADMIN and GUARD are created verified. verification_code and
    verification_expires are set together and cleared together.
    """

    __tablename__ = "users"

    id :Mapped[str] = mapped_column(String(36), primary_key=True, comment="User UUID")

    name :Mapped[str] = mapped_column(String(150), nullable=False, comment="Display name")

    email :Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        comment="Login email; placeholder for username-only guards",
    )

    username :Mapped[Optional[str]] = mapped_column(
        String(100),
        unique=True,
        nullable=True,
        comment="Login username, GUARD only",
    )

    password_hash :Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the password",
    )

    role :Mapped[Role] = mapped_column(
        Enum(Role, name="user_role"),
        nullable=False,
        default=Role.STUDENT,
        comment="STUDENT | GUARD | ADMIN",
    )

    whatsapp :Mapped[Optional[str]] = mapped_column(String(50), nullable=True, comment="WhatsApp contact as typed by the user")
    birth_date :Mapped[Optional[date]] = mapped_column(Date, nullable=True, comment="Birth date, STUDENT only")

    email_verified :Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, comment="Whether the email has been verified")
    verification_code :Mapped[Optional[str]] = mapped_column(String(4), nullable=True, comment="Pending 4-digit email code")
    verification_expires :Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, comment="Expiry of the pending code")

    created_at :Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Account creation timestamp",
    )

    court_requests :Mapped[List["CourtRequest"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User id={self.id} role={self.role.value} email={self.email}>"
