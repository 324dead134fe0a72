# courtbook/services/token_service.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from courtbook.config import Settings
from courtbook.db.enums import Role
from courtbook.errors import AuthenticationError
from courtbook.models.user import User

JWT_ALGORITHM = "HS256"


@dataclass(frozen=True)
class Identity:
    """Claims carried by a verified token."""
    id: str
    email: str
    role: Role


class TokenService:
    """Signed, time-boxed bearer tokens carrying {id, email, role}."""

    def __init__(self, settings: Settings, clock: Optional[Callable[[], datetime]] = None):
        self.secret = settings.jwt_secret
        self.expires_in = timedelta(days=settings.jwt_expires_days)
        self._now = clock or (lambda: datetime.now(timezone.utc))

    def generate_token(self, user: User) -> str:
        now = self._now()
        payload = {
            "id": user.id,
            "email": user.email,
            "role": user.role.value,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[JWT_ALGORITHM])
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Token inválido ou expirado") from e

        try:
            return Identity(
                id=payload["id"],
                email=payload["email"],
                role=Role(payload["role"]),
            )
        except (KeyError, ValueError) as e:
            raise AuthenticationError("Token inválido ou expirado") from e
