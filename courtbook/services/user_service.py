# courtbook/services/user_service.py
from datetime import date, datetime
from uuid import uuid4
from typing import Callable, Optional
import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from courtbook.db.enums import Role
from courtbook.errors import ConflictError
from courtbook.models.user import User


class UserService:
    """
    Credential store.
    Provides:
    - user creation (uniqueness enforced by the table, translated to ConflictError)
    - lookup by id / email / username
    - password hashing and checking
    - password reset

    No token or role logic here.
    """

    def __init__(self, db: Session, clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self._now = clock or datetime.now

    # ======================================================
    # 🔐 Internal helpers
    # ======================================================

    def _hash_password(self, password: str) -> str:
        '''Hash a password using bcrypt'''
        return bcrypt.hashpw(
            password.encode("utf-8"),
            bcrypt.gensalt(),
        ).decode("utf-8")

    def _verify_password(self, password: str, password_hash: str) -> bool:
        '''verify a password against its hash'''
        return bcrypt.checkpw(
            password.encode("utf-8"),
            password_hash.encode("utf-8"),
        )

    # ======================================================
    # 👤 User CRUD
    # ======================================================

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Role,
        username: Optional[str] = None,
        whatsapp: Optional[str] = None,
        birth_date: Optional[date] = None,
        email_verified: bool = False,
        verification_code: Optional[str] = None,
        verification_expires: Optional[datetime] = None,
    ) -> User:
        """
        Stage a new user in the session (flushed, not committed).

        :param email: unique login email
        :type email: str
        :param password: plaintext password, stored only as a bcrypt hash
        :type password: str
        :param role: STUDENT | GUARD | ADMIN
        :type role: Role
        :param username: unique login username, guards only
        :type username: Optional[str]
        :raises ConflictError: email or username already taken
        """
        if (verification_code is None) != (verification_expires is None):
            raise ValueError("verification_code and verification_expires must be set together")

        # 1️⃣ uniqueness pre-check, for a readable message
        if self.get_user_by_email(email):
            raise ConflictError("Email já cadastrado")
        if username and self.get_user_by_username(username):
            raise ConflictError("Username já cadastrado")

        # 2️⃣ stage the user
        user = User(
            id=str(uuid4()),
            name=name,
            email=email,
            username=username,
            password_hash=self._hash_password(password),
            role=role,
            whatsapp=whatsapp,
            birth_date=birth_date,
            email_verified=email_verified,
            verification_code=verification_code,
            verification_expires=verification_expires,
            created_at=self._now(),
        )

        # 3️⃣ the unique constraints are the real guard against concurrent registrations
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Email ou username já cadastrado") from e

        return user

    def authenticate(self, *, identifier: str, password: str) -> Optional[User]:
        """
        Resolve ``identifier`` as an email first, then as a username,
        and check the password. Returns None on any mismatch so callers
        cannot tell which part was wrong.
        """
        user = self.get_user_by_email(identifier) or self.get_user_by_username(identifier)
        if not user:
            return None
        if not self._verify_password(password, user.password_hash):
            return None
        return user

    def get_user_by_email(self, email: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.email == email)
            .first()
        )

    def get_user_by_username(self, username: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.username == username)
            .first()
        )

    # ======================================================
    # 🔁 Account maintenance
    # ======================================================

    def reset_password(self, *, user: User, new_password: str) -> None:
        user.password_hash = self._hash_password(new_password)
