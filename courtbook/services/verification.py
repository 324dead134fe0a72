# courtbook/services/verification.py
"""Short-lived numeric codes proving control of an email address."""
import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

CODE_MIN = 1000
CODE_MAX = 9999


def generate_verification_code() -> str:
    """Random 4-digit code in [1000, 9999]."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def issue_verification_code(now: datetime, ttl_minutes: int) -> Tuple[str, datetime]:
    return generate_verification_code(), now + timedelta(minutes=ttl_minutes)


def is_expired(expires_at: Optional[datetime], now: datetime) -> bool:
    # a missing expiry counts as expired
    return expires_at is None or expires_at < now
