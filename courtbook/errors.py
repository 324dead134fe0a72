# courtbook/errors.py
from enum import Enum
from typing import Any, Optional


class ErrorType(str, Enum):
    '''
    Structured classification of everything an operation can refuse with.

    VALIDATION_ERROR: malformed or out-of-policy input (past date, bad domain, short code)
    CONFLICT: duplicate email or username
    NOT_FOUND: unknown request or user id
    AUTHENTICATION_ERROR: bad credentials, missing or expired token
    AUTHORIZATION_ERROR: authenticated, but the role is not permitted
    VERIFICATION_ERROR: wrong, expired or missing code, or already verified
    UNVERIFIED_ACCOUNT: valid STUDENT credentials on an unverified account
    DEPENDENCY_ERROR: an outside service (email) failed
    '''
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    VERIFICATION_ERROR = "VERIFICATION_ERROR"
    UNVERIFIED_ACCOUNT = "UNVERIFIED_ACCOUNT"
    DEPENDENCY_ERROR = "DEPENDENCY_ERROR"


class CourtBookError(Exception):
    error_type: ErrorType = ErrorType.VALIDATION_ERROR
    status_code: int = 400

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"message": self.message, "error": self.error_type.value}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(CourtBookError):
    error_type = ErrorType.VALIDATION_ERROR
    status_code = 400


class ConflictError(CourtBookError):
    error_type = ErrorType.CONFLICT
    status_code = 409


class NotFoundError(CourtBookError):
    error_type = ErrorType.NOT_FOUND
    status_code = 404


class AuthenticationError(CourtBookError):
    error_type = ErrorType.AUTHENTICATION_ERROR
    status_code = 401


class AuthorizationError(CourtBookError):
    error_type = ErrorType.AUTHORIZATION_ERROR
    status_code = 403


class VerificationError(CourtBookError):
    error_type = ErrorType.VERIFICATION_ERROR
    status_code = 400

    NOT_FOUND = "not_found"
    ALREADY_VERIFIED = "already_verified"
    MISSING_CODE = "missing_code"
    MISMATCH = "mismatch"
    EXPIRED = "expired"

    def __init__(self, message: str, reason: str, details: Optional[Any] = None):
        super().__init__(message, details)
        self.reason = reason
        if reason == self.NOT_FOUND:
            self.status_code = 404

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["reason"] = self.reason
        return body


class UnverifiedAccountError(CourtBookError):
    error_type = ErrorType.UNVERIFIED_ACCOUNT
    status_code = 403


class DependencyError(CourtBookError):
    error_type = ErrorType.DEPENDENCY_ERROR
    status_code = 500
