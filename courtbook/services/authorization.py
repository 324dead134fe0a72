# courtbook/services/authorization.py
"""
Single place where roles are checked.

Every protected operation is listed in ``OPERATION_ROLES``; routes and
services ask the gate instead of comparing role strings themselves.
Authentication always comes first: no token, no role check.
"""
import enum
from typing import AbstractSet, Optional

from courtbook.db.enums import Role
from courtbook.errors import AuthenticationError, AuthorizationError
from courtbook.services.token_service import Identity, TokenService


class Operation(enum.Enum):
    CREATE_REQUEST = "create_request"
    LIST_OWN_REQUESTS = "list_own_requests"
    LIST_ALL_REQUESTS = "list_all_requests"
    TRANSITION_STATUS = "transition_status"
    CREATE_GUARD = "create_guard"
    LIST_APPROVED_FOR_DATE = "list_approved_for_date"


STUDENT_ONLY = frozenset({Role.STUDENT})
ADMIN_ONLY = frozenset({Role.ADMIN})
GUARD_ONLY = frozenset({Role.GUARD})

OPERATION_ROLES = {
    Operation.CREATE_REQUEST: STUDENT_ONLY,
    Operation.LIST_OWN_REQUESTS: STUDENT_ONLY,
    Operation.LIST_ALL_REQUESTS: ADMIN_ONLY,
    Operation.TRANSITION_STATUS: ADMIN_ONLY,
    Operation.CREATE_GUARD: ADMIN_ONLY,
    Operation.LIST_APPROVED_FOR_DATE: GUARD_ONLY,
}


def require_role(actor_role: Role, allowed_roles: AbstractSet[Role]) -> None:
    if actor_role not in allowed_roles:
        raise AuthorizationError("Acesso negado. Permissão insuficiente.")


class AuthorizationGate:

    BEARER_PREFIX = "Bearer "

    def __init__(self, token_service: TokenService):
        self.token_service = token_service

    def authenticate(self, authorization_header: Optional[str]) -> Identity:
        """Turn an ``Authorization: Bearer <token>`` header into an Identity."""
        if not authorization_header or not authorization_header.startswith(self.BEARER_PREFIX):
            raise AuthenticationError("Token de autenticação não fornecido")
        token = authorization_header[len(self.BEARER_PREFIX):].strip()
        if not token:
            raise AuthenticationError("Token de autenticação não fornecido")
        return self.token_service.verify_token(token)

    def authorize(self, identity: Optional[Identity], operation: Operation) -> Identity:
        if identity is None:
            raise AuthenticationError("Usuário não autenticado")
        require_role(identity.role, OPERATION_ROLES[operation])
        return identity

    def check(self, authorization_header: Optional[str], operation: Operation) -> Identity:
        return self.authorize(self.authenticate(authorization_header), operation)
