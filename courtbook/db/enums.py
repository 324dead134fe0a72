# courtbook/db/enums.py
import enum


# User related enums
class Role(enum.Enum):
    STUDENT = "STUDENT"
    GUARD = "GUARD"
    ADMIN = "ADMIN"


# CourtRequest related enums
class RequestStatus(enum.Enum):
    PENDING = "PENDING"        # only entry state
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


# statuses an admin may assign; PENDING is never a target
ADMIN_TARGET_STATUSES = frozenset(
    {RequestStatus.APPROVED, RequestStatus.REJECTED, RequestStatus.CANCELLED}
)


# AuditLog related enums
class AuditEntityType(enum.Enum):
    User = "user"
    CourtRequest = "court_request"


class AuditAction(enum.Enum):
    create = "create"
    update = "update"
    system = "system"
