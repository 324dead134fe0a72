from typing import Any, Callable, Optional
from uuid import uuid4
from datetime import datetime, date
from enum import Enum

from sqlalchemy.orm import Session

from courtbook.models.audit_log import AuditLog
from courtbook.db.enums import AuditEntityType, AuditAction


class AuditLogService:
    """
    Centralized service for recording all auditable actions.
    This service is the ONLY place where AuditLog records can be created.
    Rows are added to the caller's session and commit with the change they describe.
    """

    def __init__(self, db: Session, clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self._now = clock or datetime.now

    def serialize_audit_value(self, value) -> Any:
        if value is None:
            return None
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, (int, float, str, bool)):
            return value
        return str(value)

    def record_create(
        self,
        *,
        entity_type: AuditEntityType,
        entity_id: str,
        operator_id: str,
    ) -> None:
        '''
        Record the creation of a User or CourtRequest.

        :param entity_type: kind of entity created
        :type entity_type: AuditEntityType
        :param entity_id: id of the new entity
        :type entity_id: str
        :param operator_id: id of the acting user (the new user itself on self-registration)
        :type operator_id: str
        '''
        self._add(
            entity_type=entity_type,
            entity_id=entity_id,
            action=AuditAction.create,
            changed_attribute="__all__",
            before_value=None,
            after_value=None,
            operator_id=operator_id,
        )

    def record_update(
        self,
        *,
        entity_type: AuditEntityType,
        entity_id: str,
        changed_attribute: str,
        before_value: Any,
        after_value: Any,
        operator_id: str,
    ) -> None:
        '''
        Record one attribute change made by a user.

        :param changed_attribute: name of the changed attribute
        :type changed_attribute: str
        :param before_value: value before the change
        :type before_value: Any
        :param after_value: value after the change
        :type after_value: Any
        :param operator_id: id of the acting user
        :type operator_id: str
        '''
        self._add(
            entity_type=entity_type,
            entity_id=entity_id,
            action=AuditAction.update,
            changed_attribute=changed_attribute,
            before_value=self.serialize_audit_value(before_value),
            after_value=self.serialize_audit_value(after_value),
            operator_id=operator_id,
        )

    def record_system_update(
        self,
        *,
        entity_type: AuditEntityType,
        entity_id: str,
        changed_attribute: str,
        before_value: Any,
        after_value: Any,
    ) -> None:
        '''
        Record a change made by the system rather than a person,
        e.g. clearing a verification code once the email is confirmed.
        '''
        self._add(
            entity_type=entity_type,
            entity_id=entity_id,
            action=AuditAction.system,
            changed_attribute=changed_attribute,
            before_value=self.serialize_audit_value(before_value),
            after_value=self.serialize_audit_value(after_value),
            operator_id="SYSTEM",
        )

    def list_for_entity(self, entity_id: str) -> list[AuditLog]:
        return (
            self.db.query(AuditLog)
            .filter(AuditLog.entity_id == entity_id)
            .order_by(AuditLog.timestamp.asc())
            .all()
        )

    def _add(self, **fields) -> None:
        log = AuditLog(id=str(uuid4()), timestamp=self._now(), **fields)
        self.db.add(log)
