# courtbook/models/audit_log.py
from sqlalchemy import (
    String,
    DateTime,
    Enum,
    JSON,
    func,
)
from courtbook.db.base import Base
from courtbook.db.enums import AuditEntityType, AuditAction
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from typing import Any, Optional


class AuditLog(Base):
    __tablename__ = "audit_logs"

    # =========
    # 🔒 Immutable fields (no update, no delete)
    # =========
    id :Mapped[str] = mapped_column(String(36), primary_key=True, comment="Audit log UUID")

    entity_type :Mapped[AuditEntityType] = mapped_column(
        Enum(AuditEntityType, name="audit_entity_type"),
        nullable=False,
        comment="Type of the audited entity",
    )

    entity_id :Mapped[str] = mapped_column(String(36), nullable=False, index=True, comment="UUID of the audited entity")

    action :Mapped[AuditAction] = mapped_column(
        Enum(AuditAction, name="audit_action"),
        nullable=False,
        comment="Type of action performed on the entity",
    )

    changed_attribute :Mapped[str] = mapped_column(String(100), nullable=False, comment="Attribute that was changed")

    before_value :Mapped[Optional[Any]] = mapped_column(JSON, nullable=True, comment="Value before the change")
    after_value :Mapped[Optional[Any]] = mapped_column(JSON, nullable=True, comment="Value after the change")

    operator_id :Mapped[str] = mapped_column(String(36), nullable=False, comment="User ID of the operator, or SYSTEM")

    timestamp :Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Timestamp when the action was performed",
    )

    def __repr__(self) -> str:
        return (
            f"<AuditLog entity={self.entity_type.value} "
            f"entity_id={self.entity_id} "
            f"action={self.action.value}>"
        )
