# courtbook/models/court_request.py
from sqlalchemy import (
    String,
    Text,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    func,
)
from courtbook.db.base import Base
from courtbook.db.enums import RequestStatus
from sqlalchemy.orm import Mapped, mapped_column, relationship
import datetime as dt
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from courtbook.models.user import User


class CourtRequest(Base):
    """
    One student's request for the court on a given day.

    Starts PENDING and only changes through an admin status update.
    Never deleted.
    """

    __tablename__ = "court_requests"

    id :Mapped[str] = mapped_column(String(36), primary_key=True, comment="Request UUID")

    user_id :Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="Owning student",
    )

    date :Mapped[dt.date] = mapped_column(Date, nullable=False, index=True, comment="Requested calendar day")

    # free-form local times, neither ordered nor checked for overlap
    start_time :Mapped[str] = mapped_column(String(20), nullable=False, comment="Start time, e.g. 14:00")
    end_time :Mapped[str] = mapped_column(String(20), nullable=False, comment="End time, e.g. 15:30")

    status :Mapped[RequestStatus] = mapped_column(
        Enum(RequestStatus, name="request_status"),
        nullable=False,
        default=RequestStatus.PENDING,
        comment="PENDING | APPROVED | REJECTED | CANCELLED",
    )

    admin_observation :Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="Note attached by the admin on the last status update")

    created_at :Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Request creation timestamp",
    )

    user :Mapped["User"] = relationship(back_populates="court_requests", lazy="joined")

    def __repr__(self) -> str:
        return (
            f"<CourtRequest id={self.id} date={self.date.isoformat()} "
            f"{self.start_time}-{self.end_time} status={self.status.value}>"
        )
