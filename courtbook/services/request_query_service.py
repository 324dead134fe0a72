# courtbook/services/request_query_service.py
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from courtbook.db.enums import RequestStatus
from courtbook.models.court_request import CourtRequest


class RequestQueryService:
    """Role-scoped read paths over court requests. Read only."""

    def __init__(self, db: Session):
        self.db = db

    def list_own(self, user_id: str) -> List[CourtRequest]:
        return (
            self.db.query(CourtRequest)
            .filter(CourtRequest.user_id == user_id)
            .order_by(desc(CourtRequest.date))
            .all()
        )

    def list_all(
        self,
        *,
        status: Optional[RequestStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[CourtRequest]:
        '''
        All requests, newest day first.

        :param status: exact match
        :param date_from: inclusive lower bound
        :param date_to: inclusive upper bound, the whole day counts
        '''
        query = self.db.query(CourtRequest)

        if status is not None:
            query = query.filter(CourtRequest.status == RequestStatus(status))
        if date_from is not None:
            query = query.filter(CourtRequest.date >= date_from)
        if date_to is not None:
            query = query.filter(CourtRequest.date < date_to + timedelta(days=1))

        return query.order_by(desc(CourtRequest.date)).all()

    def list_approved_for_date(self, day: date) -> List[CourtRequest]:
        """The guard's agenda: approved requests of one day, earliest start first."""
        return (
            self.db.query(CourtRequest)
            .filter(
                CourtRequest.status == RequestStatus.APPROVED,
                CourtRequest.date >= day,
                CourtRequest.date < day + timedelta(days=1),
            )
            .order_by(CourtRequest.start_time.asc())
            .all()
        )
