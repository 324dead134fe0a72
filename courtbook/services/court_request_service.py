# courtbook/services/court_request_service.py
from datetime import date, datetime
from typing import Callable, Optional, Union
from uuid import uuid4

from sqlalchemy.orm import Session

from courtbook.db.enums import ADMIN_TARGET_STATUSES, AuditEntityType, RequestStatus
from courtbook.errors import NotFoundError, ValidationError
from courtbook.logger import get_logger
from courtbook.models.court_request import CourtRequest
from courtbook.services.audit_log_service import AuditLogService
from courtbook.services.notification_service import Notification, NotificationService

logger = get_logger(__name__)


class CourtRequestService:
    """
    Lifecycle of a court request.

    PENDING is the only entry state; APPROVED, REJECTED and CANCELLED are set
    by an admin. Setting a status again on an already decided request is
    allowed and simply overwrites status and observation.
    No overlap or availability check is made.
    """

    def __init__(
        self,
        db: Session,
        audit_log_service: AuditLogService,
        notification_service: NotificationService,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.audit_log_service = audit_log_service
        self.notification_service = notification_service
        self._now = clock or datetime.now

    def create_request(
        self,
        *,
        owner_id: str,
        request_date: date,
        start_time: str,
        end_time: str,
    ) -> CourtRequest:
        '''
        Create a PENDING request for ``request_date``.

        :param owner_id: id of the requesting student
        :type owner_id: str
        :param request_date: requested day; only the calendar day is compared
        :type request_date: date
        :raises ValidationError: the day is before today
        '''
        if isinstance(request_date, datetime):
            request_date = request_date.date()

        now = self._now()
        if request_date < now.date():
            raise ValidationError("Não é possível criar requisição para datas passadas")

        request = CourtRequest(
            id=str(uuid4()),
            user_id=owner_id,
            date=request_date,
            start_time=start_time,
            end_time=end_time,
            status=RequestStatus.PENDING,
            admin_observation=None,
            created_at=now,
        )
        self.db.add(request)
        self.db.flush()

        self.audit_log_service.record_create(
            entity_type=AuditEntityType.CourtRequest,
            entity_id=request.id,
            operator_id=owner_id,
        )
        self.db.commit()
        self.db.refresh(request)

        logger.info(
            "Court request %s created by %s for %s %s-%s",
            request.id, owner_id, request_date.isoformat(), start_time, end_time,
        )
        return request

    def get_request(self, request_id: str) -> CourtRequest:
        request = (
            self.db.query(CourtRequest)
            .filter(CourtRequest.id == request_id)
            .first()
        )
        if not request:
            raise NotFoundError("Requisição não encontrada")
        return request

    def transition_status(
        self,
        request_id: str,
        new_status: Union[RequestStatus, str],
        observation: Optional[str] = None,
        *,
        operator_id: str,
    ) -> tuple[CourtRequest, Notification]:
        '''
        Set an admin decision on a request and build the WhatsApp notification.

        :param new_status: APPROVED | REJECTED | CANCELLED
        :param observation: admin note; empty or omitted stores None
        :param operator_id: id of the deciding admin
        :raises ValidationError: PENDING or unknown target status
        :raises NotFoundError: unknown request id
        :return: the updated request and its notification
        '''
        new_status = self._normalize_status(new_status)
        request = self.get_request(request_id)

        before_status = request.status
        before_observation = request.admin_observation

        # last write wins; no version check
        request.status = new_status
        request.admin_observation = observation or None

        self.audit_log_service.record_update(
            entity_type=AuditEntityType.CourtRequest,
            entity_id=request.id,
            changed_attribute="status",
            before_value=before_status,
            after_value=request.status,
            operator_id=operator_id,
        )
        if before_observation != request.admin_observation:
            self.audit_log_service.record_update(
                entity_type=AuditEntityType.CourtRequest,
                entity_id=request.id,
                changed_attribute="admin_observation",
                before_value=before_observation,
                after_value=request.admin_observation,
                operator_id=operator_id,
            )
        self.db.commit()
        self.db.refresh(request)

        logger.info(
            "Court request %s: %s -> %s by %s",
            request.id, before_status.value, new_status.value, operator_id,
        )
        return request, self.notification_service.build_notification(request)

    def _normalize_status(self, status: Union[RequestStatus, str]) -> RequestStatus:
        if not isinstance(status, RequestStatus):
            try:
                status = RequestStatus(str(status).upper())
            except ValueError as e:
                raise ValidationError(f"Status inválido: {status}") from e
        if status not in ADMIN_TARGET_STATUSES:
            raise ValidationError(f"Status inválido: {status.value}")
        return status
