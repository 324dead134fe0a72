from datetime import date, datetime

import pytest

from courtbook.db.enums import AuditAction, RequestStatus, Role
from courtbook.errors import NotFoundError, ValidationError
from courtbook.models.court_request import CourtRequest


@pytest.fixture()
def student(make_user):
    return make_user(name="Ana Souza", whatsapp="(98) 99999-9999")


@pytest.fixture()
def admin(make_user):
    return make_user(Role.ADMIN, name="Coordenação", email="coord@ifma.edu.br")


def test_create_request_for_today_is_pending(court_request_service, student):
    request = court_request_service.create_request(
        owner_id=student.id,
        request_date=date(2025, 6, 1),
        start_time="14:00",
        end_time="15:00",
    )

    assert request.status == RequestStatus.PENDING
    assert request.admin_observation is None
    assert request.user_id == student.id
    assert request.created_at == datetime(2025, 6, 1, 10, 0, 0)


def test_create_request_ignores_time_of_day(court_request_service, student):
    # earlier hour than "now" on the same day is still today
    request = court_request_service.create_request(
        owner_id=student.id,
        request_date=datetime(2025, 6, 1, 0, 0),
        start_time="08:00",
        end_time="09:00",
    )

    assert request.date == date(2025, 6, 1)


def test_create_request_in_the_past_fails(court_request_service, student, db):
    with pytest.raises(ValidationError):
        court_request_service.create_request(
            owner_id=student.id,
            request_date=date(2025, 5, 31),
            start_time="14:00",
            end_time="15:00",
        )

    assert db.query(CourtRequest).count() == 0


def test_overlapping_requests_are_not_rejected(court_request_service, student, make_user):
    other = make_user(name="Bruno Lima")
    first = court_request_service.create_request(
        owner_id=student.id, request_date=date(2025, 6, 2), start_time="14:00", end_time="15:00"
    )
    second = court_request_service.create_request(
        owner_id=other.id, request_date=date(2025, 6, 2), start_time="14:00", end_time="15:00"
    )

    assert first.id != second.id


def test_transition_to_approved_sets_status_and_observation(court_request_service, student, admin):
    request = court_request_service.create_request(
        owner_id=student.id, request_date=date(2025, 6, 3), start_time="14:00", end_time="15:00"
    )

    updated, notification = court_request_service.transition_status(
        request.id, RequestStatus.APPROVED, "Trazer carteirinha", operator_id=admin.id
    )

    assert updated.status == RequestStatus.APPROVED
    assert updated.admin_observation == "Trazer carteirinha"
    assert "03/06/2025" in notification.message
    assert notification.link.startswith("https://wa.me/5598999999999?text=")


def test_transition_accepts_status_names(court_request_service, student, admin):
    request = court_request_service.create_request(
        owner_id=student.id, request_date=date(2025, 6, 3), start_time="14:00", end_time="15:00"
    )

    updated, _ = court_request_service.transition_status(request.id, "REJECTED", operator_id=admin.id)

    assert updated.status == RequestStatus.REJECTED
    assert updated.admin_observation is None


def test_transition_to_pending_is_rejected(court_request_service, student, admin):
    request = court_request_service.create_request(
        owner_id=student.id, request_date=date(2025, 6, 3), start_time="14:00", end_time="15:00"
    )

    with pytest.raises(ValidationError):
        court_request_service.transition_status(request.id, RequestStatus.PENDING, operator_id=admin.id)


def test_transition_unknown_request_fails(court_request_service, admin):
    with pytest.raises(NotFoundError):
        court_request_service.transition_status("missing-id", RequestStatus.APPROVED, operator_id=admin.id)


def test_transition_twice_gives_same_state(court_request_service, student, admin, db):
    request = court_request_service.create_request(
        owner_id=student.id, request_date=date(2025, 6, 3), start_time="14:00", end_time="15:00"
    )

    first, first_note = court_request_service.transition_status(
        request.id, RequestStatus.CANCELLED, "Chuva", operator_id=admin.id
    )
    second, second_note = court_request_service.transition_status(
        request.id, RequestStatus.CANCELLED, "Chuva", operator_id=admin.id
    )

    stored = db.get(CourtRequest, request.id)
    assert stored.status == RequestStatus.CANCELLED
    assert stored.admin_observation == "Chuva"
    assert first_note.message == second_note.message


def test_terminal_request_can_be_transitioned_again(court_request_service, student, admin):
    request = court_request_service.create_request(
        owner_id=student.id, request_date=date(2025, 6, 3), start_time="14:00", end_time="15:00"
    )
    court_request_service.transition_status(request.id, RequestStatus.APPROVED, "ok", operator_id=admin.id)

    updated, _ = court_request_service.transition_status(request.id, RequestStatus.CANCELLED, operator_id=admin.id)

    assert updated.status == RequestStatus.CANCELLED
    assert updated.admin_observation is None


def test_empty_observation_is_stored_as_none(court_request_service, student, admin):
    request = court_request_service.create_request(
        owner_id=student.id, request_date=date(2025, 6, 3), start_time="14:00", end_time="15:00"
    )

    updated, _ = court_request_service.transition_status(request.id, RequestStatus.APPROVED, "", operator_id=admin.id)

    assert updated.admin_observation is None


def test_owner_without_whatsapp_gets_message_but_no_link(court_request_service, make_user, admin):
    student = make_user(name="Carla Dias", whatsapp=None)
    request = court_request_service.create_request(
        owner_id=student.id, request_date=date(2025, 6, 4), start_time="16:00", end_time="17:30"
    )

    _, notification = court_request_service.transition_status(
        request.id, RequestStatus.APPROVED, operator_id=admin.id
    )

    assert notification.link is None
    assert "04/06/2025" in notification.message
    assert "16:00 às 17:30" in notification.message


def test_transition_is_audited(court_request_service, audit_log_service, student, admin):
    request = court_request_service.create_request(
        owner_id=student.id, request_date=date(2025, 6, 3), start_time="14:00", end_time="15:00"
    )
    court_request_service.transition_status(request.id, RequestStatus.APPROVED, "X", operator_id=admin.id)

    logs = audit_log_service.list_for_entity(request.id)
    status_log = [log for log in logs if log.changed_attribute == "status"][0]

    assert any(log.action == AuditAction.create for log in logs)
    assert status_log.before_value == "PENDING"
    assert status_log.after_value == "APPROVED"
    assert status_log.operator_id == admin.id
