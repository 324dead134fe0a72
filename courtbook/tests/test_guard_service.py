import pytest

from courtbook.db.enums import Role
from courtbook.errors import ConflictError, ValidationError
from courtbook.schemas.auth_schemas import CreateGuardInput


def test_guard_with_username_only_gets_placeholder_email(guard_service):
    guard = guard_service.create_guard(
        CreateGuardInput(name="João", username="joao", password="secret123"),
        operator_id="admin-1",
    )

    assert guard.role == Role.GUARD
    assert guard.email == "vigia.joao@ifma.local"
    assert guard.username == "joao"
    assert guard.email_verified is True
    assert guard.verification_code is None


def test_guard_with_email(guard_service):
    guard = guard_service.create_guard(
        CreateGuardInput(name="Maria", email="maria@ifma.edu.br", password="secret123", whatsapp="98 98888-7777"),
        operator_id="admin-1",
    )

    assert guard.email == "maria@ifma.edu.br"
    assert guard.username is None
    assert guard.whatsapp == "98 98888-7777"


def test_guard_without_email_or_username_fails(guard_service):
    data = CreateGuardInput(name="Sem Login", password="secret123")

    with pytest.raises(ValidationError) as err:
        guard_service.create_guard(data, operator_id="admin-1")

    assert "Email ou username" in err.value.message
    assert err.value.details[0]["field"] == "email"


def test_duplicate_username_conflicts(guard_service):
    guard_service.create_guard(CreateGuardInput(name="João", username="joao", password="secret123"), operator_id="a")

    with pytest.raises(ConflictError):
        guard_service.create_guard(
            CreateGuardInput(name="Outro João", email="outro@ifma.edu.br", username="joao", password="secret123"),
            operator_id="a",
        )


def test_duplicate_email_conflicts(guard_service, make_user):
    make_user(email="maria@ifma.edu.br")

    with pytest.raises(ConflictError):
        guard_service.create_guard(
            CreateGuardInput(name="Maria", email="maria@ifma.edu.br", password="secret123"),
            operator_id="a",
        )
