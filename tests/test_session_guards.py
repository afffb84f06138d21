import asyncio

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from app.core.exceptions import ForbiddenRole, Unauthorized
from app.db import mongo
from app.models.user import SessionUser, UserRole
from app.services import auth_service, session_service
from tests.conftest import ADMIN_TOKEN, CUSTOMER_TOKEN, ROGUE_TOKEN


def run(coro):
    return asyncio.run(coro)


def test_admin_session_passes_require_admin(session_store):
    user = run(auth_service.require_admin(ADMIN_TOKEN))

    assert user.role == UserRole.ADMIN
    assert user.id == "64b000000000000000000001"
    assert user.contact_id == "64c000000000000000000001"
    assert user.name == "Asha Admin"
    assert user.email == "admin@example.com"


def test_customer_session_is_forbidden_from_admin(session_store):
    with pytest.raises(ForbiddenRole) as exc_info:
        run(auth_service.require_admin(CUSTOMER_TOKEN))

    assert exc_info.value.status_code == 403
    assert exc_info.value.required_role == "ADMIN"
    assert exc_info.value.actual_role == "CUSTOMER"
    assert exc_info.value.message == "Admin access required"


def test_admin_session_is_forbidden_from_customer_operations(session_store):
    with pytest.raises(ForbiddenRole) as exc_info:
        run(auth_service.require_customer(ADMIN_TOKEN))

    assert exc_info.value.message == "Customer access required"


def test_customer_session_passes_require_customer(session_store):
    user = run(auth_service.require_customer(CUSTOMER_TOKEN))
    assert user.role == UserRole.CUSTOMER


def test_any_role_passes_require_auth(session_store):
    assert run(auth_service.require_auth(ADMIN_TOKEN)).role == UserRole.ADMIN
    assert run(auth_service.require_auth(CUSTOMER_TOKEN)).role == UserRole.CUSTOMER


@pytest.mark.parametrize("token", [None, "", "unknown-token"])
@pytest.mark.parametrize("guard", ["require_auth", "require_admin", "require_customer"])
def test_absent_session_is_unauthorized_never_forbidden(session_store, guard, token):
    with pytest.raises(Unauthorized) as exc_info:
        run(getattr(auth_service, guard)(token))

    assert not isinstance(exc_info.value, ForbiddenRole)
    assert exc_info.value.status_code == 401


@pytest.mark.parametrize("token", [None, "", "unknown-token", ADMIN_TOKEN, CUSTOMER_TOKEN, ROGUE_TOKEN])
def test_get_current_user_never_raises(session_store, token):
    result = run(auth_service.get_current_user(token))
    assert result is None or isinstance(result, SessionUser)


def test_unknown_role_resolves_to_no_user(session_store):
    assert run(auth_service.get_current_user(ROGUE_TOKEN)) is None

    with pytest.raises(Unauthorized):
        run(auth_service.require_admin(ROGUE_TOKEN))


def test_store_failure_resolves_to_no_user(monkeypatch):
    async def broken_store(token):
        raise ServerSelectionTimeoutError("no servers available")

    monkeypatch.setattr(session_service, "get_server_session", broken_store)

    assert run(auth_service.get_current_user(ADMIN_TOKEN)) is None
    with pytest.raises(Unauthorized):
        run(auth_service.require_auth(ADMIN_TOKEN))


def test_guards_are_idempotent(session_store):
    first = run(auth_service.require_admin(ADMIN_TOKEN))
    second = run(auth_service.require_admin(ADMIN_TOKEN))
    assert first == second

    for _ in range(2):
        with pytest.raises(ForbiddenRole):
            run(auth_service.require_admin(CUSTOMER_TOKEN))


def test_each_guard_reads_the_session_once(session_store):
    run(auth_service.require_admin(ADMIN_TOKEN))
    assert session_store.lookups == [ADMIN_TOKEN]


def test_resolve_session_user_handles_partial_sessions():
    assert auth_service.resolve_session_user(None) is None
    assert auth_service.resolve_session_user({}) is None
    assert auth_service.resolve_session_user({"user": None}) is None
    assert auth_service.resolve_session_user({"user": {"role": "ADMIN"}}) is None
    assert auth_service.resolve_session_user({"user": {"id": "u1"}}) is None
    assert auth_service.resolve_session_user("not-a-session") is None

    user = auth_service.resolve_session_user({"user": {"id": "u1", "role": "CUSTOMER"}})
    assert user == SessionUser(id="u1", role=UserRole.CUSTOMER)
    assert user.contact_id is None
    assert user.name == ""


def test_authorize_compares_roles():
    admin = SessionUser(id="u1", role=UserRole.ADMIN)

    assert auth_service.authorize(admin) is admin
    assert auth_service.authorize(admin, UserRole.ADMIN) is admin

    with pytest.raises(ForbiddenRole):
        auth_service.authorize(admin, UserRole.CUSTOMER)

    with pytest.raises(Unauthorized):
        auth_service.authorize(None, UserRole.ADMIN)


def test_unconnected_store_resolves_to_no_user(monkeypatch):
    monkeypatch.setattr(mongo, "_database", None)

    assert run(auth_service.get_current_user(ADMIN_TOKEN)) is None
    with pytest.raises(Unauthorized):
        run(auth_service.require_admin(ADMIN_TOKEN))
