"""
Authorization gate tests
========================

authorize() directly, plus the 401 / 403 contract on protected endpoints.
"""

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import OperationalError

import core.security as security
from conftest import PASSWORD
from core.config import settings
from core.roles import ADMIN, SUPER_ADMIN, USER
from core.security import SessionUser, authorize, load_session, create_session_token


def _session(user, **overrides):
    values = dict(id=user.id, email=user.email, name=user.name, role=user.role, is_active=user.is_active)
    values.update(overrides)
    return SessionUser(**values)


def _db_down(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("could not connect to server: Connection refused"))


class TestAuthorize:
    def test_no_session_is_401(self, db):
        with pytest.raises(HTTPException) as exc:
            authorize(None, db)
        assert exc.value.status_code == 401
        assert exc.value.detail == "Unauthorized"

    def test_inactive_claim_is_403(self, db, staff):
        with pytest.raises(HTTPException) as exc:
            authorize(_session(staff, is_active=False), db)
        assert exc.value.status_code == 403
        assert "deactivated" in exc.value.detail

    def test_deactivated_in_database_is_403(self, db, make_user):
        user = make_user(USER, is_active=False)
        # token issued while the account was still active
        with pytest.raises(HTTPException) as exc:
            authorize(_session(user, is_active=True), db)
        assert exc.value.status_code == 403
        assert "deactivated" in exc.value.detail

    def test_vanished_user_is_404(self, db, staff):
        session = _session(staff)
        db.delete(staff)
        db.commit()
        with pytest.raises(HTTPException) as exc:
            authorize(session, db)
        assert exc.value.status_code == 404

    def test_role_too_low_is_403(self, db, staff):
        with pytest.raises(HTTPException) as exc:
            authorize(_session(staff), db, ADMIN)
        assert exc.value.status_code == 403
        assert exc.value.detail == "Forbidden"

    def test_role_comes_from_database_not_claims(self, db, staff):
        # token still says ADMIN after a demotion
        with pytest.raises(HTTPException):
            authorize(_session(staff, role=ADMIN), db, ADMIN)

    def test_super_admin_passes_every_role(self, db, super_admin):
        resolved = authorize(_session(super_admin), db, ADMIN)
        assert resolved.role == SUPER_ADMIN

    def test_returns_resolved_user(self, db, admin):
        resolved = authorize(_session(admin), db, USER)
        assert resolved.id == admin.id
        assert resolved.is_active is True


class TestStorageFailure:
    def test_fail_open_trusts_claims(self, db, admin, monkeypatch):
        monkeypatch.setattr(security, "_fetch_user_state", _db_down)
        monkeypatch.setattr(settings, "auth_fail_open", True)
        resolved = authorize(_session(admin), db, ADMIN)
        assert resolved.role == ADMIN

    def test_fail_closed_is_503(self, db, admin, monkeypatch):
        monkeypatch.setattr(security, "_fetch_user_state", _db_down)
        monkeypatch.setattr(settings, "auth_fail_open", False)
        with pytest.raises(HTTPException) as exc:
            authorize(_session(admin), db, ADMIN)
        assert exc.value.status_code == 503

    def test_token_refresh_keeps_claims_when_database_is_down(self, db, admin, monkeypatch):
        token = create_session_token(admin)
        monkeypatch.setattr(security, "_fetch_user_state", _db_down)
        session = load_session(token, db)
        assert session is not None
        assert session.role == ADMIN


class TestProtectedEndpoints:
    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/api/claims"),
            ("get", "/api/quotes"),
            ("get", "/api/applications"),
            ("get", "/api/whistleblowing"),
            ("get", "/api/contact"),
            ("get", "/api/callback"),
            ("get", "/api/dashboard/stats"),
            ("get", "/api/admin/users"),
            ("get", "/api/auth/me"),
            ("delete", "/api/claims/1"),
        ],
    )
    def test_no_session_is_401(self, client, method, path):
        resp = getattr(client, method)(path)
        assert resp.status_code == 401
        assert resp.json() == {"success": False, "error": "Unauthorized"}

    def test_deactivated_account_is_403(self, client, make_user, headers_for):
        user = make_user(USER, is_active=False)
        resp = client.get("/api/claims", headers=headers_for(user))
        assert resp.status_code == 403
        assert "deactivated" in resp.json()["error"]

    def test_cookie_session_is_accepted(self, client, staff):
        signin = client.post("/api/auth/signin", json={"email": staff.email, "password": PASSWORD})
        assert settings.session_cookie_name in signin.cookies
        assert client.get("/api/claims").status_code == 200

    def test_garbage_token_is_401(self, client):
        resp = client.get("/api/claims", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401

    def test_delete_requires_admin(self, client, staff_headers):
        resp = client.delete("/api/claims/1", headers=staff_headers)
        assert resp.status_code == 403
