"""
Envelope and error mapping.
"""

from sqlalchemy.exc import IntegrityError, OperationalError

import claims.router as claims_router
from core.responses import is_storage_unavailable


def _raiser(exc):
    def _raise(*args, **kwargs):
        raise exc

    return _raise


class TestStorageClassification:
    def test_connection_failure(self):
        exc = OperationalError("SELECT 1", {}, Exception("could not connect to server"))
        assert is_storage_unavailable(exc)

    def test_lock_timeout_is_not_unavailability(self):
        exc = OperationalError("UPDATE claims", {}, Exception("database is locked"))
        assert not is_storage_unavailable(exc)

    def test_integrity_error(self):
        assert not is_storage_unavailable(IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed")))


class TestErrorEnvelope:
    def test_database_down_is_503(self, client, staff_headers, monkeypatch):
        down = OperationalError("SELECT", {}, Exception("Connection refused"))
        monkeypatch.setattr(claims_router, "get_or_404", _raiser(down))
        resp = client.get("/api/claims/1", headers=staff_headers)
        assert resp.status_code == 503
        assert resp.json() == {"success": False, "error": "Database connection error. Please try again later."}

    def test_other_database_error_is_500(self, client, staff_headers, monkeypatch):
        broken = IntegrityError("INSERT", {}, Exception("constraint failed"))
        monkeypatch.setattr(claims_router, "get_or_404", _raiser(broken))
        resp = client.get("/api/claims/1", headers=staff_headers)
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "Internal server error"}

    def test_malformed_json_is_400(self, client):
        resp = client.post("/api/claims", content=b"{not json", headers={"Content-Type": "application/json"})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Invalid JSON body"}

    def test_bad_query_parameter_is_400_not_422(self, client, staff_headers):
        resp = client.get("/api/claims?page=zero", headers=staff_headers)
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Invalid value for page")

    def test_unknown_route_uses_envelope(self, client):
        resp = client.get("/api/nothing-here")
        assert resp.status_code == 404
        assert resp.json()["success"] is False

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
