"""
User administration tests
=========================

Listing, creation and the containment rules between ADMIN and SUPER_ADMIN.
"""

import pytest

from core.roles import ADMIN, SUPER_ADMIN, USER

NEW_USER = {"name": "Field Agent", "email": "agent@moha.test", "password": "Str0ngPass"}


class TestListUsers:
    def test_user_role_is_forbidden(self, client, staff_headers):
        assert client.get("/api/admin/users", headers=staff_headers).status_code == 403

    def test_lists_newest_first_without_secrets(self, client, make_user, admin_headers):
        make_user(USER, email="older@moha.test")
        make_user(USER, email="newer@moha.test")
        resp = client.get("/api/admin/users", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        emails = [u["email"] for u in data["users"]]
        assert emails.index("newer@moha.test") < emails.index("older@moha.test")
        assert all("passwordHash" not in u for u in data["users"])
        assert data["pagination"]["limit"] == 50

    def test_filters(self, client, make_user, admin_headers):
        make_user(USER, email="kept@moha.test", name="Amina Juma")
        make_user(USER, email="gone@moha.test", is_active=False)

        by_search = client.get("/api/admin/users?search=amina", headers=admin_headers).json()["data"]
        assert [u["email"] for u in by_search["users"]] == ["kept@moha.test"]

        inactive = client.get("/api/admin/users?status=inactive", headers=admin_headers).json()["data"]
        assert [u["email"] for u in inactive["users"]] == ["gone@moha.test"]

        admins = client.get("/api/admin/users?role=ADMIN", headers=admin_headers).json()["data"]
        assert {u["role"] for u in admins["users"]} == {ADMIN}

    def test_bad_role_filter(self, client, admin_headers):
        resp = client.get("/api/admin/users?role=GOD", headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Invalid role")


class TestCreateUser:
    def test_admin_creates_user(self, client, admin_headers):
        resp = client.post("/api/admin/users", json=NEW_USER, headers=admin_headers)
        assert resp.status_code == 201
        assert resp.json()["data"]["role"] == USER

    def test_admin_cannot_create_admin(self, client, admin_headers):
        resp = client.post("/api/admin/users", json={**NEW_USER, "role": ADMIN}, headers=admin_headers)
        assert resp.status_code == 403
        assert resp.json()["error"] == "Only super admins can assign admin roles"

    def test_super_admin_creates_admin(self, client, super_headers):
        resp = client.post("/api/admin/users", json={**NEW_USER, "role": ADMIN}, headers=super_headers)
        assert resp.status_code == 201
        assert resp.json()["data"]["role"] == ADMIN

    def test_duplicate_email(self, client, staff, admin_headers):
        resp = client.post("/api/admin/users", json={**NEW_USER, "email": staff.email}, headers=admin_headers)
        assert resp.status_code == 409

    def test_password_policy(self, client, admin_headers):
        resp = client.post("/api/admin/users", json={**NEW_USER, "password": "alllower1"}, headers=admin_headers)
        assert resp.status_code == 400

    def test_missing_fields(self, client, admin_headers):
        resp = client.post("/api/admin/users", json={"email": "x@moha.test"}, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Missing required fields"


class TestManageUsers:
    def test_get_unknown_user(self, client, admin_headers):
        resp = client.get("/api/admin/users/9999", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json()["error"] == "User not found"

    def test_admin_deactivates_user(self, client, staff, staff_headers, admin_headers):
        staff_id = staff.id
        resp = client.patch(f"/api/admin/users/{staff_id}", json={"isActive": False}, headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["isActive"] is False
        # the old token stops working immediately
        assert client.get("/api/claims", headers=staff_headers).status_code == 403

    def test_admin_reactivates_user(self, client, make_user, admin_headers):
        user = make_user(USER, is_active=False)
        resp = client.patch(f"/api/admin/users/{user.id}", json={"isActive": True}, headers=admin_headers)
        assert resp.json()["data"]["isActive"] is True

    @pytest.mark.parametrize("target_role", [ADMIN, SUPER_ADMIN])
    def test_admin_cannot_touch_admins(self, client, make_user, admin_headers, target_role):
        target = make_user(target_role)
        target_id = target.id
        deactivate = client.patch(f"/api/admin/users/{target_id}", json={"isActive": False}, headers=admin_headers)
        assert deactivate.status_code == 403
        delete = client.delete(f"/api/admin/users/{target_id}", headers=admin_headers)
        assert delete.status_code == 403

    def test_super_admin_manages_admins(self, client, make_user, super_headers):
        target = make_user(ADMIN)
        target_id = target.id
        resp = client.patch(f"/api/admin/users/{target_id}", json={"role": USER}, headers=super_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["role"] == USER
        resp = client.delete(f"/api/admin/users/{target_id}", headers=super_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["message"] == "User deleted successfully"

    def test_admin_cannot_promote(self, client, staff, admin_headers):
        resp = client.patch(f"/api/admin/users/{staff.id}", json={"role": ADMIN}, headers=admin_headers)
        assert resp.status_code == 403

    def test_nobody_acts_on_themselves(self, client, super_admin, super_headers):
        own_id = super_admin.id
        resp = client.patch(f"/api/admin/users/{own_id}", json={"isActive": False}, headers=super_headers)
        assert resp.status_code == 403
        assert resp.json()["error"] == "Cannot deactivate your own account"
        resp = client.delete(f"/api/admin/users/{own_id}", headers=super_headers)
        assert resp.status_code == 403
        assert resp.json()["error"] == "Cannot delete your own account"

    def test_empty_patch(self, client, staff, admin_headers):
        resp = client.patch(f"/api/admin/users/{staff.id}", json={}, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "No fields to update"

    def test_invalid_role_value(self, client, staff, super_headers):
        resp = client.patch(f"/api/admin/users/{staff.id}", json={"role": "GOD"}, headers=super_headers)
        assert resp.status_code == 400

    def test_delete_twice(self, client, staff, admin_headers):
        staff_id = staff.id
        assert client.delete(f"/api/admin/users/{staff_id}", headers=admin_headers).status_code == 200
        resp = client.delete(f"/api/admin/users/{staff_id}", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json()["error"] == "User not found or already deleted"
