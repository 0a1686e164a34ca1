"""
Role policy and input validation helpers.
"""

import pytest
from fastapi import HTTPException

from core.roles import ADMIN, SUPER_ADMIN, USER, can_assign_role, can_manage_user, has_role
from core.validation import (
    INVALID_EMAIL,
    MISSING_FIELDS,
    clean_list,
    clean_optional,
    require_choice,
    require_fields,
    require_min_length,
    sanitize_input,
    validate_email,
    validate_new_password,
    validate_phone,
)


class TestHasRole:
    def test_hierarchy(self):
        assert has_role(ADMIN, USER)
        assert has_role(USER, USER)
        assert not has_role(USER, ADMIN)
        assert not has_role(ADMIN, SUPER_ADMIN)

    def test_super_admin_always_passes(self):
        assert has_role(SUPER_ADMIN, SUPER_ADMIN)
        assert has_role(SUPER_ADMIN, ADMIN)

    def test_no_requirement(self):
        assert has_role(USER, None)

    def test_unknown_role_fails(self):
        assert not has_role("GUEST", USER)


class TestContainment:
    def test_self_action_refused(self):
        assert can_manage_user(1, SUPER_ADMIN, 1, SUPER_ADMIN, "delete") == "Cannot delete your own account"

    def test_admin_cannot_touch_admins(self):
        assert can_manage_user(1, ADMIN, 2, ADMIN, "deactivate") is not None
        assert can_manage_user(1, ADMIN, 2, SUPER_ADMIN, "delete") is not None

    def test_admin_can_manage_users(self):
        assert can_manage_user(1, ADMIN, 2, USER, "delete") is None

    def test_super_admin_can_manage_admins(self):
        assert can_manage_user(1, SUPER_ADMIN, 2, ADMIN, "delete") is None
        assert can_manage_user(1, SUPER_ADMIN, 2, SUPER_ADMIN, "deactivate") is None

    def test_only_super_admin_grants_admin(self):
        assert can_assign_role(SUPER_ADMIN, ADMIN)
        assert not can_assign_role(ADMIN, ADMIN)
        assert not can_assign_role(ADMIN, SUPER_ADMIN)
        assert can_assign_role(ADMIN, USER)


class TestSanitize:
    def test_strips_script_blocks_and_whitespace(self):
        assert sanitize_input("  Hello <script>alert(1)</script>world  ") == "Hello world"

    def test_script_tags_case_insensitive_multiline(self):
        assert sanitize_input("a<SCRIPT type='x'>\nbad()\n</Script>b") == "ab"

    def test_other_markup_is_kept(self):
        assert sanitize_input("<b>bold</b>") == "<b>bold</b>"

    def test_clean_optional(self):
        assert clean_optional(None) is None
        assert clean_optional("   ") is None
        assert clean_optional("<script>x</script>") is None
        assert clean_optional(" Dar ") == "Dar"

    def test_clean_list_drops_blanks(self):
        assert clean_list([" a ", "", "<script>x</script>", "b"]) == ["a", "b"]
        assert clean_list(None) == []


class TestValidators:
    @pytest.mark.parametrize("email", ["jane@x.com", "a.b@c.co.tz"])
    def test_valid_email(self, email):
        assert validate_email(email)

    @pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.com", ""])
    def test_invalid_email(self, email):
        assert not validate_email(email)

    @pytest.mark.parametrize("phone", ["+255700000000", "712 345 678", "+1 (555) 123-4567"])
    def test_valid_phone(self, phone):
        assert validate_phone(phone)

    @pytest.mark.parametrize("phone", ["0712345678", "abc", "+"])
    def test_invalid_phone(self, phone):
        assert not validate_phone(phone)

    def test_require_fields(self):
        require_fields("a", 1, ["x"])
        for missing in (None, "", "   ", [], 0):
            with pytest.raises(HTTPException) as exc:
                require_fields("a", missing)
            assert exc.value.status_code == 400
            assert exc.value.detail == MISSING_FIELDS

    def test_min_length_counts_sanitized_text(self):
        with pytest.raises(HTTPException) as exc:
            require_min_length("short<script>padding padding</script>", 10, "too short")
        assert exc.value.detail == "too short"
        assert require_min_length("  long enough text ", 10, "x") == "long enough text"

    def test_require_choice(self):
        assert require_choice("NEW", ("NEW", "DONE")) == "NEW"
        with pytest.raises(HTTPException) as exc:
            require_choice("BOGUS", ("NEW", "DONE"))
        assert exc.value.detail == "Invalid status. Must be one of: NEW, DONE"

    def test_password_policy(self):
        assert validate_new_password("Passw0rdOK") is None
        assert "8 characters" in validate_new_password("Pa1")
        assert "uppercase" in validate_new_password("password1")
        assert "lowercase" in validate_new_password("PASSWORD1")
        assert "digit" in validate_new_password("Passwordd")

    def test_invalid_email_message(self):
        assert INVALID_EMAIL == "Invalid email format"
