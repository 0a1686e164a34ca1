# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Role policy.  Every role decision in the API goes through this module so the
hierarchy is defined in exactly one place.

    USER  <  ADMIN  <  SUPER_ADMIN

SUPER_ADMIN is the top tier: it passes every role check and is exempt from
the containment rule that stops admins from acting on other admins.
"""

from typing import Optional

USER = "USER"
ADMIN = "ADMIN"
SUPER_ADMIN = "SUPER_ADMIN"

ROLES = (USER, ADMIN, SUPER_ADMIN)

_RANK = {role: rank for rank, role in enumerate(ROLES)}


def role_rank(role: Optional[str]) -> int:
    """Position of *role* in the hierarchy; unknown roles rank below USER."""
    return _RANK.get(role, -1)


def has_role(role: Optional[str], required: Optional[str]) -> bool:
    """True when *role* meets *required*.  ``None`` requires nothing."""
    if required is None or role == SUPER_ADMIN:
        return True
    return role_rank(role) >= role_rank(required)


def can_manage_user(
    actor_id: int,
    actor_role: str,
    target_id: int,
    target_role: str,
    action: str = "modify",
) -> Optional[str]:
    """
    Check whether an actor may *action* (delete, deactivate, modify …) a
    target account.

    Returns ``None`` when allowed, otherwise the reason to report with 403.
    """
    if actor_id == target_id:
        return f"Cannot {action} your own account"
    if actor_role != SUPER_ADMIN and role_rank(target_role) >= role_rank(ADMIN):
        return f"Admins cannot {action} other admin accounts"
    return None


def can_assign_role(actor_role: str, new_role: str) -> bool:
    """Only the top tier may hand out ADMIN or SUPER_ADMIN."""
    if role_rank(new_role) >= role_rank(ADMIN):
        return actor_role == SUPER_ADMIN
    return True
