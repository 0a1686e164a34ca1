# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Bootstrap script – creates the first SUPER_ADMIN user.

Run once after the initial migration:
    alembic upgrade head
    python bin/seed_admin.py

The script reads FIRST_ADMIN_EMAIL, FIRST_ADMIN_PASSWORD and
FIRST_ADMIN_NAME from etc/app.conf (or the environment).  After the row is
inserted those values are no longer used by the application; further staff
accounts are created from the dashboard.
"""

import sys
import os

# ---------------------------------------------------------------------------
# Path setup so backend modules are importable
# ---------------------------------------------------------------------------
# bin/seed_admin.py  →  ../  →  project root
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR  = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from core.config import settings                 # noqa: E402
from core.roles import SUPER_ADMIN               # noqa: E402
from core.security import hash_password          # noqa: E402
from core.validation import validate_new_password  # noqa: E402
from database import SessionLocal                # noqa: E402
from models.user import User                     # noqa: E402


def seed() -> int:
    if not settings.first_admin_email or not settings.first_admin_password:
        print("[seed_admin] FIRST_ADMIN_EMAIL or FIRST_ADMIN_PASSWORD not set in etc/app.conf – nothing to do.")
        return 0

    err = validate_new_password(settings.first_admin_password)
    if err:
        print(f"[seed_admin] FIRST_ADMIN_PASSWORD rejected: {err}")
        return 1

    email = settings.first_admin_email.strip().lower()
    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"[seed_admin] User '{email}' already exists – skipping.")
            return 0

        admin = User(
            name=settings.first_admin_name,
            email=email,
            password_hash=hash_password(settings.first_admin_password),
            role=SUPER_ADMIN,
            is_active=True,
        )
        db.add(admin)
        db.commit()
        print(f"[seed_admin] Super admin '{email}' created successfully.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(seed())
