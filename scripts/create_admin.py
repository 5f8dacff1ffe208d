#!/usr/bin/env python3
"""
Create (or promote) an administrator account.

Admins cannot self-register through the API.
Usage: python scripts/create_admin.py admin@college.edu 'a-strong-password'
"""
import sys
sys.path.insert(0, '.')

from portal.core.auth import hash_password
from portal.db.postgres import get_db_session, init_db
from portal.db.tables import User


def main(argv):
    if len(argv) != 3:
        print("Usage: python scripts/create_admin.py <email> <password>")
        return 2

    email, password = argv[1].lower(), argv[2]
    if len(password) < 8:
        print("❌ Password must be at least 8 characters")
        return 1

    init_db()
    with get_db_session() as db:
        user = db.query(User).filter(User.email == email).first()
        if user:
            user.role = "admin"
            user.password_hash = hash_password(password)
            print(f"✅ Promoted existing account {email} to admin")
        else:
            db.add(User(email=email, password_hash=hash_password(password), role="admin"))
            print(f"✅ Created admin account {email}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
