# seed_admin.py
"""
Create the bootstrap admin user from settings.

    ADMIN_EMAIL=... ADMIN_PASSWORD=... python seed_admin.py

Does nothing when an admin already exists.
"""
import sys

from sqlmodel import Session

from app.database import create_db_and_tables, get_engine
from app.repositories.admin_repo import AdminRepository
from app.services.admin_service import AdminService, SeedError


def main() -> int:
    print("Seeding admin user...")
    create_db_and_tables()

    service = AdminService(AdminRepository())
    with Session(get_engine()) as session:
        try:
            created, result = service.seed_admin(session)
        except SeedError as e:
            print(f"Error seeding admin: {e}")
            if e.result.hint:
                print(f"Hint: {e.result.hint}")
            return 1

    if created:
        print("Admin user created successfully")
        print(f"Email: {result.email}")
        print("Password: (as provided in env or default)")
    else:
        print(f"Admin user already exists: {result.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
