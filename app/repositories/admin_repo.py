# app/repositories/admin_repo.py
from sqlmodel import Session, select

from app.models.admin import Admin


class AdminRepository:
    """
    Data access layer for Admin.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def first(self, session: Session) -> Admin | None:
        """Return any admin row, or None when the table is empty."""
        return session.exec(select(Admin)).first()

    def get_by_email(self, session: Session, email: str) -> Admin | None:
        """Return an Admin by unique email, or None if not found."""
        stmt = select(Admin).where(Admin.email == email)
        return session.exec(stmt).first()

    def create(self, session: Session, admin: Admin) -> Admin:
        """Insert a new Admin and return the persisted row."""
        session.add(admin)
        session.commit()
        session.refresh(admin)
        return admin
