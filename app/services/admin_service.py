# app/services/admin_service.py
import logging

from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.auth import create_access_token, hash_password, verify_password
from app.core.config import get_settings
from app.core.errors import persistence_guard
from app.models.admin import Admin
from app.repositories.admin_repo import AdminRepository
from app.schemas.admin import AdminCreate, AdminRead, AdminStatus, SeedResult, TokenRead

logger = logging.getLogger(__name__)


class SeedError(Exception):
    """Bootstrap failed; carries the diagnostics returned to the caller."""

    def __init__(self, message: str, result: SeedResult):
        super().__init__(message)
        self.result = result


def _database_name(session: Session) -> str | None:
    bind = session.get_bind()
    return bind.url.database


class AdminService:
    """
    Admin bootstrap and credential login.

    There is exactly one way to get an admin: the seed operation, which
    only works while the admins table is empty.
    """

    def __init__(self, repo: AdminRepository):
        self.repo = repo

    def check_admin(self, session: Session) -> AdminStatus:
        """Diagnostic: does any admin exist yet?"""
        with persistence_guard(session, "Failed to check admin"):
            admin = self.repo.first(session)
        if admin is None:
            return AdminStatus(exists=False)
        return AdminStatus(exists=True, email=admin.email, name=admin.name)

    def seed_admin(self, session: Session) -> tuple[bool, SeedResult]:
        """
        Create the bootstrap admin from settings.

        Returns:
            (created, result). created is False when an admin already
            exists; nothing is changed in that case.

        Raises:
            SeedError: invalid bootstrap credentials or database failure.
        """
        settings = get_settings()
        db_name = None
        try:
            db_name = _database_name(session)
            existing = self.repo.first(session)
            if existing is not None:
                logger.info(f"Seed skipped, admin already exists: {existing.email}")
                return False, SeedResult(
                    email=existing.email,
                    db_status="connected",
                    db_name=db_name,
                )

            data = AdminCreate(
                email=settings.ADMIN_EMAIL,
                password=settings.ADMIN_PASSWORD,
                name=settings.ADMIN_NAME,
            )
            admin = Admin(
                email=data.email,
                password_hash=hash_password(data.password),
                name=data.name,
            )
            admin = self.repo.create(session, admin)
        except ValidationError as e:
            raise SeedError(
                f"Invalid bootstrap admin settings: {e.error_count()} error(s)",
                SeedResult(
                    db_status="connected",
                    db_name=db_name,
                    hint="Check ADMIN_EMAIL / ADMIN_PASSWORD (min 8 characters)",
                ),
            ) from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Seeding admin failed")
            raise SeedError(
                "Failed to seed admin",
                SeedResult(
                    db_status="disconnected",
                    db_name=db_name,
                    hint="Check DATABASE_URL and that the database is reachable",
                ),
            ) from e

        logger.info(f"Admin user created: {admin.email}")
        return True, SeedResult(
            email=admin.email,
            db_status="connected",
            db_name=db_name,
            hint="Now login at /admin/login with your credentials",
        )

    def authenticate(
        self,
        session: Session,
        email: str | None,
        password: str | None,
    ) -> TokenRead:
        """
        Exchange credentials for an access token.

        Raises:
            HTTPException(400): email or password missing.
            HTTPException(401): unknown email or wrong password.
        """
        if not email or not password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Please enter email and password",
            )

        with persistence_guard(session, "Failed to login"):
            admin = self.repo.get_by_email(session, email.strip().lower())

        if admin is None or not verify_password(password, admin.password_hash):
            logger.info("Login failed for %s", email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        settings = get_settings()
        logger.info(f"Admin logged in: {admin.email}")
        return TokenRead(
            access_token=create_access_token(admin.id, admin.email),
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            admin=AdminRead.model_validate(admin),
        )
