# app/routers/admin.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.models.admin import Admin
from app.repositories.admin_repo import AdminRepository
from app.schemas.admin import AdminRead, AdminStatus, LoginRequest, SeedResult, TokenRead
from app.schemas.common import ApiResponse
from app.services.admin_service import AdminService, SeedError

router = APIRouter(tags=["Admin"])

repo = AdminRepository()
service = AdminService(repo)


# -------- Bootstrap / diagnostics --------


@router.get(
    "/check-admin",
    response_model=ApiResponse[AdminStatus],
    response_model_exclude_none=True,
)
def check_admin(session: Session = Depends(get_session)):
    """
    Diagnostic: does an admin user exist?
    """
    admin_status = service.check_admin(session)
    if admin_status.exists:
        message = "Admin exists. Try logging in with this email."
    else:
        message = "No admin user found! Visit /api/seed to create one."
    return ApiResponse(data=admin_status, message=message)


@router.get(
    "/seed",
    response_model=ApiResponse[SeedResult],
    response_model_exclude_none=True,
)
def seed_admin(session: Session = Depends(get_session)):
    """
    Create the admin user from ADMIN_EMAIL / ADMIN_PASSWORD.

    Only works once: when an admin already exists nothing is changed and
    `success` is false.
    """
    try:
        created, result = service.seed_admin(session)
    except SeedError as e:
        body = ApiResponse[SeedResult](success=False, error=str(e), data=e.result)
        return JSONResponse(
            status_code=500,
            content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    if not created:
        return ApiResponse(
            success=False,
            data=result,
            message="Admin user already exists. Login with existing credentials.",
        )
    return ApiResponse(data=result, message="Admin user created successfully!")


# -------- Session --------


@router.post(
    "/auth/login",
    response_model=ApiResponse[TokenRead],
    response_model_exclude_none=True,
)
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
):
    """
    Exchange admin email/password for a bearer token.
    """
    token = service.authenticate(session, payload.email, payload.password)
    return ApiResponse(data=token, message="Login successful")


@router.get(
    "/auth/session",
    response_model=ApiResponse[AdminRead],
    response_model_exclude_none=True,
)
def read_session(admin: Admin = Depends(require_admin)):
    """
    Return the admin behind the current token (401 when anonymous).
    """
    return ApiResponse(data=AdminRead.model_validate(admin))
