# app/core/auth.py
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.models.admin import Admin

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header does not raise inside
#   FastAPI's security layer, so we answer with our own 401 message.
bearer_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED = "Unauthorized - Please login to admin dashboard"


def hash_password(password: str) -> str:
    """Hash a plaintext password with bcrypt (cost 12)."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12)).decode(
        "utf-8"
    )


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed hash in storage
        return False


def create_access_token(admin_id: uuid.UUID, email: str) -> str:
    """
    Issue a signed admin access token.

    Claims:
      - sub: admin id
      - email
      - exp: now + ACCESS_TOKEN_EXPIRE_MINUTES
    """
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    claims = {"sub": str(admin_id), "email": email, "exp": expire}
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an admin access token (JWT).

    Verification:
      - signature (JWT_SECRET / JWT_ALG)
      - expiration time (exp)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    settings = get_settings()
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> Admin | None:
    """
    Resolve the admin behind the bearer token.

    Flow:
      1. No Authorization header => anonymous => None.
      2. Decode JWT => 'sub' (admin id).
      3. Load the admin row; a token for a deleted admin is rejected.

    Raises:
        HTTPException(401): malformed, expired or orphaned token.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")

    try:
        admin_id = uuid.UUID(str(sub))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    admin = session.get(Admin, admin_id)
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED,
        )
    return admin


def require_admin(admin: Admin | None = Depends(get_current_admin)) -> Admin:
    """
    Route guard for every mutating endpoint.

    Attached via `dependencies=[Depends(require_admin)]`, so anonymous
    callers get 401 before the payload is validated or anything is written.
    """
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED,
        )
    return admin
