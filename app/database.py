# app/database.py
import logging
from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from app.core.config import get_settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# One engine (and therefore one connection pool) per process.
#
# - created lazily on first use, cached by lru_cache
# - never torn down explicitly; the pool lives as long as the server
# - pool_pre_ping=True: validate connections before using them
# - Postgres URLs get sslmode=require appended when missing
# ---------------------------------------------------------


def _normalize_url(db_url: str) -> str:
    """Append sslmode=require to Postgres URLs that do not set it."""
    if not db_url.startswith("postgres"):
        return db_url
    if "sslmode=" in db_url:
        return db_url
    separator = "&" if "?" in db_url else "?"
    return f"{db_url}{separator}sslmode=require"


@lru_cache
def get_engine() -> Engine:
    """
    Create the shared engine on first call and reuse it afterwards.
    """
    settings = get_settings()
    db_url = _normalize_url(settings.DATABASE_URL)

    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        # FastAPI serves sync endpoints from a threadpool
        connect_args["check_same_thread"] = False

    engine = create_engine(
        db_url,
        echo=False,  # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    logger.info(
        "Database engine created for %s",
        engine.url.render_as_string(hide_password=True),
    )
    return engine


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(get_engine())


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(get_engine()) as session:
        yield session
