"""
Test fixtures - in-memory SQLite database + FastAPI test clients
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.auth import create_access_token, hash_password
from app.database import get_session
from app.main import app
from app.models.admin import Admin
from app.models.category import Category
from app.models.product import PriceSlab, Product

ADMIN_EMAIL = "admin@test.com"
ADMIN_PASSWORD = "testpass123"


@pytest.fixture()
def session():
    """Fresh in-memory SQLite database for each test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        yield session

    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def client(session):
    """Anonymous TestClient bound to the test database"""

    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def admin(session):
    admin = Admin(
        email=ADMIN_EMAIL,
        password_hash=hash_password(ADMIN_PASSWORD),
        name="Test Admin",
    )
    session.add(admin)
    session.commit()
    session.refresh(admin)
    return admin


@pytest.fixture()
def auth_headers(admin):
    token = create_access_token(admin.id, admin.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_category(session):
    def _make(name, slug=None, display_order=0, is_active=True):
        category = Category(
            name=name,
            slug=slug or name.lower().replace(" ", "-"),
            display_order=display_order,
            is_active=is_active,
        )
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    return _make


@pytest.fixture()
def make_product(session):
    """
    Insert a product directly. `prices` is a list of (quantity, unit, price);
    `age_minutes` pushes created_at into the past to control "newest".
    """
    base_time = datetime.now(timezone.utc)

    def _make(
        slug,
        category="Saffron",
        prices=((1, "g", 500),),
        featured=False,
        is_active=True,
        age_minutes=0,
        name=None,
    ):
        created = base_time - timedelta(minutes=age_minutes)
        product = Product(
            name=name or slug.replace("-", " ").title(),
            slug=slug,
            category=category,
            description=f"Description of {slug}",
            image="https://img.test/p.jpg",
            pricing_type="WEIGHT",
            seo_title=slug,
            seo_description=slug,
            featured=featured,
            is_active=is_active,
            created_at=created,
            updated_at=created,
            prices=[
                PriceSlab(position=i, quantity=q, unit=u, price=p)
                for i, (q, u, p) in enumerate(prices)
            ],
        )
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make


@pytest.fixture()
def product_payload():
    return {
        "name": "Kashmiri Saffron",
        "slug": "kashmiri-saffron",
        "category": "Saffron",
        "description": "Hand-picked Mongra saffron threads from Pampore.",
        "pricingType": "WEIGHT",
        "prices": [
            {"quantity": 1, "unit": "g", "price": 500},
            {"quantity": 5, "unit": "g", "price": 2200},
        ],
    }
