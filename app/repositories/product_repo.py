# app/repositories/product_repo.py
from dataclasses import dataclass

from sqlalchemy import func
from sqlmodel import Session, col, select

from app.models.product import PriceSlab, Product

DEFAULT_SORT = "featured"
SORT_KEYS = ("featured", "newest", "price-asc", "price-desc")


@dataclass
class CatalogFilter:
    """
    What the storefront asked for, after category slug resolution.

    category_name is the resolved Category.name (None = no category filter).
    """

    category_name: str | None = None
    featured_only: bool = False
    include_inactive: bool = False
    sort: str = DEFAULT_SORT


def _first_slab_price():
    """Price of the slab at position 0, correlated to the outer Product."""
    return (
        select(PriceSlab.price)
        .where(PriceSlab.product_id == Product.id, PriceSlab.position == 0)
        .correlate(Product)
        .scalar_subquery()
    )


def catalog_conditions(catalog: CatalogFilter) -> list:
    """WHERE clauses for a catalog query."""
    conditions = []
    if not catalog.include_inactive:
        conditions.append(col(Product.is_active) == True)  # noqa: E712
    if catalog.category_name is not None:
        conditions.append(col(Product.category) == catalog.category_name)
    if catalog.featured_only:
        conditions.append(col(Product.featured) == True)  # noqa: E712
    return conditions


def catalog_ordering(sort: str | None) -> list:
    """
    ORDER BY clauses for a sort key.

      featured (default)  -> featured desc, newest first
      newest              -> newest first
      price-asc / -desc   -> price of the first slab, newest as tie-break

    Unknown keys fall back to the default.
    """
    newest = col(Product.created_at).desc()
    if sort == "newest":
        return [newest]
    if sort == "price-asc":
        return [_first_slab_price().asc(), newest]
    if sort == "price-desc":
        return [_first_slab_price().desc(), newest]
    return [col(Product.featured).desc(), newest]


class ProductRepository:
    """
    Data access layer for Product & PriceSlab.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    # ----- Products -----

    def get_by_slug(
        self,
        session: Session,
        slug: str,
        only_active: bool = False,
    ) -> Product | None:
        stmt = select(Product).where(Product.slug == slug)
        if only_active:
            stmt = stmt.where(Product.is_active == True)  # noqa: E712
        return session.exec(stmt).first()

    def list_catalog(
        self,
        session: Session,
        catalog: CatalogFilter,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Product]:
        stmt = (
            select(Product)
            .where(*catalog_conditions(catalog))
            .order_by(*catalog_ordering(catalog.sort))
            .offset(skip)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(session.exec(stmt).all())

    def count_catalog(self, session: Session, catalog: CatalogFilter) -> int:
        stmt = (
            select(func.count())
            .select_from(Product)
            .where(*catalog_conditions(catalog))
        )
        return session.exec(stmt).one()

    def list_related(
        self,
        session: Session,
        category: str,
        exclude_slug: str,
        limit: int = 4,
    ) -> list[Product]:
        stmt = (
            select(Product)
            .where(
                Product.category == category,
                Product.slug != exclude_slug,
                Product.is_active == True,  # noqa: E712
            )
            .order_by(col(Product.featured).desc(), col(Product.created_at).desc())
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def list_by_category(self, session: Session, category: str) -> list[Product]:
        stmt = select(Product).where(Product.category == category)
        return list(session.exec(stmt).all())

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def delete(self, session: Session, product: Product) -> None:
        # price slabs go with it (delete-orphan cascade)
        session.delete(product)
        session.commit()
