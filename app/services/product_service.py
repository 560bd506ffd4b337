# app/services/product_service.py
import logging
import math
from datetime import datetime, timezone

from fastapi import HTTPException, status
from pydantic.alias_generators import to_camel
from sqlmodel import Session

from app.core.config import get_settings
from app.core.errors import persistence_guard
from app.core.price_utils import price_bounds
from app.core.slug_utils import generate_slug
from app.models.product import PriceSlab, Product
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import (
    DEFAULT_SORT,
    SORT_KEYS,
    CatalogFilter,
    ProductRepository,
)
from app.schemas.common import Pagination
from app.schemas.product import (
    PriceSlabIn,
    PriceSlabRead,
    ProductCreate,
    ProductRead,
    ProductUpdate,
    SeoData,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
SEO_DESCRIPTION_LENGTH = 160
ALL_CATEGORIES = "all"

REQUIRED_PRODUCT_FIELDS = (
    "name",
    "slug",
    "category",
    "description",
    "pricing_type",
    "prices",
)

# Fields that must stay non-blank once set
REQUIRED_TEXT_FIELDS = ("name", "category", "description", "image")

# Fields an update may clear by sending null
CLEARABLE_FIELDS = (
    "short_description",
    "images",
    "origin",
    "aroma",
    "texture",
    "usage_tips",
)

# Fields an update only overwrites with a real value
OVERWRITE_FIELDS = (
    "name",
    "category",
    "description",
    "image",
    "pricing_type",
    "featured",
    "is_active",
)


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _is_positive(value: float | None) -> bool:
    # NaN and Infinity are valid JSON floats for the parser
    return value is not None and math.isfinite(value) and value > 0


def _price_problem(prices: list[PriceSlabIn] | None) -> str | None:
    """Describe what is wrong with a slab list, or None when it is valid."""
    if not prices:
        return "prices (at least one price slab is required)"
    if not all(_is_positive(slab.price) for slab in prices):
        return "prices (all price slabs must have a price greater than 0)"
    if not all(_is_positive(slab.quantity) for slab in prices):
        return "prices (all price slabs must have a quantity greater than 0)"
    return None


def build_slabs(prices: list[PriceSlabIn]) -> list[PriceSlab]:
    """
    Turn client slabs into fresh PriceSlab rows.

    Only quantity / unit / price survive; ids are always regenerated and
    the client order is kept in `position`.
    """
    return [
        PriceSlab(
            position=index,
            quantity=slab.quantity,
            unit=slab.unit.strip() if slab.unit else None,
            price=slab.price,
        )
        for index, slab in enumerate(prices)
    ]


def to_product_read(product: Product) -> ProductRead:
    """Map a Product row (with its slabs) to the API representation."""
    low, high = price_bounds(product.prices)
    return ProductRead(
        id=product.id,
        name=product.name,
        slug=product.slug,
        category=product.category,
        description=product.description,
        short_description=product.short_description,
        image=product.image,
        images=product.images,
        pricing_type=product.pricing_type,
        prices=[PriceSlabRead.model_validate(slab) for slab in product.prices],
        min_price=low,
        max_price=high,
        origin=product.origin,
        aroma=product.aroma,
        texture=product.texture,
        usage_tips=product.usage_tips,
        seo=SeoData(
            title=product.seo_title,
            description=product.seo_description,
            keywords=product.seo_keywords,
        ),
        featured=product.featured,
        is_active=product.is_active,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


class ProductService:
    """
    Business logic for the product catalog.

    Responsibilities:
      - catalog listing (category slug resolution, sort, pagination)
      - required-field validation, reported as one combined message
      - slug normalization & uniqueness
      - price slab rewriting on create/update
      - admin-only operations (enforced at router via require_admin)
    """

    def __init__(self, repo: ProductRepository, category_repo: CategoryRepository):
        self.repo = repo
        self.category_repo = category_repo

    # ----- Helpers -----

    @staticmethod
    def _collect_missing(payload: ProductCreate) -> list[str]:
        """
        Check every required field and return all the problems found,
        using the client's field names.
        """
        missing: list[str] = []
        for field in REQUIRED_PRODUCT_FIELDS:
            value = getattr(payload, field)
            if field == "category":
                if _is_blank(value):
                    missing.append("category (please create a category first)")
            elif field == "prices":
                problem = _price_problem(value)
                if problem:
                    missing.append(problem)
            elif field == "slug":
                if _is_blank(value) or not generate_slug(value):
                    missing.append("slug")
            elif _is_blank(value):
                missing.append(to_camel(field))
        return missing

    @staticmethod
    def _collect_update_problems(payload: ProductUpdate) -> list[str]:
        sent = payload.model_fields_set
        problems: list[str] = []
        for field in REQUIRED_TEXT_FIELDS:
            if field in sent and _is_blank(getattr(payload, field)):
                problems.append(f"{to_camel(field)} cannot be empty")
        if "slug" in sent and (_is_blank(payload.slug) or not generate_slug(payload.slug)):
            problems.append("slug cannot be empty")
        if "prices" in sent:
            problem = _price_problem(payload.prices)
            if problem:
                problems.append(problem)
        return problems

    def _resolve_category_name(self, session: Session, category_slug: str | None) -> str | None:
        """
        Map a category slug to the name stored on products.

        'all', a missing slug, or a slug with no active category all mean
        "no category filter".
        """
        if not category_slug or category_slug == ALL_CATEGORIES:
            return None
        category = self.category_repo.get_active_by_slug(session, category_slug)
        if category is None:
            logger.debug(f"Unknown category slug '{category_slug}', listing all products")
            return None
        return category.name

    def _get_product_row(
        self,
        session: Session,
        slug: str,
        include_inactive: bool = True,
    ) -> Product:
        with persistence_guard(session, "Failed to fetch product"):
            product = self.repo.get_by_slug(session, slug, only_active=not include_inactive)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    # ----- Queries -----

    def list_products(
        self,
        session: Session,
        category: str | None = None,
        featured: bool = False,
        sort: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        include_inactive: bool = False,
    ) -> tuple[list[ProductRead], Pagination]:
        with persistence_guard(session, "Failed to fetch products"):
            catalog = CatalogFilter(
                category_name=self._resolve_category_name(session, category),
                featured_only=featured,
                include_inactive=include_inactive,
                sort=sort if sort in SORT_KEYS else DEFAULT_SORT,
            )
            skip = (page - 1) * limit
            products = self.repo.list_catalog(session, catalog, skip=skip, limit=limit)
            total = self.repo.count_catalog(session, catalog)

        pagination = Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        )
        return [to_product_read(p) for p in products], pagination

    def get_product(
        self,
        session: Session,
        slug: str,
        include_inactive: bool = False,
    ) -> ProductRead:
        product = self._get_product_row(session, slug, include_inactive=include_inactive)
        return to_product_read(product)

    def related_products(
        self,
        session: Session,
        slug: str,
        limit: int = 4,
    ) -> list[ProductRead]:
        """Active products from the same category, excluding `slug`."""
        product = self._get_product_row(session, slug, include_inactive=False)
        with persistence_guard(session, "Failed to fetch products"):
            related = self.repo.list_related(session, product.category, product.slug, limit=limit)
        return [to_product_read(p) for p in related]

    # ----- Mutations -----

    def create_product(self, session: Session, payload: ProductCreate) -> ProductRead:
        """
        Create a new product.

        - All missing/invalid required fields are reported together (400).
        - slug must be supplied; it is normalized, never derived from name.
        - duplicate slug => 400, existing product untouched.
        - image / seo fall back to defaults.
        """
        missing = self._collect_missing(payload)
        if missing:
            logger.info(f"Product creation rejected, missing fields: {missing}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Missing required fields: {', '.join(missing)}",
            )

        slug = generate_slug(payload.slug)
        with persistence_guard(session, "Failed to create product"):
            duplicate = self.repo.get_by_slug(session, slug)
        if duplicate:
            logger.info(f"Product creation rejected, duplicate slug: {slug}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A product with this slug already exists",
            )

        settings = get_settings()
        name = payload.name.strip()
        seo = payload.seo or SeoData(
            title=f"{name} | {settings.BRAND_NAME}",
            description=payload.description[:SEO_DESCRIPTION_LENGTH],
        )

        product = Product(
            name=name,
            slug=slug,
            category=payload.category.strip(),
            description=payload.description,
            short_description=payload.short_description,
            image=payload.image or settings.DEFAULT_PRODUCT_IMAGE,
            images=payload.images,
            pricing_type=payload.pricing_type,
            prices=build_slabs(payload.prices),
            origin=payload.origin,
            aroma=payload.aroma,
            texture=payload.texture,
            usage_tips=payload.usage_tips,
            seo_title=seo.title,
            seo_description=seo.description,
            seo_keywords=seo.keywords,
            featured=payload.featured,
            is_active=payload.is_active,
        )

        with persistence_guard(session, "Failed to create product"):
            product = self.repo.create(session, product)

        logger.info(f"Product created: {product.name} / {product.slug}")
        return to_product_read(product)

    def update_product(
        self,
        session: Session,
        slug: str,
        payload: ProductUpdate,
    ) -> ProductRead:
        """
        Partial update of a product.

        - 404 when the slug is unknown.
        - If slug is changed, it must not belong to another product.
        - Supplied prices replace the whole slab list (fresh ids).
        """
        product = self._get_product_row(session, slug)

        problems = self._collect_update_problems(payload)
        if problems:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Validation failed: {', '.join(problems)}",
            )

        if payload.slug is not None:
            new_slug = generate_slug(payload.slug)
            if new_slug != product.slug:
                with persistence_guard(session, "Failed to update product"):
                    duplicate = self.repo.get_by_slug(session, new_slug)
                if duplicate:
                    raise HTTPException(
                        status_code=status.HTTP_400_BAD_REQUEST,
                        detail="A product with this slug already exists",
                    )
                product.slug = new_slug

        for field in OVERWRITE_FIELDS:
            value = getattr(payload, field)
            if value is not None:
                setattr(product, field, value.strip() if isinstance(value, str) else value)

        for field in CLEARABLE_FIELDS:
            if field in payload.model_fields_set:
                setattr(product, field, getattr(payload, field))

        if payload.seo is not None:
            product.seo_title = payload.seo.title
            product.seo_description = payload.seo.description
            product.seo_keywords = payload.seo.keywords

        if payload.prices is not None:
            product.prices = build_slabs(payload.prices)

        product.updated_at = datetime.now(timezone.utc)

        with persistence_guard(session, "Failed to update product"):
            product = self.repo.update(session, product)

        logger.info(f"Product updated: {product.slug}")
        return to_product_read(product)

    def delete_product(self, session: Session, slug: str) -> None:
        """Delete a product together with its price slabs."""
        product = self._get_product_row(session, slug)
        with persistence_guard(session, "Failed to delete product"):
            self.repo.delete(session, product)
        logger.info(f"Product deleted: {slug}")
