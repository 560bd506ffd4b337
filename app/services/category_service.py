# app/services/category_service.py
import logging
import uuid
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.errors import persistence_guard
from app.core.slug_utils import generate_slug
from app.models.category import Category
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate

logger = logging.getLogger(__name__)

DUPLICATE_CATEGORY = "A category with this name already exists"


class CategoryService:
    """
    Business logic for categories.

    Responsibilities:
      - slug derivation from name when omitted
      - name/slug uniqueness
      - keeping products' category names in sync on rename
    """

    def __init__(self, repo: CategoryRepository, product_repo: ProductRepository):
        self.repo = repo
        self.product_repo = product_repo

    # ----- Helpers -----

    def _get_category_row(self, session: Session, category_id: str) -> Category:
        """
        Load a category by id; malformed ids are reported as not found.
        """
        try:
            parsed = uuid.UUID(category_id)
        except ValueError:
            parsed = None

        category = None
        if parsed is not None:
            with persistence_guard(session, "Failed to fetch category"):
                category = self.repo.get_by_id(session, parsed)

        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found",
            )
        return category

    # ----- Queries -----

    def list_categories(
        self,
        session: Session,
        include_inactive: bool = False,
    ) -> list[CategoryRead]:
        """Categories ordered by display_order, then name."""
        with persistence_guard(session, "Failed to fetch categories"):
            categories = self.repo.list_categories(session, only_active=not include_inactive)
        return [CategoryRead.model_validate(c) for c in categories]

    def get_category(self, session: Session, category_id: str) -> CategoryRead:
        return CategoryRead.model_validate(self._get_category_row(session, category_id))

    # ----- Mutations -----

    def create_category(self, session: Session, payload: CategoryCreate) -> CategoryRead:
        """
        Create a category.

        - name is required.
        - slug defaults to generate_slug(name).
        - name or slug already taken => 400.
        """
        name = payload.name.strip() if payload.name else ""
        if not name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category name is required",
            )

        slug = generate_slug(payload.slug or name)
        if not slug:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category slug cannot be empty",
            )

        with persistence_guard(session, "Failed to create category"):
            conflict = self.repo.find_conflict(session, name=name, slug=slug)
        if conflict:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=DUPLICATE_CATEGORY,
            )

        category = Category(
            name=name,
            slug=slug,
            description=payload.description,
            image=payload.image,
            display_order=payload.display_order,
            is_active=payload.is_active,
        )
        with persistence_guard(session, "Failed to create category"):
            category = self.repo.create(session, category)

        logger.info(f"Category created: {category.name} / {category.slug}")
        return CategoryRead.model_validate(category)

    def update_category(
        self,
        session: Session,
        category_id: str,
        payload: CategoryUpdate,
    ) -> CategoryRead:
        """
        Partial update of a category.

        Renaming also rewrites `category` on every product that carried
        the old name, in the same commit.
        """
        category = self._get_category_row(session, category_id)
        sent = payload.model_fields_set

        new_name = None
        if payload.name is not None:
            new_name = payload.name.strip()
            if not new_name:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Category name is required",
                )

        new_slug = None
        if payload.slug is not None:
            new_slug = generate_slug(payload.slug)
            if not new_slug:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Category slug cannot be empty",
                )

        with persistence_guard(session, "Failed to update category"):
            conflict = self.repo.find_conflict(
                session,
                name=new_name,
                slug=new_slug,
                exclude_id=category.id,
            )
        if conflict:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=DUPLICATE_CATEGORY,
            )

        old_name = category.name
        if new_name is not None:
            category.name = new_name
        if new_slug is not None:
            category.slug = new_slug
        if payload.display_order is not None:
            category.display_order = payload.display_order
        if payload.is_active is not None:
            category.is_active = payload.is_active
        for field in ("description", "image"):
            if field in sent:
                setattr(category, field, getattr(payload, field))
        category.updated_at = datetime.now(timezone.utc)

        with persistence_guard(session, "Failed to update category"):
            if category.name != old_name:
                products = self.product_repo.list_by_category(session, old_name)
                for product in products:
                    product.category = category.name
                    session.add(product)
                logger.info(
                    f"Category renamed '{old_name}' -> '{category.name}', "
                    f"{len(products)} product(s) moved"
                )
            category = self.repo.update(session, category)

        return CategoryRead.model_validate(category)

    def delete_category(self, session: Session, category_id: str) -> None:
        """
        Delete a category. Products keep their category name.
        """
        category = self._get_category_row(session, category_id)
        name = category.name
        with persistence_guard(session, "Failed to delete category"):
            self.repo.delete(session, category)
        logger.info(f"Category deleted: {name}")
