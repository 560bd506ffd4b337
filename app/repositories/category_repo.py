# app/repositories/category_repo.py
import uuid

from sqlmodel import Session, col, or_, select

from app.models.category import Category


class CategoryRepository:
    """
    Data access layer for Category.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, category_id: uuid.UUID) -> Category | None:
        return session.get(Category, category_id)

    def get_active_by_slug(self, session: Session, slug: str) -> Category | None:
        stmt = select(Category).where(
            Category.slug == slug,
            Category.is_active == True,  # noqa: E712
        )
        return session.exec(stmt).first()

    def find_conflict(
        self,
        session: Session,
        name: str | None,
        slug: str | None,
        exclude_id: uuid.UUID | None = None,
    ) -> Category | None:
        """
        Return another category already using `name` or `slug`.
        """
        clauses = []
        if name is not None:
            clauses.append(Category.name == name)
        if slug is not None:
            clauses.append(Category.slug == slug)
        if not clauses:
            return None

        stmt = select(Category).where(or_(*clauses))
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        return session.exec(stmt).first()

    def list_categories(
        self,
        session: Session,
        only_active: bool = True,
    ) -> list[Category]:
        stmt = select(Category)
        if only_active:
            stmt = stmt.where(Category.is_active == True)  # noqa: E712
        stmt = stmt.order_by(col(Category.display_order), col(Category.name))
        return list(session.exec(stmt).all())

    def create(self, session: Session, category: Category) -> Category:
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    def update(self, session: Session, category: Category) -> Category:
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    def delete(self, session: Session, category: Category) -> None:
        session.delete(category)
        session.commit()
