# app/routers/categories.py
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.schemas.common import ApiResponse
from app.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])

repo = CategoryRepository()
service = CategoryService(repo, ProductRepository())


# -------- Public endpoints --------


@router.get(
    "",
    response_model=ApiResponse[list[CategoryRead]],
    response_model_exclude_none=True,
)
def list_categories(
    session: Session = Depends(get_session),
    include_inactive: bool = Query(False, alias="includeInactive"),
):
    """
    List active categories, ordered by displayOrder then name.
    """
    return ApiResponse(data=service.list_categories(session, include_inactive))


@router.get(
    "/{category_id}",
    response_model=ApiResponse[CategoryRead],
    response_model_exclude_none=True,
)
def get_category(
    category_id: str,
    session: Session = Depends(get_session),
):
    return ApiResponse(data=service.get_category(session, category_id))


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=ApiResponse[CategoryRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_category(
    payload: CategoryCreate,
    session: Session = Depends(get_session),
):
    """
    Create a category (admin only). The slug is derived from the name
    when omitted.
    """
    return ApiResponse(
        data=service.create_category(session, payload),
        message="Category created successfully",
    )


@router.put(
    "/{category_id}",
    response_model=ApiResponse[CategoryRead],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    session: Session = Depends(get_session),
):
    """
    Update a category (admin only). Renames propagate to products.
    """
    return ApiResponse(
        data=service.update_category(session, category_id, payload),
        message="Category updated successfully",
    )


@router.delete(
    "/{category_id}",
    response_model=ApiResponse[dict],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
def delete_category(
    category_id: str,
    session: Session = Depends(get_session),
):
    service.delete_category(session, category_id)
    return ApiResponse(message="Category deleted successfully")
