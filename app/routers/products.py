# app/routers/products.py
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.common import ApiResponse
from app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from app.services.product_service import DEFAULT_PAGE_SIZE, ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo, CategoryRepository())


# -------- Public endpoints --------


@router.get(
    "",
    response_model=ApiResponse[list[ProductRead]],
    response_model_exclude_none=True,
)
def list_products(
    session: Session = Depends(get_session),
    category: str | None = None,
    featured: bool = False,
    sort: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    include_inactive: bool = Query(False, alias="includeInactive"),
):
    """
    List products.

    - Public endpoint.
    - `category`: category *slug*; 'all' or an unknown slug means no filter.
    - `featured=true` keeps featured products only.
    - `sort`: featured (default) | newest | price-asc | price-desc.
    - `includeInactive=true` also lists hidden products (admin screens).
    """
    products, pagination = service.list_products(
        session,
        category=category,
        featured=featured,
        sort=sort,
        page=page,
        limit=limit,
        include_inactive=include_inactive,
    )
    return ApiResponse(data=products, pagination=pagination)


@router.get(
    "/{slug}",
    response_model=ApiResponse[ProductRead],
    response_model_exclude_none=True,
)
def get_product(
    slug: str,
    session: Session = Depends(get_session),
    include_inactive: bool = Query(False, alias="includeInactive"),
):
    """
    Get a single product by slug.

    - Public endpoint; inactive products only with `includeInactive=true`.
    """
    return ApiResponse(data=service.get_product(session, slug, include_inactive))


@router.get(
    "/{slug}/related",
    response_model=ApiResponse[list[ProductRead]],
    response_model_exclude_none=True,
)
def list_related_products(
    slug: str,
    session: Session = Depends(get_session),
    limit: int = Query(4, ge=1, le=20),
):
    """
    Other active products from the same category (public).
    """
    return ApiResponse(data=service.related_products(session, slug, limit=limit))


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=ApiResponse[ProductRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
):
    """
    Create a new product (admin only).
    """
    return ApiResponse(
        data=service.create_product(session, payload),
        message="Product created successfully",
    )


@router.put(
    "/{slug}",
    response_model=ApiResponse[ProductRead],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
def update_product(
    slug: str,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    """
    Update an existing product (admin only).
    """
    return ApiResponse(
        data=service.update_product(session, slug, payload),
        message="Product updated successfully",
    )


@router.delete(
    "/{slug}",
    response_model=ApiResponse[dict],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    slug: str,
    session: Session = Depends(get_session),
):
    """
    Delete a product and its price slabs (admin only).
    """
    service.delete_product(session, slug)
    return ApiResponse(message="Product deleted successfully")
