# app/routers/storefront.py
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlmodel import Session

from app.database import get_session
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.common import ApiResponse
from app.schemas.storefront import ProductPage
from app.services.product_service import ProductService
from app.services.storefront_service import StorefrontService

router = APIRouter(tags=["Storefront"])

repo = ProductRepository()
service = StorefrontService(ProductService(repo, CategoryRepository()), repo)


@router.get(
    "/storefront/products/{slug}",
    response_model=ApiResponse[ProductPage],
    response_model_exclude_none=True,
)
def product_page(slug: str, session: Session = Depends(get_session)):
    """
    Data for the product detail page: product, size options, related
    products and JSON-LD. Inactive products are 404.
    """
    return ApiResponse(data=service.product_page(session, slug))


# Mounted without the API prefix (see app.main)
sitemap_router = APIRouter(tags=["Storefront"])


@sitemap_router.get("/sitemap.xml", response_class=Response)
def sitemap(session: Session = Depends(get_session)):
    """XML sitemap: static pages plus every active product."""
    return Response(content=service.sitemap(session), media_type="application/xml")
