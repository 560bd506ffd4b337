# app/services/storefront_service.py
from xml.sax.saxutils import escape

from sqlmodel import Session

from app.core.config import get_settings
from app.core.errors import persistence_guard
from app.core.price_utils import CURRENCY_CODE, format_price_range, get_unit_label
from app.repositories.product_repo import CatalogFilter, ProductRepository
from app.schemas.product import ProductRead
from app.schemas.storefront import ProductPage, SlabOption
from app.services.product_service import ProductService

# path, changefreq, priority
STATIC_PAGES = (
    ("", "weekly", 1.0),
    ("/products", "daily", 0.9),
    ("/about", "monthly", 0.7),
    ("/contact", "monthly", 0.7),
)


def product_json_ld(product: ProductRead, brand: str) -> dict:
    """schema.org Product markup for a product detail page."""
    return {
        "@context": "https://schema.org",
        "@type": "Product",
        "name": product.name,
        "description": product.description,
        "image": product.image,
        "brand": {"@type": "Brand", "name": brand},
        "offers": {
            "@type": "AggregateOffer",
            "priceCurrency": CURRENCY_CODE,
            "lowPrice": product.min_price,
            "highPrice": product.max_price,
            "offerCount": len(product.prices),
        },
    }


class StorefrontService:
    """
    Read-only payloads for the public storefront pages.
    """

    def __init__(self, product_service: ProductService, repo: ProductRepository):
        self.product_service = product_service
        self.repo = repo

    def product_page(self, session: Session, slug: str) -> ProductPage:
        """
        Everything the product detail page renders: the product, its
        purchasable sizes, up to 4 related products and JSON-LD.
        """
        settings = get_settings()
        product = self.product_service.get_product(session, slug)
        related = self.product_service.related_products(session, slug)

        options = [
            SlabOption(
                label=get_unit_label(slab.unit, slab.quantity),
                price=slab.price,
                price_label=format_price_range([slab]),
            )
            for slab in product.prices
        ]

        return ProductPage(
            product=product,
            related_products=related,
            price_range=format_price_range(product.prices),
            options=options,
            json_ld=product_json_ld(product, settings.BRAND_NAME),
        )

    def sitemap(self, session: Session) -> str:
        """XML sitemap: static pages plus every active product."""
        settings = get_settings()
        base_url = settings.SITE_URL.rstrip("/")

        with persistence_guard(session, "Failed to build sitemap"):
            products = self.repo.list_catalog(session, CatalogFilter(sort="newest"))

        entries = [
            (f"{base_url}{path}", None, freq, priority)
            for path, freq, priority in STATIC_PAGES
        ]
        entries.extend(
            (
                f"{base_url}/products/{p.slug}",
                p.updated_at.date().isoformat(),
                "weekly",
                0.8,
            )
            for p in products
        )

        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
        ]
        for loc, lastmod, freq, priority in entries:
            lines.append("  <url>")
            lines.append(f"    <loc>{escape(loc)}</loc>")
            if lastmod:
                lines.append(f"    <lastmod>{lastmod}</lastmod>")
            lines.append(f"    <changefreq>{freq}</changefreq>")
            lines.append(f"    <priority>{priority:.1f}</priority>")
            lines.append("  </url>")
        lines.append("</urlset>")
        return "\n".join(lines) + "\n"
