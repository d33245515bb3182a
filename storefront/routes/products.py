"""Product API routes for the storefront"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Query, Depends

from ..core.deps import get_db
from ..database import Database
from ..models.product import Product, ProductCategory, ProductSearchResponse

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=ProductSearchResponse)
async def search_products(
    query: Optional[str] = Query(None, description="Search query"),
    category: Optional[ProductCategory] = Query(None, description="Filter by category"),
    min_price: Optional[float] = Query(None, ge=0, description="Minimum price"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum price"),
    in_stock_only: bool = Query(False, description="Only show in-stock items"),
    limit: int = Query(20, ge=1, le=100, description="Max results"),
    offset: int = Query(0, ge=0, description="Offset for pagination"),
    db: Database = Depends(get_db),
):
    """Search products in the catalog"""
    products, total = db.products.search_products(
        query=query,
        category=category,
        min_price=min_price,
        max_price=max_price,
        in_stock_only=in_stock_only,
        limit=limit,
        offset=offset,
    )

    return ProductSearchResponse(
        products=products,
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/categories", response_model=list[str])
async def list_categories():
    """List all product categories"""
    return [c.value for c in ProductCategory]


@router.get("/slug/{slug}", response_model=Product)
async def get_product_by_slug(slug: str, db: Database = Depends(get_db)):
    """Get a product by its URL slug"""
    product = db.products.get_by_slug(slug)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, db: Database = Depends(get_db)):
    """Get a product by ID"""
    product = db.products.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
