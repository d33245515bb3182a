"""Cart models for the storefront"""

from pydantic import BaseModel, Field
from typing import Optional


class CartLine(BaseModel):
    """Cart entry joined with its product"""
    id: str = Field(alias="_id")
    product_id: str = Field(alias="productId")
    name: str
    slug: str
    image: Optional[str] = None
    images: list[str] = []
    price: float
    sale_price: Optional[float] = Field(default=None, alias="salePrice")
    quantity: int = Field(gt=0)
    selected_color: Optional[str] = Field(default=None, alias="selectedColor")
    selected_size: Optional[str] = Field(default=None, alias="selectedSize")
    max_quantity: int = Field(alias="maxQuantity")

    class Config:
        populate_by_name = True


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    product_id: Optional[str] = Field(default=None, alias="productId")
    quantity: Optional[int] = None
    selected_color: Optional[str] = Field(default=None, alias="selectedColor")
    selected_size: Optional[str] = Field(default=None, alias="selectedSize")

    class Config:
        populate_by_name = True


class SyncCartRequest(BaseModel):
    """Local cart pushed after login"""
    items: list[AddToCartRequest]


class UpdateCartItemRequest(BaseModel):
    """Request to update cart item quantity"""
    quantity: Optional[int] = None


class CartResponse(BaseModel):
    """Cart API response"""
    items: list[CartLine]
    subtotal: float = 0.0
