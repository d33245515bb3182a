"""Wishlist models for the storefront"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class WishlistItemOut(BaseModel):
    """Wishlist entry joined with its product, as sent to clients"""
    id: str = Field(alias="_id")
    product_id: str = Field(alias="productId")
    name: str
    slug: str
    image: Optional[str] = None
    price: float
    sale_price: Optional[float] = Field(default=None, alias="salePrice")
    added_at: datetime = Field(alias="addedAt")
    in_stock: bool = Field(alias="inStock")

    class Config:
        populate_by_name = True


class AddToWishlistRequest(BaseModel):
    """Request to add a single product to the wishlist"""
    product_id: Optional[str] = Field(default=None, alias="productId")

    class Config:
        populate_by_name = True


class WishlistSyncItem(BaseModel):
    product_id: Optional[str] = Field(default=None, alias="productId")

    class Config:
        populate_by_name = True


class SyncWishlistRequest(BaseModel):
    """Locally accumulated wishlist pushed after login"""
    items: list[WishlistSyncItem]


class WishlistResponse(BaseModel):
    """Wishlist API response"""
    items: list[WishlistItemOut]


class MessageResponse(BaseModel):
    message: str
