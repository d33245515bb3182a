"""Product models for the storefront"""

from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class ProductCategory(str, Enum):
    DOG_FOOD = "dog-food"
    CAT_FOOD = "cat-food"
    TREATS = "treats"
    TOYS = "toys"
    ACCESSORIES = "accessories"
    GROOMING = "grooming"


class Inventory(BaseModel):
    """Stock information attached to a product"""
    in_stock: bool = Field(default=True, alias="inStock")
    quantity: Optional[int] = Field(default=None, ge=0)

    class Config:
        populate_by_name = True


class Product(BaseModel):
    """Product in the catalog"""
    id: str
    name: str
    slug: str
    description: str
    category: ProductCategory
    brand: Optional[str] = None
    price: float = Field(gt=0)
    sale_price: Optional[float] = Field(default=None, alias="salePrice")
    currency: str = "INR"
    image: Optional[str] = None
    images: list[str] = []
    colors: list[str] = []
    sizes: list[str] = []
    inventory: Inventory = Field(default_factory=Inventory)

    class Config:
        populate_by_name = True
        from_attributes = True

    @property
    def in_stock(self) -> bool:
        """In stock unless explicitly flagged out or counted down to zero"""
        return self.inventory.in_stock and (
            self.inventory.quantity is None or self.inventory.quantity > 0
        )

    def max_quantity(self, default: int) -> int:
        return self.inventory.quantity or default


class ProductSearchResponse(BaseModel):
    """Response from product search"""
    products: list[Product]
    total: int
    limit: int
    offset: int
