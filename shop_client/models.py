"""Client-side data models for cart lines, wishlist entries and accounts"""

from typing import Optional, Union
from pydantic import BaseModel, Field

ProductId = Union[int, str]


class CartLineItem(BaseModel):
    """
    One product in the cart.

    Product fields are copied in when the line is created so the cart can
    be displayed without refetching the catalog. Unknown product fields are
    carried along as-is.
    """
    id: ProductId
    name: str = ""
    price: float
    quantity: int = 1
    images: list[str] = []
    image: Optional[str] = None
    slug: Optional[str] = None
    selected_color: Optional[str] = Field(default=None, alias="selectedColor")
    selected_size: Optional[str] = Field(default=None, alias="selectedSize")

    class Config:
        populate_by_name = True
        extra = "allow"

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class WishlistProduct(BaseModel):
    """Product details supplied when saving to the wishlist"""
    product_id: str = Field(alias="productId")
    name: str
    slug: str = ""
    image: Optional[str] = None
    price: float
    sale_price: Optional[float] = Field(default=None, alias="salePrice")
    in_stock: bool = Field(default=True, alias="inStock")

    class Config:
        populate_by_name = True


class WishlistItem(WishlistProduct):
    """Saved wishlist entry; ``id`` is local until the server assigns one"""
    id: str = Field(alias="_id")
    added_at: str = Field(alias="addedAt")

    @property
    def is_local(self) -> bool:
        return self.id.startswith("local_")


class UserProfile(BaseModel):
    id: str = Field(alias="_id")
    email: str
    full_name: Optional[str] = Field(default=None, alias="fullName")
    role: str = "customer"

    class Config:
        populate_by_name = True


def dump(model: BaseModel) -> dict:
    """Wire/storage form: camelCase keys, unset optionals dropped"""
    return model.model_dump(by_alias=True, exclude_none=True)
