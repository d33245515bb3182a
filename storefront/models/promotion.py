"""Promotion models for the storefront"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class PromotionType(str, Enum):
    COUPON = "coupon"
    SALE = "sale"
    FREE_SHIPPING = "free_shipping"


class Promotion(BaseModel):
    """Stored promotion"""
    id: str
    code: str
    name: str
    description: Optional[str] = None
    type: PromotionType = PromotionType.COUPON
    value: float = Field(ge=0)
    is_percentage: bool = False
    min_order_value: float = 0.0
    max_discount: Optional[float] = None
    start_date: datetime
    end_date: datetime
    is_active: bool = True
    per_user_limit: int = 0
    applicable_products: list[str] = []
    applicable_categories: list[str] = []


class PromotionCartItem(BaseModel):
    product_id: str = Field(alias="productId")
    price: float
    quantity: int = 1

    class Config:
        populate_by_name = True


class ValidatePromotionRequest(BaseModel):
    """Coupon code checked against the caller's cart"""
    code: Optional[str] = None
    cart_total: float = Field(default=0.0, alias="cartTotal")
    cart_items: list[PromotionCartItem] = Field(default=[], alias="cartItems")

    class Config:
        populate_by_name = True


class AppliedPromotion(BaseModel):
    id: str
    code: str
    name: str
    type: PromotionType
    discount: float
    applicable_items: list[str] = Field(default=[], alias="applicableItems")

    class Config:
        populate_by_name = True


class ValidatePromotionResponse(BaseModel):
    valid: bool
    promotion: AppliedPromotion


class ActivePromotion(BaseModel):
    """Promotion as advertised in the storefront, without usage limits"""
    id: str
    name: str
    code: str
    description: Optional[str] = None
    type: PromotionType
    value: float
    is_percentage: bool = Field(alias="isPercentage")
    min_order_value: float = Field(alias="minOrderValue")
    start_date: datetime = Field(alias="startDate")
    end_date: datetime = Field(alias="endDate")

    class Config:
        populate_by_name = True
