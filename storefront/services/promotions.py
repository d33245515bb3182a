"""
Promotion evaluation

Checks a coupon code against a cart and computes the discount it grants.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from ..database.products import ProductDatabase
from ..database.promotions import PromotionDatabase
from ..models.promotion import AppliedPromotion, Promotion, PromotionCartItem

logger = logging.getLogger(__name__)


class PromotionError(Exception):
    """Promotion cannot be applied to this cart"""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _discount_for(promotion: Promotion, amount: float) -> float:
    if promotion.is_percentage:
        return amount * promotion.value / 100
    return promotion.value


def evaluate_promotion(
    code: Optional[str],
    cart_total: float,
    cart_items: list[PromotionCartItem],
    promotions: PromotionDatabase,
    products: ProductDatabase,
    user_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> AppliedPromotion:
    """
    Validate a promotion code for a cart.

    Product-scoped promotions take precedence over category-scoped ones;
    a promotion with neither scope applies to the whole cart total.

    Raises:
        PromotionError: code missing, unknown, inactive, outside its date
            window, below the minimum order value, over the per-user limit,
            or not applicable to any cart item
    """
    if not code:
        raise PromotionError("Promotion code is required")

    promotion = promotions.get_by_code(code)
    if not promotion or not promotion.is_active:
        raise PromotionError("Invalid promotion code", status_code=404)

    now = now or datetime.now(timezone.utc)
    if now < promotion.start_date or now > promotion.end_date:
        raise PromotionError("Promotion code has expired or not yet active")

    if cart_total < promotion.min_order_value:
        raise PromotionError(
            f"Minimum order value of {promotion.min_order_value:g} required for this promotion"
        )

    if user_id and promotion.per_user_limit > 0:
        if promotions.get_usage_count(user_id, promotion.id) >= promotion.per_user_limit:
            raise PromotionError(
                "You have already used this promotion the maximum number of times"
            )

    applicable: list[PromotionCartItem] = []
    if promotion.applicable_products:
        applicable = [i for i in cart_items if i.product_id in promotion.applicable_products]
    elif promotion.applicable_categories:
        catalog = {p.id: p for p in products.get_products_by_ids([i.product_id for i in cart_items])}
        applicable = [
            i for i in cart_items
            if i.product_id in catalog
            and catalog[i.product_id].category.value in promotion.applicable_categories
        ]

    if promotion.applicable_products or promotion.applicable_categories:
        if not applicable:
            raise PromotionError("This promotion does not apply to any items in your cart")
        discount = _discount_for(promotion, sum(i.price * i.quantity for i in applicable))
    else:
        discount = _discount_for(promotion, cart_total)

    if promotion.max_discount and discount > promotion.max_discount:
        discount = promotion.max_discount

    logger.info(f"Promotion {promotion.code} applied: discount={discount:.2f}")

    return AppliedPromotion(
        id=promotion.id,
        code=promotion.code,
        name=promotion.name,
        type=promotion.type,
        discount=round(discount, 2),
        applicable_items=[i.product_id for i in applicable],
    )
