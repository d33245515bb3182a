"""Promotion storage for the storefront"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from ..models.promotion import Promotion, PromotionType


def seed_promotions(now: Optional[datetime] = None) -> list[Promotion]:
    """Storefront launch promotions"""
    now = now or datetime.now(timezone.utc)
    return [
        Promotion(
            id="promo-welcome10",
            code="WELCOME10",
            name="Welcome offer",
            description="10% off your first order",
            value=10,
            is_percentage=True,
            start_date=now - timedelta(days=30),
            end_date=now + timedelta(days=365),
            per_user_limit=1,
        ),
        Promotion(
            id="promo-treats15",
            code="TREATS15",
            name="Treat time",
            description="15% off all treats, up to 100",
            value=15,
            is_percentage=True,
            max_discount=100,
            start_date=now - timedelta(days=1),
            end_date=now + timedelta(days=30),
            applicable_categories=["treats"],
        ),
        Promotion(
            id="promo-flat100",
            code="FLAT100",
            name="Flat 100 off",
            description="100 off orders of 999 or more",
            value=100,
            min_order_value=999,
            start_date=now - timedelta(days=1),
            end_date=now + timedelta(days=30),
        ),
        Promotion(
            id="promo-monsoon",
            code="MONSOON20",
            name="Monsoon sale",
            type=PromotionType.SALE,
            value=20,
            is_percentage=True,
            start_date=now - timedelta(days=90),
            end_date=now - timedelta(days=60),
        ),
    ]


class PromotionDatabase:
    """In-memory promotion storage with per-user usage counts"""

    def __init__(self, seed: bool = True):
        self.promotions: dict[str, Promotion] = {}
        self.usage: dict[tuple[str, str], int] = {}
        if seed:
            for promotion in seed_promotions():
                self.add_promotion(promotion)

    def add_promotion(self, promotion: Promotion) -> Promotion:
        self.promotions[promotion.id] = promotion
        return promotion

    def get_by_code(self, code: str) -> Optional[Promotion]:
        code = code.strip().upper()
        return next((p for p in self.promotions.values() if p.code.upper() == code), None)

    def get_active(self, now: Optional[datetime] = None) -> list[Promotion]:
        now = now or datetime.now(timezone.utc)
        return [
            p for p in self.promotions.values()
            if p.is_active and p.start_date <= now <= p.end_date
        ]

    def get_usage_count(self, user_id: str, promotion_id: str) -> int:
        return self.usage.get((user_id, promotion_id), 0)

    def record_usage(self, user_id: str, promotion_id: str) -> int:
        key = (user_id, promotion_id)
        self.usage[key] = self.usage.get(key, 0) + 1
        return self.usage[key]
