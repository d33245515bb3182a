# Services

from .promotions import evaluate_promotion, PromotionError

__all__ = ["evaluate_promotion", "PromotionError"]
