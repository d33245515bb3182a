"""Promotion API routes for the storefront"""

from fastapi import APIRouter, HTTPException, Depends

from ..core.deps import get_db
from ..database import Database
from ..models.promotion import (
    ActivePromotion,
    ValidatePromotionRequest,
    ValidatePromotionResponse,
)
from ..security.auth import AuthContext, optional_user
from ..services.promotions import PromotionError, evaluate_promotion

router = APIRouter(prefix="/api/promotions", tags=["Promotions"])


@router.post("/validate", response_model=ValidatePromotionResponse)
async def validate_promotion(
    request: ValidatePromotionRequest,
    auth: AuthContext = Depends(optional_user),
    db: Database = Depends(get_db),
):
    """
    Validate a promotion code against the caller's cart.

    Per-user limits are only enforced for signed-in users.
    """
    try:
        applied = evaluate_promotion(
            code=request.code,
            cart_total=request.cart_total,
            cart_items=request.cart_items,
            promotions=db.promotions,
            products=db.products,
            user_id=auth.user.id if auth.user else None,
        )
    except PromotionError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return ValidatePromotionResponse(valid=True, promotion=applied)


@router.get("/active", response_model=list[ActivePromotion])
async def list_active_promotions(db: Database = Depends(get_db)):
    """Active promotions for display, without usage limits"""
    return [
        ActivePromotion(
            id=p.id,
            name=p.name,
            code=p.code,
            description=p.description,
            type=p.type,
            value=p.value,
            is_percentage=p.is_percentage,
            min_order_value=p.min_order_value,
            start_date=p.start_date,
            end_date=p.end_date,
        )
        for p in db.promotions.get_active()
    ]
