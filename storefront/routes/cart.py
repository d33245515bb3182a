"""Cart API routes for the storefront"""

from fastapi import APIRouter, HTTPException, Depends

from ..core.deps import get_db
from ..database import Database
from ..models.cart import (
    CartLine,
    AddToCartRequest,
    SyncCartRequest,
    UpdateCartItemRequest,
    CartResponse,
)
from ..models.wishlist import MessageResponse
from ..security.auth import AuthContext, AuthDependency, optional_user

router = APIRouter(prefix="/api/cart", tags=["Cart"])

require_cart_user = AuthDependency(
    require_user=True,
    message="You must be logged in to view your cart",
)


def _cart_response(db: Database, user_id: str) -> CartResponse:
    return CartResponse(
        items=db.carts.list_items(user_id),
        subtotal=db.carts.subtotal(user_id),
    )


@router.get("", response_model=CartResponse)
async def get_cart(
    auth: AuthContext = Depends(require_cart_user),
    db: Database = Depends(get_db),
):
    """Get the user's cart"""
    return _cart_response(db, auth.user.id)


@router.post("/add", response_model=CartLine)
async def add_to_cart(
    request: AddToCartRequest,
    auth: AuthContext = Depends(optional_user),
    db: Database = Depends(get_db),
):
    """Add an item to the cart, capped at available inventory"""
    if not request.product_id or not request.quantity:
        raise HTTPException(status_code=400, detail="Product ID and quantity are required")
    if request.quantity < 1:
        raise HTTPException(status_code=400, detail="Quantity must be at least 1")

    if not auth.is_authenticated:
        raise HTTPException(
            status_code=401,
            detail="You must be logged in to add items to your cart",
        )

    product = db.products.get_product(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    if not product.in_stock:
        raise HTTPException(status_code=400, detail=f"{product.name} is out of stock")

    return db.carts.add_item(
        auth.user.id,
        request.product_id,
        request.quantity,
        request.selected_color,
        request.selected_size,
    )


@router.post("/sync", response_model=CartResponse)
async def sync_cart(
    request: SyncCartRequest,
    auth: AuthContext = Depends(require_cart_user),
    db: Database = Depends(get_db),
):
    """Merge a locally held cart into the stored one"""
    db.carts.sync_items(auth.user.id, [item.model_dump() for item in request.items])
    return _cart_response(db, auth.user.id)


@router.patch("/{item_id}", response_model=CartLine)
async def update_cart_item(
    item_id: str,
    request: UpdateCartItemRequest,
    auth: AuthContext = Depends(require_cart_user),
    db: Database = Depends(get_db),
):
    """Update item quantity in cart"""
    if request.quantity is None or request.quantity < 1:
        raise HTTPException(status_code=400, detail="Quantity must be a positive number")

    line = db.carts.update_quantity(auth.user.id, item_id, request.quantity)
    if not line:
        raise HTTPException(status_code=404, detail="Cart item not found")
    return line


@router.delete("/{item_id}", response_model=MessageResponse)
async def remove_from_cart(
    item_id: str,
    auth: AuthContext = Depends(require_cart_user),
    db: Database = Depends(get_db),
):
    """Remove an item from the cart"""
    if not db.carts.remove_item(auth.user.id, item_id):
        raise HTTPException(status_code=404, detail="Cart item not found")
    return MessageResponse(message="Cart item removed successfully")


@router.delete("", response_model=MessageResponse)
async def clear_cart(
    auth: AuthContext = Depends(require_cart_user),
    db: Database = Depends(get_db),
):
    """Clear all items from cart"""
    db.carts.clear(auth.user.id)
    return MessageResponse(message="Cart cleared successfully")
