"""Wishlist API routes for the storefront"""

import logging
from fastapi import APIRouter, HTTPException, Depends, Response

from ..core.deps import get_db
from ..database import Database
from ..models.wishlist import (
    AddToWishlistRequest,
    SyncWishlistRequest,
    WishlistItemOut,
    WishlistResponse,
    MessageResponse,
)
from ..security.auth import AuthContext, AuthDependency, optional_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/wishlist", tags=["Wishlist"])

require_wishlist_user = AuthDependency(
    require_user=True,
    message="You must be logged in to view your wishlist",
)


@router.get("", response_model=WishlistResponse)
async def get_wishlist(
    auth: AuthContext = Depends(require_wishlist_user),
    db: Database = Depends(get_db),
):
    """Get the user's wishlist, newest first"""
    return WishlistResponse(items=db.wishlists.list_items(auth.user.id))


@router.post("/sync", response_model=WishlistResponse)
async def sync_wishlist(
    request: SyncWishlistRequest,
    auth: AuthContext = Depends(require_wishlist_user),
    db: Database = Depends(get_db),
):
    """
    Merge a locally accumulated wishlist into the stored one.

    Entries without a product ID or naming unknown products are skipped;
    products already saved are not duplicated.
    """
    items = db.wishlists.sync_items(
        auth.user.id,
        [item.product_id for item in request.items],
    )
    return WishlistResponse(items=items)


@router.post("/add", response_model=WishlistItemOut)
async def add_to_wishlist(
    request: AddToWishlistRequest,
    response: Response,
    auth: AuthContext = Depends(optional_user),
    db: Database = Depends(get_db),
):
    """Add a product to the wishlist; 201 when newly saved, 200 if already present"""
    if not request.product_id:
        raise HTTPException(status_code=400, detail="Product ID is required")

    if not auth.is_authenticated:
        raise HTTPException(
            status_code=401,
            detail="You must be logged in to add items to your wishlist",
        )

    if not db.products.get_product(request.product_id):
        raise HTTPException(status_code=404, detail="Product not found")

    item, created = db.wishlists.add_item(auth.user.id, request.product_id)
    response.status_code = 201 if created else 200
    return item


@router.delete("/{item_id}", response_model=MessageResponse)
async def remove_from_wishlist(
    item_id: str,
    auth: AuthContext = Depends(require_wishlist_user),
    db: Database = Depends(get_db),
):
    """Remove an item by wishlist entry ID or product ID"""
    if not db.wishlists.remove_item(auth.user.id, item_id):
        raise HTTPException(status_code=404, detail="Wishlist item not found")
    return MessageResponse(message="Item removed from wishlist successfully")


@router.delete("", response_model=MessageResponse)
async def clear_wishlist(
    auth: AuthContext = Depends(require_wishlist_user),
    db: Database = Depends(get_db),
):
    """Clear the user's wishlist"""
    db.wishlists.clear(auth.user.id)
    return MessageResponse(message="Wishlist cleared successfully")
