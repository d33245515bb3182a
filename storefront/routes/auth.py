"""Account routes for the storefront"""

import logging
from fastapi import APIRouter, HTTPException, Depends

from ..core.config import Settings
from ..core.deps import get_db, get_app_settings
from ..database import Database
from ..models.user import UserPublic, RegisterRequest, LoginRequest, AuthResponse
from ..models.wishlist import MessageResponse
from ..security.auth import AuthContext, issue_token, require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Create an account and sign it in"""
    user = db.users.create_user(request.email, request.password, request.full_name)
    if not user:
        raise HTTPException(status_code=400, detail="Email is already registered")

    token, _ = issue_token(user, settings)
    return AuthResponse(user=UserPublic.from_user(user), token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Exchange credentials for a bearer token"""
    user = db.users.authenticate(request.email, request.password)
    if not user:
        logger.info(f"Failed login for {request.email}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token, _ = issue_token(user, settings)
    logger.info(f"User {user.id} logged in")
    return AuthResponse(user=UserPublic.from_user(user), token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    auth: AuthContext = Depends(require_user),
    db: Database = Depends(get_db),
):
    """Revoke the presented token"""
    if auth.token_id:
        db.users.revoke_token(auth.token_id)
    logger.info(f"User {auth.user.id} logged out")
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserPublic)
async def current_user(auth: AuthContext = Depends(require_user)):
    """Get the signed-in user"""
    return UserPublic.from_user(auth.user)
