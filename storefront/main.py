"""
TinyPaws Storefront Application

Pet-products storefront API: catalog, accounts, and the user-scoped
cart and wishlist that shoppers' local state reconciles against.
"""

import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .core.config import Settings, get_settings
from .database import Database
from .routes import (
    products_router,
    cart_router,
    wishlist_router,
    auth_router,
    promotions_router,
)
from .security.auth import SessionAuthMiddleware

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings: Settings = app.state.settings
    logger.info("Storefront starting up...")
    logger.info(f"Catalog: {len(app.state.db.products.products)} products")
    if settings.secret_key == Settings.model_fields["secret_key"].default:
        logger.warning("Using the default token secret - set STOREFRONT_SECRET_KEY")
    yield
    logger.info("Storefront shutting down...")


def create_app(settings: Optional[Settings] = None, db: Optional[Database] = None) -> FastAPI:
    """Build a storefront application with its own collections"""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Pet-products storefront with local-first cart and wishlist sync",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = db or Database.create(
        seed_catalog=settings.seed_catalog,
        seed_promotions=settings.seed_promotions,
        default_max_quantity=settings.default_max_quantity,
    )

    if settings.admin_email and settings.admin_password:
        app.state.db.users.create_user(settings.admin_email, settings.admin_password, role="admin")

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(SessionAuthMiddleware, settings=settings)

    # Include API routers
    app.include_router(products_router)
    app.include_router(auth_router)
    app.include_router(cart_router)
    app.include_router(wishlist_router)
    app.include_router(promotions_router)

    @app.get("/")
    async def home():
        """API index"""
        return {
            "message": f"{settings.app_name} API",
            "docs": "/docs",
            "endpoints": {
                "products": "/api/products",
                "auth": "/api/auth",
                "cart": "/api/cart",
                "wishlist": "/api/wishlist",
                "promotions": "/api/promotions",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "storefront"}

    return app


configure_logging(get_settings().debug)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
