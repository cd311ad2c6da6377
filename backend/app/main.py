"""
Catalog Manager FastAPI Application
Main entry point for the backend API server.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.database import init_db, close_db
from app.exceptions import CatalogError
from app.services.storage_service import UPLOADS_URL_PREFIX

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and cleanup on shutdown.
    """
    # Startup
    from app.logging_config import setup_logging
    from app.data.seed import seed_all
    setup_logging(log_dir=settings.log_dir, log_level=settings.log_level)

    logger.info("Starting Catalog Manager backend...")

    # Initialize database (creates tables if they don't exist)
    # In production, use Alembic migrations instead
    if settings.debug or settings.is_sqlite:
        await init_db()
        logger.info("Database tables created")

    await seed_all()
    logger.info("Catalog Manager backend ready")

    yield

    # Shutdown
    logger.info("Shutting down Catalog Manager backend...")
    await close_db()


# Create FastAPI application
app = FastAPI(
    title="Catalog Manager",
    description="""
    ## Product Catalog API

    Users register, confirm their email, log in, and manage their own
    products and product categories.

    ### Features
    - **Accounts**: Registration with email confirmation and JWT bearer login
    - **Catalog**: Owner-scoped categories and products with soft delete
    - **Profile**: Profile pictures and password changes
    - **Dashboard**: Inventory statistics, across all users for administrators
    """,
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def catalog_error_handler(request: Request, exc: CatalogError):
    return JSONResponse(
        status_code=int(exc.status_code),
        content=exc.to_dict(),
        headers=exc.headers,
    )


app.add_exception_handler(CatalogError, catalog_error_handler)

app.mount(
    UPLOADS_URL_PREFIX,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)


# =============================================================================
# Health Check Endpoints
# =============================================================================

@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Catalog Manager API",
        "version": "0.1.0",
        "docs": "/api/docs",
        "status": "running"
    }


@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "service": "catalog-manager-backend",
        "version": "0.1.0"
    }


@app.get("/api/health/db", tags=["Health"])
async def database_health():
    """Database connectivity check."""
    from sqlalchemy import text
    from sqlalchemy.exc import SQLAlchemyError
    from app.database import AsyncSessionLocal

    try:
        async with AsyncSessionLocal() as session:
            result = await session.execute(text("SELECT 1"))
            result.fetchone()
        return {
            "status": "healthy",
            "database": "connected",
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "database": "disconnected",
                "error": str(e)
            },
        )


from app.api import auth, categories, products, profile, dashboard, users
from app.api.dependencies import get_current_user


# =============================================
# API Routers
# =============================================

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(categories.router, prefix="/api/product-categories", tags=["Product Categories"], dependencies=[Depends(get_current_user)])
app.include_router(products.router, prefix="/api/products", tags=["Products"], dependencies=[Depends(get_current_user)])
app.include_router(profile.router, prefix="/api/profile", tags=["Profile"], dependencies=[Depends(get_current_user)])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"], dependencies=[Depends(get_current_user)])
app.include_router(users.router, prefix="/api/users", tags=["Users"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
