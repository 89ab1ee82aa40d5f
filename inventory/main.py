from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from inventory.config import get_settings
from inventory.api import products, catalog, health
from inventory.api.errors import register_exception_handlers
from inventory.services.product_store import ProductStore
from inventory.services.seed import generate_products

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    logger.info("Starting up application...")

    store = ProductStore()
    if settings.SEED_PRODUCTS > 0:
        logger.info(f"Generating {settings.SEED_PRODUCTS} demo products...")
        store.seed(generate_products(settings.SEED_PRODUCTS, seed=settings.SEED_RANDOM))
    app.state.store = store

    yield

    # Shutdown
    logger.info("Shutting down application...")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
    Backend for a single-tenant product inventory dashboard:

    - **Product Management**: Create, read, update and delete products
    - **Listing**: Filter by category, status and free-text search, sort, paginate
    - **Catalog**: Category and status counts for the dashboard sidebar

    Products are held in process memory; every restart starts from fresh demo data.
    All responses are wrapped as `{success, message, data}`.
    """,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routers
app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(products.router, prefix=settings.API_PREFIX)
app.include_router(catalog.router, prefix=settings.API_PREFIX)


@app.get("/", tags=["Root"])
def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": f"{settings.API_PREFIX}/health"
    }
