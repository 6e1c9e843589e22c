import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aisleplan.config import get_settings
from aisleplan.routers.categories import router as categories_router
from aisleplan.routers.store_layouts import router as store_layouts_router
from aisleplan.services.grocery_categories import GROCERY_CATEGORIES
from aisleplan.services.store_layouts import STORE_LAYOUTS

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log what was loaded on startup."""
    logger.info(
        "Starting up (%s): %d categories, %d store layouts",
        settings.environment, len(GROCERY_CATEGORIES), len(STORE_LAYOUTS),
    )
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title="Aisle Plan API",
    description="Categorize grocery items and plan food-safe shopping routes",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(categories_router, prefix=settings.api_prefix)
app.include_router(store_layouts_router, prefix=settings.api_prefix)


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": "Aisle Plan API",
        "version": "1.0.0"
    }
