"""
SpendScope — Student Spending Comparison
FastAPI backend entry point.
"""

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routes.upload import router as upload_router
from routes.analyze import router as analyze_router

# Load environment
load_dotenv()

APP_NAME = os.getenv("APP_NAME", "SpendScope")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
# Comma-separated allowed origins, e.g. http://localhost:5173,https://app.example.com
raw_origins = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000")
ALLOWED_ORIGINS = [o.strip() for o in raw_origins.split(",") if o.strip()]

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SpendScope API",
    description=(
        "Student spending comparisons — group averages, distributions, "
        "regression and radar projections over a small spending table."
    ),
    version="1.0.0",
)

# CORS — allow the frontend dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register route modules
app.include_router(upload_router, prefix="/api/upload", tags=["Upload"])
app.include_router(analyze_router, prefix="/api/analyze", tags=["Analytics"])

logger.info("%s started; CORS origins: %s", APP_NAME, ALLOWED_ORIGINS)


@app.get("/api/health")
async def health_check():
    return {
        "status": "ok",
        "app_name": APP_NAME,
    }


@app.get("/api/config")
async def get_config():
    """Return enumerations and filter options to the frontend."""
    from core.fields import GENDERS, MAJORS, SPENDING_CATEGORIES, YEARS
    from core.filters import INCOME_BRACKETS, INCOME_TIERS

    return {
        "app_name": APP_NAME,
        "genders": GENDERS,
        "majors": MAJORS,
        "years": YEARS,
        "income_brackets": list(INCOME_BRACKETS),
        "income_tiers": INCOME_TIERS,
        "categories": SPENDING_CATEGORIES,
    }
