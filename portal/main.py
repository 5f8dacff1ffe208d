"""
Campus Placement Portal - Main Application

FastAPI backend with:
- PostgreSQL for profiles, listings and applications
- Rule-based eligibility checks before every application
- Admin-managed application statuses and placement reports
- JWT authentication (student | admin)

Run: uvicorn portal.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.api.routes import api_router
from portal.core.config import get_settings
from portal.core.errors import register_exception_handlers
from portal.core.log_config import setup_logging
from portal.db.postgres import init_db, test_postgres_connection

settings = get_settings()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Campus Placement Portal",
    description="""
    Placement portal for students and the placement cell.

    ## Features
    - **Authentication**: JWT-based auth for students and admins
    - **Profiles**: CPI, branch, minor and graduation year drive eligibility
    - **Listings**: Company postings with eligibility constraints and a deadline
    - **Applications**: One per student and listing, status managed by admins
    - **Reports**: Status counts and conversion rates per listing and portal-wide
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Configure logging and make sure tables exist."""
    setup_logging(settings.log_level)
    try:
        init_db()
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Campus Placement Portal"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if test_postgres_connection() else "disconnected"
    }
