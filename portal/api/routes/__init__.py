"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from portal.api.routes.auth_routes import router as auth_router
from portal.api.routes.student_routes import router as student_router
from portal.api.routes.listing_routes import router as listing_router
from portal.api.routes.application_routes import router as application_router
from portal.api.routes.report_routes import router as report_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(student_router)
api_router.include_router(listing_router)
api_router.include_router(application_router)
api_router.include_router(report_router)
