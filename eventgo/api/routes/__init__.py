"""
API Routes - Combines all route modules into single router.

Each sub-router carries its full path prefix (/auth, /api/..., /storage).
"""

from fastapi import APIRouter

from eventgo.api.routes.auth_routes import router as auth_router
from eventgo.api.routes.user_routes import router as user_router
from eventgo.api.routes.college_routes import router as college_router
from eventgo.api.routes.company_routes import router as company_router
from eventgo.api.routes.event_routes import router as event_router
from eventgo.api.routes.opportunity_routes import router as opportunity_router
from eventgo.api.routes.application_routes import router as application_router
from eventgo.api.routes.registration_routes import router as registration_router
from eventgo.api.routes.connection_routes import router as connection_router
from eventgo.api.routes.inquiry_routes import router as inquiry_router
from eventgo.api.routes.admin_routes import router as admin_router
from eventgo.api.routes.storage_routes import router as storage_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(college_router)
api_router.include_router(company_router)
api_router.include_router(event_router)
api_router.include_router(opportunity_router)
api_router.include_router(application_router)
api_router.include_router(registration_router)
api_router.include_router(connection_router)
api_router.include_router(inquiry_router)
api_router.include_router(admin_router)
api_router.include_router(storage_router)
