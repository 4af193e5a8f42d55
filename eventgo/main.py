"""
EventGo - Main Application

FastAPI backend with:
- PostgreSQL for accounts, listings, registrations and payments
- MongoDB GridFS for uploaded media
- JWT authentication with role-scoped access

Run: uvicorn eventgo.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventgo.api.routes import api_router
from eventgo.core.config import get_settings
from eventgo.core.exceptions import EventGoError
from eventgo.core.logging_config import setup_logging
from eventgo.db.mongodb import init_storage_indexes
from eventgo.db.postgres import init_db

settings = get_settings()

setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="EventGo",
    description="""
    Campus marketplace connecting students, colleges and companies.

    ## Features
    - **Authentication**: JWT-based auth for students, colleges, companies and admins
    - **Events**: College events with sub-events, registrations and payments
    - **Opportunities**: Jobs, internships, hackathons and competitions
    - **Connections & Inquiries**: Student networking and listing questions
    - **Admin**: User, organization and listing moderation with an activity log
    - **Storage**: Avatar and media uploads

    ## Databases
    - PostgreSQL: Structured data
    - MongoDB: Uploaded files (GridFS)
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(EventGoError)
async def eventgo_error_handler(request: Request, exc: EventGoError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("startup")
async def startup_event():
    """Create tables and storage indexes."""
    init_db()
    logger.info("Database tables ready")
    try:
        init_storage_indexes()
        logger.info("Storage indexes initialized")
    except Exception as e:
        logger.warning("Storage index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "EventGo"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    from eventgo.db.postgres import test_postgres_connection
    from eventgo.db.mongodb import test_mongo_connection

    return {
        "status": "healthy",
        "postgres": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
