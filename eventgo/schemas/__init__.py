"""
Schemas module - Request/Response schemas for API endpoints.

Everything lives in eventgo.schemas.schemas; routes import from there.
"""
