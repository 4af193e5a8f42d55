"""
EventGo
A campus marketplace for events, jobs, internships and hackathons.

Architecture:
- PostgreSQL: Accounts, organizations, listings, registrations, payments
- MongoDB GridFS: Uploaded avatars and media
- eventgo.client: Python session client for the HTTP API
"""

__version__ = "1.0.0"
