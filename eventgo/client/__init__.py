"""
Python client for the EventGo API.

AuthSession keeps the signed-in state; CatalogBrowser reads the public
listings.
"""

from eventgo.client.catalog import CatalogBrowser, filter_listings
from eventgo.client.session import AuthError, AuthResult, AuthSession
from eventgo.client.token_store import FileTokenStore, MemoryTokenStore, TokenStore

__all__ = [
    "AuthSession",
    "AuthResult",
    "AuthError",
    "CatalogBrowser",
    "filter_listings",
    "TokenStore",
    "FileTokenStore",
    "MemoryTokenStore",
]
