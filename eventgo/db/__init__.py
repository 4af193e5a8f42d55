"""
Database module - relational store and MongoDB object storage connections.
"""
from eventgo.db.postgres import get_db_session, init_db, test_postgres_connection
from eventgo.db.mongodb import get_mongo_db, test_mongo_connection

__all__ = [
    "get_db_session",
    "init_db",
    "test_postgres_connection",
    "get_mongo_db",
    "test_mongo_connection"
]
