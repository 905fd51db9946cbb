"""
Database module - MongoDB connection and collection helpers.
"""
from jobboard.db.mongodb import (
    COLLECTIONS,
    create_mongo_client,
    get_collection,
    get_database,
    init_mongo_indexes,
    check_mongo_connection,
)

__all__ = [
    "COLLECTIONS",
    "create_mongo_client",
    "get_collection",
    "get_database",
    "init_mongo_indexes",
    "check_mongo_connection",
]
