"""MongoDB database configuration and connection management."""

from __future__ import annotations

import os
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database


# Global MongoDB client instance
_client: Optional[MongoClient] = None
_database: Optional[Database] = None

LISTING_COLLECTIONS = {
    "sell": "sell_listings",
    "lease": "lease_listings",
}
IMAGES_COLLECTION = "listing_images"
PENDING_COLLECTION = "pending_verifications"


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client instance."""
    global _client
    if _client is None:
        mongo_uri = os.getenv("MONGODB_URI", "mongodb://localhost:27017/")
        _client = MongoClient(mongo_uri)
    return _client


def get_database() -> Database:
    """Get the MongoDB database instance."""
    global _database
    if _database is None:
        client = get_mongo_client()
        db_name = os.getenv("MONGODB_DATABASE", "campus_marketplace")
        _database = client[db_name]
    return _database


def listings_collection(flow_type: str) -> Collection:
    """Return the listings collection for ``sell`` or ``lease``."""
    return get_database()[LISTING_COLLECTIONS[flow_type]]


def images_collection() -> Collection:
    return get_database()[IMAGES_COLLECTION]


def pending_collection() -> Collection:
    return get_database()[PENDING_COLLECTION]


def close_mongo_connection():
    """Close the MongoDB connection."""
    global _client, _database
    if _client is not None:
        _client.close()
        _client = None
        _database = None
