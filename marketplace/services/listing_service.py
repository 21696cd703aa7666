"""Service for creating, publishing and querying listings in MongoDB."""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING

from marketplace import database
from marketplace.services.image_service import image_url
from marketplace.services.validation import FLOW_TYPES, ListingSubmission
from marketplace.utils.codes import generate_listing_id

logger = logging.getLogger(__name__)

# Insertion order, newest first. ``_id`` breaks ties between equal timestamps.
NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]

SORT_ORDERS = {
    "none": NEWEST_FIRST,
    "asc": [("price", ASCENDING), ("_id", DESCENDING)],
    "price_asc": [("price", ASCENDING), ("_id", DESCENDING)],
    "desc": [("price", DESCENDING), ("_id", DESCENDING)],
    "price_desc": [("price", DESCENDING), ("_id", DESCENDING)],
}

PUBLIC_FIELDS = (
    "id",
    "seller_name",
    "email",
    "contact_number",
    "whatsapp_number",
    "item_name",
    "item_description",
    "price",
    "price_period",
)


def create_listing(
    submission: ListingSubmission,
    image_ids: List[str],
    listing_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Insert an unpublished listing and return the stored document."""
    document = submission.to_document()
    document.update(
        {
            "id": listing_id or generate_listing_id(),
            "images": list(image_ids),
            "published": False,
            "created_at": datetime.now(timezone.utc),
            "published_at": None,
        }
    )
    database.listings_collection(submission.flow_type).insert_one(document)
    document.pop("_id", None)
    logger.info("Created unpublished %s listing %s", submission.flow_type, document["id"])
    return document


def publish_listing(flow_type: str, listing_id: str) -> bool:
    """Mark an unpublished listing as published.

    Returns True if exactly one listing changed state.
    """
    result = database.listings_collection(flow_type).update_one(
        {"id": listing_id, "published": False},
        {"$set": {"published": True, "published_at": datetime.now(timezone.utc)}},
    )
    if result.modified_count:
        logger.info("Published %s listing %s", flow_type, listing_id)
    return result.modified_count == 1


def get_listing(flow_type: str, listing_id: str, published_only: bool = True) -> Optional[Dict[str, Any]]:
    """Return a single listing document, or None."""
    query: Dict[str, Any] = {"id": listing_id}
    if published_only:
        query["published"] = True
    document = database.listings_collection(flow_type).find_one(query)
    if document:
        document.pop("_id", None)
    return document


def build_filter(search: Optional[str] = None) -> Dict[str, Any]:
    """Return the Mongo filter for published listings matching ``search``."""
    query: Dict[str, Any] = {"published": True}
    term = (search or "").strip()
    if term:
        query["item_name"] = {"$regex": re.escape(term), "$options": "i"}
    return query


def query_listings(
    flow_type: str,
    page: int = 1,
    limit: int = 10,
    sort: Optional[str] = None,
    search: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Page through published listings.

    Args:
        flow_type: ``sell`` or ``lease``
        page: 1-based page number
        limit: Page size
        sort: ``none``, ``asc``/``price_asc`` or ``desc``/``price_desc``
        search: Case-insensitive substring matched against the item name

    Returns:
        A dict with ``listings``, ``total``, ``page`` and ``totalPages``
    """
    if flow_type not in FLOW_TYPES:
        raise ValueError(f"Unknown listing type: {flow_type}")

    page = max(1, page)
    limit = max(1, limit)
    collection = database.listings_collection(flow_type)
    query = build_filter(search)
    order = SORT_ORDERS.get((sort or "none").lower(), NEWEST_FIRST)

    total = collection.count_documents(query)
    skip = (page - 1) * limit
    listings: List[Dict[str, Any]] = []
    # Pages past the end are empty; skipping past them could overflow int64.
    if skip < total:
        cursor = collection.find(query).sort(order).skip(skip).limit(limit)
        listings = [serialize_listing(doc) for doc in cursor]

    return {
        "listings": listings,
        "total": total,
        "page": page,
        "totalPages": math.ceil(total / limit),
    }


def serialize_listing(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return the public JSON shape of a listing document."""
    payload = {name: document.get(name) for name in PUBLIC_FIELDS}
    payload["flow_type"] = document.get("flow_type")
    payload["images"] = [image_url(image_id) for image_id in document.get("images") or []]
    created_at = document.get("created_at")
    payload["created_at"] = created_at.isoformat() if created_at else None
    return payload


def create_indexes():
    """Create database indexes for listing lookups and browse queries."""
    for flow_type in FLOW_TYPES:
        collection = database.listings_collection(flow_type)
        collection.create_index("id", unique=True)
        collection.create_index([("published", 1), ("created_at", -1)])
        collection.create_index([("published", 1), ("price", 1)])
