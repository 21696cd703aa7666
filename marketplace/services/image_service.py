"""Service for storing listing images in MongoDB."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from marketplace import database
from marketplace.services.validation import ImageUpload
from marketplace.utils.codes import generate_image_id

logger = logging.getLogger(__name__)


def image_url(image_id: str) -> str:
    """Return the public path that serves an image."""
    return f"/api/images/{image_id}"


def save_images(flow_type: str, listing_id: str, uploads: Iterable[ImageUpload]) -> List[str]:
    """
    Persist uploaded images for a listing.

    Args:
        flow_type: ``sell`` or ``lease``
        listing_id: The listing the images belong to
        uploads: Validated image uploads

    Returns:
        The generated image ids, in upload order
    """
    collection = database.images_collection()
    documents = []
    for upload in uploads:
        documents.append(
            {
                "image_id": generate_image_id(),
                "listing_id": listing_id,
                "flow_type": flow_type,
                "filename": upload.filename,
                "mime_type": upload.mime_type,
                "size": upload.size,
                "contents": upload.contents,
                "created_at": datetime.now(timezone.utc),
            }
        )

    if not documents:
        return []

    collection.insert_many(documents)
    logger.info("Stored %d image(s) for %s listing %s", len(documents), flow_type, listing_id)
    return [doc["image_id"] for doc in documents]


def get_image(image_id: str) -> Optional[Dict[str, Any]]:
    """Return the stored image document or None if not found."""
    document = database.images_collection().find_one({"image_id": image_id})
    if document:
        document.pop("_id", None)
    return document


def create_indexes():
    database.images_collection().create_index("image_id", unique=True)
    database.images_collection().create_index([("listing_id", 1), ("flow_type", 1)])
