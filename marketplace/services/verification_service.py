"""Service for managing pending email verifications in MongoDB."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pymongo import ReturnDocument

from marketplace import database
from marketplace.errors import VerificationError
from marketplace.utils.codes import generate_otp, now_seconds

logger = logging.getLogger(__name__)


def issue_verification(
    email: str,
    flow_type: str,
    listing_id: str,
    ttl_seconds: int,
    otp: Optional[str] = None,
    now: Optional[int] = None,
) -> str:
    """
    Store the pending verification for an email and listing type.

    Any earlier entry for the same email and listing type is replaced, which
    leaves its listing unpublished for good.

    Args:
        email: The normalized submitter email
        flow_type: ``sell`` or ``lease``
        listing_id: The unpublished listing awaiting verification
        ttl_seconds: How long the passcode stays valid
        otp: The passcode to store; a new one is generated if omitted
        now: Current UNIX timestamp, for tests

    Returns:
        The stored passcode
    """
    current = now if now is not None else now_seconds()
    code = otp or generate_otp()

    previous = database.pending_collection().find_one_and_update(
        {"email": email, "flow_type": flow_type},
        {
            "$set": {
                "email": email,
                "flow_type": flow_type,
                "otp": code,
                "listing_id": listing_id,
                "attempts": 0,
                "created_at": datetime.now(timezone.utc),
                "expires_at": current + ttl_seconds,
            }
        },
        upsert=True,
        return_document=ReturnDocument.BEFORE,
    )

    if previous and previous.get("listing_id") != listing_id:
        logger.warning(
            "Pending %s verification for %s replaced; listing %s left unpublished",
            flow_type,
            email,
            previous.get("listing_id"),
        )

    return code


def get_pending(email: str, flow_type: str) -> Optional[Dict[str, Any]]:
    """Return the pending verification for an email and listing type, if any."""
    document = database.pending_collection().find_one({"email": email, "flow_type": flow_type})
    if document:
        document["_id"] = str(document["_id"])
    return document


def verify_passcode(
    email: str,
    flow_type: str,
    otp: str,
    max_attempts: int,
    listing_id: Optional[str] = None,
    now: Optional[int] = None,
) -> str:
    """
    Redeem a passcode and consume its pending entry.

    Returns:
        The id of the listing that may now be published

    Raises:
        VerificationError: if there is no matching, unexpired entry
    """
    collection = database.pending_collection()
    current = now if now is not None else now_seconds()

    entry = collection.find_one({"email": email, "flow_type": flow_type})
    if not entry:
        raise VerificationError("Invalid OTP.")

    if entry["expires_at"] <= current:
        collection.delete_one({"_id": entry["_id"]})
        raise VerificationError("OTP has expired. Please submit your listing again.", terminal=True)

    if listing_id and listing_id != entry["listing_id"]:
        raise VerificationError("Invalid OTP.")

    if otp != entry["otp"]:
        updated = collection.find_one_and_update(
            {"_id": entry["_id"]},
            {"$inc": {"attempts": 1}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None or updated["attempts"] >= max_attempts:
            collection.delete_one({"_id": entry["_id"]})
            logger.info("Pending %s verification for %s discarded after too many attempts", flow_type, email)
            raise VerificationError(
                "Too many incorrect attempts. Please submit your listing again.", terminal=True
            )
        raise VerificationError("Invalid OTP.")

    # Only one concurrent redeemer can delete the entry.
    consumed = collection.find_one_and_delete({"_id": entry["_id"], "otp": otp})
    if consumed is None:
        raise VerificationError("Invalid OTP.")

    return consumed["listing_id"]


def cleanup_expired_verifications(now: Optional[int] = None) -> int:
    """Remove expired pending verifications and return how many were deleted."""
    current = now if now is not None else now_seconds()
    result = database.pending_collection().delete_many({"expires_at": {"$lte": current}})
    return result.deleted_count


def create_indexes():
    collection = database.pending_collection()
    collection.create_index([("email", 1), ("flow_type", 1)], unique=True)
    collection.create_index("expires_at")
