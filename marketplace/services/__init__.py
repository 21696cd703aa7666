"""Service layer modules for the campus marketplace."""

from . import email_service, image_service, listing_service, validation, verification_service

__all__ = [
    "email_service",
    "image_service",
    "listing_service",
    "validation",
    "verification_service",
]
