"""Helpers for passcodes, identifiers and timestamps."""

from __future__ import annotations

import secrets
import time
import uuid

OTP_LENGTH = 6


def now_seconds() -> int:
    """Return the current UNIX timestamp in seconds."""
    return int(time.time())


def generate_otp() -> str:
    """Return a six digit numeric passcode.

    The first digit is never zero so the code always reads as six digits.
    """
    first = secrets.choice("123456789")
    rest = "".join(secrets.choice("0123456789") for _ in range(OTP_LENGTH - 1))
    return first + rest


def generate_listing_id() -> str:
    """Return a random unique identifier for a new listing."""
    return uuid.uuid4().hex


def generate_image_id() -> str:
    return f"img_{secrets.token_urlsafe(12)}"
