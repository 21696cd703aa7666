"""Validation shared by sell and lease submissions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from marketplace.errors import SubmissionError

FLOW_TYPES = ("sell", "lease")

TEXT_FIELDS = (
    "seller_name",
    "email",
    "contact_number",
    "whatsapp_number",
    "item_name",
    "item_description",
    "price_period",
)


@dataclass
class ImageUpload:
    filename: str
    mime_type: str
    contents: bytes

    @property
    def size(self) -> int:
        return len(self.contents)


@dataclass
class ListingSubmission:
    flow_type: str
    seller_name: str
    email: str
    contact_number: str
    whatsapp_number: str
    item_name: str
    item_description: str
    price: float
    price_period: Optional[str]
    images: List[ImageUpload] = field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        """Return the listing fields as stored, without images."""
        return {
            "flow_type": self.flow_type,
            "seller_name": self.seller_name,
            "email": self.email,
            "contact_number": self.contact_number,
            "whatsapp_number": self.whatsapp_number,
            "item_name": self.item_name,
            "item_description": self.item_description,
            "price": self.price,
            "price_period": self.price_period,
        }


def normalize_email(value: Optional[str]) -> str:
    """Trim and lowercase an email address."""
    return (value or "").strip().lower()


def parse_price(raw: Optional[str]) -> float:
    """Parse a submitted price into a finite, non-negative float."""
    try:
        price = float(str(raw).strip())
    except (TypeError, ValueError):
        raise SubmissionError("Price must be a number.")
    if not math.isfinite(price) or price < 0:
        raise SubmissionError("Price must be a non-negative number.")
    return price


def _clean(form: Mapping[str, Any], name: str) -> str:
    value = form.get(name)
    return str(value).strip() if value is not None else ""


def _read_images(files: Iterable[Any]) -> List[ImageUpload]:
    """Read uploaded file parts, skipping empty file inputs."""
    images: List[ImageUpload] = []
    for storage in files:
        if not storage or not storage.filename:
            continue
        images.append(
            ImageUpload(
                filename=storage.filename,
                mime_type=(storage.mimetype or "").lower(),
                contents=storage.read(),
            )
        )
    return images


def validate_submission(
    flow_type: str,
    form: Mapping[str, Any],
    files: Iterable[Any],
    config: Mapping[str, Any],
) -> ListingSubmission:
    """Check a submitted form and its images, raising ``SubmissionError`` on failure."""
    if flow_type not in FLOW_TYPES:
        raise SubmissionError(f"Unknown listing type: {flow_type}")

    values = {name: _clean(form, name) for name in TEXT_FIELDS}
    email = normalize_email(values["email"])
    domain = config["ALLOWED_EMAIL_DOMAIN"].lower()

    if not email:
        raise SubmissionError("Email is required.")
    if not email.endswith(domain) or len(email) <= len(domain):
        raise SubmissionError(f"Only {domain} emails allowed.")

    missing = []
    if not values["item_name"]:
        missing.append("item_name")
    if not _clean(form, "price"):
        missing.append("price")
    if flow_type == "lease" and not values["price_period"]:
        missing.append("price_period")
    if missing:
        raise SubmissionError(f"Missing required fields: {', '.join(missing)}")

    price = parse_price(form.get("price"))

    images = _read_images(files)
    if len(images) > config["MAX_IMAGES"]:
        raise SubmissionError(f"At most {config['MAX_IMAGES']} images are allowed.")
    for image in images:
        if not image.mime_type.startswith("image/"):
            raise SubmissionError(f"{image.filename} is not an image.")

    total_bytes = sum(image.size for image in images)
    if total_bytes > config["MAX_UPLOAD_BYTES"]:
        limit_kb = config["MAX_UPLOAD_BYTES"] // 1024
        raise SubmissionError(f"Total image size must not exceed {limit_kb} KB.")

    return ListingSubmission(
        flow_type=flow_type,
        seller_name=values["seller_name"],
        email=email,
        contact_number=values["contact_number"],
        whatsapp_number=values["whatsapp_number"],
        item_name=values["item_name"],
        item_description=values["item_description"],
        price=price,
        price_period=values["price_period"] or None,
        images=images,
    )
