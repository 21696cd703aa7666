"""/api listing query endpoints and image serving."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, Response, current_app, jsonify, request

from marketplace.errors import ListingNotFound
from marketplace.services import image_service, listing_service

bp = Blueprint("listings", __name__, url_prefix="/api")


def _int_arg(name: str, default: int) -> int:
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default


def read_query_params() -> Dict[str, Any]:
    """Parse page, limit, sort and search from the query string."""
    config = current_app.config
    page = max(1, _int_arg("page", 1))
    limit = _int_arg("limit", config["DEFAULT_PAGE_SIZE"])
    limit = min(max(1, limit), config["MAX_PAGE_SIZE"])
    return {
        "page": page,
        "limit": limit,
        "sort": (request.args.get("sort") or "none").strip().lower(),
        "search": (request.args.get("search") or "").strip(),
    }


@bp.get("/<any(sell, lease):flow_type>/listings")
def list_listings(flow_type: str):
    """Return a page of published listings."""
    params = read_query_params()
    result = listing_service.query_listings(flow_type, **params)
    return jsonify(result), 200


@bp.get("/<any(sell, lease):flow_type>/listings/<listing_id>")
def get_listing(flow_type: str, listing_id: str):
    """Return one published listing."""
    document = listing_service.get_listing(flow_type, listing_id)
    if not document:
        raise ListingNotFound("Listing not found.")
    return jsonify(listing_service.serialize_listing(document)), 200


@bp.get("/images/<image_id>")
def get_image(image_id: str):
    """Serve an image belonging to a published listing."""
    image = image_service.get_image(image_id)
    if not image or not listing_service.get_listing(image["flow_type"], image["listing_id"]):
        raise ListingNotFound("Image not found.")

    return Response(
        bytes(image["contents"]),
        mimetype=image["mime_type"],
        headers={"Cache-Control": "public, max-age=86400"},
    )
