"""/verify-otp routes redeeming passcodes and publishing listings."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from marketplace.errors import ListingNotFound, VerificationError
from marketplace.services import listing_service, verification_service
from marketplace.services.validation import normalize_email
from marketplace.utils.html import BROWSE_PAGES, message_page, otp_form

bp = Blueprint("verification", __name__, url_prefix="/verify-otp")


@bp.get("/<any(sell, lease):flow_type>")
def show_form(flow_type: str):
    return otp_form(
        flow_type,
        email=request.args.get("email", ""),
        listing_id=request.args.get("id", ""),
    )


@bp.post("/<any(sell, lease):flow_type>")
def verify(flow_type: str):
    """Publish the listing when the submitted passcode matches."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = request.form
    email = normalize_email(payload.get("email"))
    otp = str(payload.get("otp") or "").strip()
    listing_id = str(payload.get("id") or "").strip() or None

    if not email or not otp:
        raise VerificationError("Email and OTP are required.")

    try:
        verified_id = verification_service.verify_passcode(
            email,
            flow_type,
            otp,
            max_attempts=current_app.config["OTP_MAX_ATTEMPTS"],
            listing_id=listing_id,
        )
    except VerificationError as exc:
        current_app.logger.info("OTP rejected for %s %s listing: %s", email, flow_type, exc)
        raise

    if not listing_service.publish_listing(flow_type, verified_id):
        current_app.logger.warning("Verified %s listing %s was missing or already published", flow_type, verified_id)
        raise ListingNotFound("Listing not found or already published.")

    browse = BROWSE_PAGES[flow_type]
    return message_page(
        "Listing published",
        "Listing verified and published!",
        link=browse["path"],
        link_text=f"View {browse['title']}",
    )
