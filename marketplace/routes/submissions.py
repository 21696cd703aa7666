"""/preowned routes accepting sell and lease submissions."""

from __future__ import annotations

from urllib.parse import urlencode

from flask import Blueprint, current_app, request

from marketplace.services import (
    email_service,
    image_service,
    listing_service,
    validation,
    verification_service,
)
from marketplace.utils.codes import generate_listing_id, generate_otp
from marketplace.utils.html import message_page

bp = Blueprint("submissions", __name__, url_prefix="/preowned")


def build_verify_url(flow_type: str, email: str, listing_id: str) -> str:
    base_url = current_app.config["PUBLIC_BASE_URL"]
    query = urlencode({"email": email, "id": listing_id})
    return f"{base_url}/verify-otp/{flow_type}?{query}"


@bp.post("/<any(sell, lease):flow_type>")
def submit_listing(flow_type: str):
    """Store an unpublished listing and email its passcode to the submitter."""
    config = current_app.config
    submission = validation.validate_submission(
        flow_type,
        request.form,
        request.files.getlist("images"),
        config,
    )

    pruned = verification_service.cleanup_expired_verifications()
    if pruned:
        current_app.logger.info("Pruned %d expired pending verification(s)", pruned)

    listing_id = generate_listing_id()
    image_ids = image_service.save_images(flow_type, listing_id, submission.images)
    listing = listing_service.create_listing(submission, image_ids, listing_id=listing_id)

    otp = generate_otp()
    verify_url = build_verify_url(flow_type, submission.email, listing["id"])

    # The pending entry is only stored once the email has gone out.
    email_service.send_verification_email(submission.email, otp, verify_url, flow_type)
    verification_service.issue_verification(
        submission.email,
        flow_type,
        listing["id"],
        ttl_seconds=config["OTP_TTL_SECONDS"],
        otp=otp,
    )

    current_app.logger.info("OTP issued for %s listing %s", flow_type, listing["id"])
    return message_page(
        "Check your email",
        "OTP sent to your email. Please check and verify.",
        link=verify_url,
        link_text="Verify your listing",
    )
