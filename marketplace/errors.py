"""Exception types raised by the service layer and their HTTP mapping."""

from __future__ import annotations

from flask import Flask, jsonify, request
from pymongo.errors import PyMongoError
from werkzeug.exceptions import RequestEntityTooLarge


class MarketplaceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500


class SubmissionError(MarketplaceError):
    """A listing submission failed validation."""

    status_code = 400


class VerificationError(MarketplaceError):
    """A passcode could not be redeemed.

    ``terminal`` is set when the pending entry was discarded (expired or out
    of attempts) and the listing has to be submitted again.
    """

    status_code = 400

    def __init__(self, message: str, terminal: bool = False):
        super().__init__(message)
        self.terminal = terminal


class ListingNotFound(MarketplaceError):
    status_code = 404


class EmailDeliveryError(MarketplaceError):
    """Every attempt to send an email failed."""

    status_code = 502


def register_error_handlers(app: Flask) -> None:
    """Map service exceptions to plain-text or JSON responses."""

    @app.errorhandler(MarketplaceError)
    def _handle_marketplace_error(error: MarketplaceError):
        if request.path.startswith("/api/"):
            return jsonify(error=str(error)), error.status_code
        return str(error), error.status_code, {"Content-Type": "text/plain; charset=utf-8"}

    @app.errorhandler(RequestEntityTooLarge)
    def _handle_oversized_request(error: RequestEntityTooLarge):
        limit_kb = app.config["MAX_UPLOAD_BYTES"] // 1024
        return _handle_marketplace_error(SubmissionError(f"Total image size must not exceed {limit_kb} KB."))

    @app.errorhandler(PyMongoError)
    def _handle_database_error(error: PyMongoError):
        app.logger.error("Database operation failed on %s: %s", request.path, error)
        if request.path.startswith("/api/"):
            return jsonify(error="Internal server error."), 500
        return "Internal server error.", 500, {"Content-Type": "text/plain; charset=utf-8"}
