"""Blueprint registration helper."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Flask, jsonify

from .listings import bp as listings_bp
from .pages import bp as pages_bp
from .submissions import bp as submissions_bp
from .verification import bp as verification_bp


def register_routes(app: Flask) -> None:
    """Register all application blueprints on the provided Flask app."""
    app.register_blueprint(pages_bp)
    app.register_blueprint(listings_bp)
    app.register_blueprint(submissions_bp)
    app.register_blueprint(verification_bp)

    @app.get("/health")
    def health():
        return jsonify(status="healthy", timestamp=datetime.now(timezone.utc).isoformat()), 200
