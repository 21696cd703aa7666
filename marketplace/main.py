"""Flask application setup and blueprint wiring."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from marketplace.cli import register_commands
from marketplace.config import load_config
from marketplace.errors import register_error_handlers
from marketplace.routes import register_routes


def create_indexes() -> None:
    from marketplace.services import image_service, listing_service, verification_service

    listing_service.create_indexes()
    image_service.create_indexes()
    verification_service.create_indexes()


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Configure and return the Flask application instance."""
    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    app.config.update(load_config())
    if overrides:
        app.config.update(overrides)

    # Image sums over MAX_UPLOAD_BYTES get a 400; this only caps runaway bodies.
    app.config["MAX_CONTENT_LENGTH"] = app.config["MAX_UPLOAD_BYTES"] * 4

    register_error_handlers(app)
    register_routes(app)
    register_commands(app)

    if app.config.get("CREATE_INDEXES", True):
        try:
            with app.app_context():
                create_indexes()
                app.logger.info("MongoDB indexes created successfully")
        except Exception as e:
            app.logger.warning(f"Failed to create MongoDB indexes: {e}")

    return app
