"""Flask CLI maintenance commands."""

from __future__ import annotations

import click
from flask import Flask


def register_commands(app: Flask) -> None:
    """Attach maintenance commands to ``flask``."""

    @app.cli.command("create-indexes")
    def create_indexes_command():
        """Create MongoDB indexes for listings, images and verifications."""
        from marketplace.main import create_indexes

        create_indexes()
        click.echo("Indexes created.")

    @app.cli.command("prune-verifications")
    def prune_verifications_command():
        """Delete expired pending verifications."""
        from marketplace.services import verification_service

        deleted = verification_service.cleanup_expired_verifications()
        click.echo(f"Deleted {deleted} expired pending verification(s).")
