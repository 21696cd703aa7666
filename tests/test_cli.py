"""Tests for the flask maintenance commands."""

from __future__ import annotations

from marketplace.services import verification_service
from marketplace.utils.codes import now_seconds


def test_prune_verifications_command(app, mongo_db):
    verification_service.issue_verification("old@bue.edu.eg", "sell", "l1", ttl_seconds=1, now=now_seconds() - 10)

    result = app.test_cli_runner().invoke(args=["prune-verifications"])

    assert result.exit_code == 0
    assert "Deleted 1 expired" in result.output
    assert mongo_db.pending_verifications.count_documents({}) == 0


def test_create_indexes_command(app, mongo_db):
    result = app.test_cli_runner().invoke(args=["create-indexes"])

    assert result.exit_code == 0
    assert "email_1_flow_type_1" in mongo_db.pending_verifications.index_information()
