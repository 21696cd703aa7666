"""Landing page and server-rendered browse pages."""

from __future__ import annotations

from flask import Blueprint, current_app

from marketplace.routes.listings import read_query_params
from marketplace.services import listing_service
from marketplace.utils.html import browse_page

bp = Blueprint("pages", __name__)


@bp.get("/")
def index():
    return current_app.send_static_file("index.html")


def _render_browse(flow_type: str):
    params = read_query_params()
    result = listing_service.query_listings(flow_type, **params)
    return browse_page(flow_type, result, params)


@bp.get("/buy")
def buy():
    """Published sell listings."""
    return _render_browse("sell")


@bp.get("/rent")
def rent():
    """Published lease listings."""
    return _render_browse("lease")
