"""Tests for the landing page and server-rendered browse pages."""

from __future__ import annotations

from test_listings import make_listing


def test_index_page_is_served(client):
    response = client.get("/")

    assert response.status_code == 200
    assert b'action="/preowned/sell"' in response.data
    assert b'action="/preowned/lease"' in response.data


def test_buy_page_lists_published_sell_listings(client):
    make_listing(item_name="Study Chair")
    make_listing(item_name="Unverified Desk", published=False)
    make_listing("lease", item_name="Lease Only")

    body = client.get("/buy").get_data(as_text=True)

    assert "<h1>Buy Listings</h1>" in body
    assert "Study Chair" in body
    assert "Unverified Desk" not in body
    assert "Lease Only" not in body


def test_rent_page_shows_empty_state(client):
    body = client.get("/rent").get_data(as_text=True)

    assert "<h1>Lease Listings</h1>" in body
    assert "No listings yet." in body


def test_browse_page_escapes_user_text(client):
    make_listing(item_name="<script>alert(1)</script>")

    body = client.get("/buy").get_data(as_text=True)

    assert "<script>" not in body
    assert "&lt;script&gt;" in body


def test_browse_page_links_to_next_page(client):
    for index in range(3):
        make_listing(item_name=f"Book {index}", price=float(index))

    body = client.get("/buy?limit=2&search=book").get_data(as_text=True)

    assert "Page 1 of 2" in body
    assert 'href="/buy?limit=2&amp;search=book&amp;page=2"' in body


def test_health(client):
    assert client.get("/health").get_json()["status"] == "healthy"
