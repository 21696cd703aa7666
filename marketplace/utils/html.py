"""Small HTML builders for server-rendered pages."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional
from urllib.parse import urlencode

from markupsafe import Markup

BROWSE_PAGES = {
    "sell": {"path": "/buy", "title": "Buy Listings"},
    "lease": {"path": "/rent", "title": "Lease Listings"},
}


def page(title: str, body: Markup) -> str:
    """Wrap body markup in a minimal HTML document."""
    return str(
        Markup(
            "<!DOCTYPE html>\n<html>\n  <head><meta charset=\"utf-8\"><title>{title}</title></head>\n"
            "  <body>\n    <h1>{title}</h1>\n{body}\n  </body>\n</html>\n"
        ).format(title=title, body=body)
    )


def listing_card(listing: Dict[str, Any]) -> Markup:
    image_tags = Markup("").join(
        Markup('<img src="{}" alt="Listing Image" style="max-width:150px; margin:5px;" />').format(url)
        for url in listing.get("images") or []
    )
    return Markup(
        '<div class="listing">\n'
        "  <h3>{name}</h3>\n"
        "  <p>{description}</p>\n"
        "  <p><strong>Price:</strong> {price} {period}</p>\n"
        "  <p><strong>Contact:</strong> {seller} {phone}</p>\n"
        "  {images}\n"
        "</div>"
    ).format(
        name=listing.get("item_name"),
        description=listing.get("item_description") or "",
        price=listing.get("price"),
        period=listing.get("price_period") or "",
        seller=listing.get("seller_name") or "",
        phone=listing.get("whatsapp_number") or listing.get("contact_number") or "",
        images=image_tags,
    )


def browse_page(flow_type: str, result: Dict[str, Any], params: Dict[str, Any]) -> str:
    """Render a browse page for a page of query results."""
    meta = BROWSE_PAGES[flow_type]
    cards = Markup("\n").join(listing_card(listing) for listing in result["listings"])
    if not cards:
        cards = Markup("<p>No listings yet.</p>")

    links = []
    if result["page"] > 1:
        links.append(_page_link(meta["path"], params, result["page"] - 1, "Previous"))
    if result["page"] < result["totalPages"]:
        links.append(_page_link(meta["path"], params, result["page"] + 1, "Next"))

    nav = Markup('<nav class="pagination">{}</nav>').format(Markup(" ").join(links))
    summary = Markup("<p>Page {} of {} ({} listings)</p>").format(
        result["page"], max(result["totalPages"], 1), result["total"]
    )
    return page(meta["title"], cards + Markup("\n") + summary + nav)


def _page_link(path: str, params: Dict[str, Any], page_number: int, label: str) -> Markup:
    query = {
        key: value
        for key, value in params.items()
        if key != "page" and value and value != "none"
    }
    query["page"] = page_number
    return Markup('<a href="{}?{}">{}</a>').format(path, urlencode(query), label)


def message_page(title: str, message: str, link: Optional[str] = None, link_text: Optional[str] = None) -> str:
    body = Markup("<p>{}</p>").format(message)
    if link:
        body += Markup('\n<p><a href="{}">{}</a></p>').format(link, link_text or link)
    return page(title, body)


def otp_form(flow_type: str, email: str = "", listing_id: str = "") -> str:
    """Render the passcode entry form for a listing type."""
    fields: Iterable[Markup] = (
        Markup('<label>Email <input type="email" name="email" value="{}" required></label><br>').format(email),
        Markup('<label>OTP <input type="text" name="otp" inputmode="numeric" maxlength="6" required></label><br>'),
        Markup('<input type="hidden" name="id" value="{}">').format(listing_id),
        Markup('<button type="submit">Verify</button>'),
    )
    form = Markup('<form method="post" action="/verify-otp/{}">\n{}\n</form>').format(
        flow_type, Markup("\n").join(fields)
    )
    return page("Verify your listing", form)
