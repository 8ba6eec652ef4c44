"""
Search Engine Endpoints.

``/sitemap.xml`` lists the static pages, every published listing and one
browse page per category; ``/robots.txt`` keeps crawlers out of private areas.
"""

from typing import List, Optional
from xml.sax.saxutils import escape

from fastapi import APIRouter, Response

from classifieds.core.logging_config import get_logger
from classifieds.server.core.config import settings
from classifieds.server.services.deps import ReposDep

logger = get_logger(__name__)

router = APIRouter()

SITEMAP_LISTING_LIMIT = 10000

STATIC_PAGES = [
    ("", "daily", "1.0"),
    ("/browse", "hourly", "0.9"),
    ("/auth/login", "monthly", "0.3"),
    ("/auth/signup", "monthly", "0.3"),
]

DISALLOWED_PATHS = ["/api/", "/seller/", "/admin/", "/auth/", "/banned"]


def _url_entry(loc: str, changefreq: str, priority: str, lastmod: Optional[str] = None) -> str:
    parts = [f"<loc>{escape(loc)}</loc>"]
    if lastmod:
        parts.append(f"<lastmod>{lastmod}</lastmod>")
    parts.append(f"<changefreq>{changefreq}</changefreq>")
    parts.append(f"<priority>{priority}</priority>")
    return "  <url>" + "".join(parts) + "</url>"


@router.get("/sitemap.xml", include_in_schema=False)
async def sitemap(repos: ReposDep) -> Response:
    base = settings.marketplace.site_url.rstrip("/")
    entries: List[str] = [_url_entry(f"{base}{path}", freq, prio) for path, freq, prio in STATIC_PAGES]

    for listing in await repos.listings.published(SITEMAP_LISTING_LIMIT):
        entries.append(
            _url_entry(f"{base}/listing/{listing.id}", "weekly", "0.8", lastmod=listing.updated_at.date().isoformat())
        )
    for category in await repos.categories.list_ordered():
        entries.append(_url_entry(f"{base}/browse?category={category.id}", "daily", "0.7"))

    body = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(entries)
        + "\n</urlset>\n"
    )
    logger.debug(f"Sitemap generated with {len(entries)} URLs")
    return Response(content=body, media_type="application/xml")


@router.get("/robots.txt", include_in_schema=False)
async def robots() -> Response:
    base = settings.marketplace.site_url.rstrip("/")
    lines = ["User-agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in DISALLOWED_PATHS]
    lines += ["", f"Sitemap: {base}/sitemap.xml"]
    return Response(content="\n".join(lines) + "\n", media_type="text/plain")
