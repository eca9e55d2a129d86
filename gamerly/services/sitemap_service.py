"""XML sitemap for the homepage and game detail pages."""

from datetime import datetime, timezone
from xml.sax.saxutils import escape

from gamerly.services.slugs import game_detail_path

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _url_entry(loc: str, lastmod: str, changefreq: str, priority: str) -> str:
    return (
        "  <url>\n"
        f"    <loc>{escape(loc)}</loc>\n"
        f"    <lastmod>{lastmod}</lastmod>\n"
        f"    <changefreq>{changefreq}</changefreq>\n"
        f"    <priority>{priority}</priority>\n"
        "  </url>\n"
    )


def render_sitemap(games: list[dict], site_url: str, now: datetime | None = None) -> str:
    """Render the sitemap; games without an id or name are skipped."""
    now = now or datetime.now(timezone.utc)
    lastmod = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
    site = site_url.rstrip("/")

    xml = '<?xml version="1.0" encoding="UTF-8"?>\n'
    xml += f'<urlset xmlns="{SITEMAP_NS}">\n'
    xml += _url_entry(f"{site}/", lastmod, "daily", "1.0")

    for game in games:
        if not game or not game.get("id") or not game.get("name"):
            continue
        xml += _url_entry(f"{site}{game_detail_path(game['id'], game['name'])}", lastmod, "weekly", "0.6")

    xml += "</urlset>"
    return xml
