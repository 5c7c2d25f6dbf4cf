"""
Remote portfolio page ➜ (html, css) for the cloner.

The cloner itself never touches the network; this module fetches the page,
collects its stylesheets (linked and inline) and makes url(...) references
in that CSS absolute so the cloned template keeps its fonts and images.
"""

from __future__ import annotations
import logging
from urllib.parse import urljoin, urlparse

import cssutils
import requests
from bs4 import BeautifulSoup

from folio import config
from folio.exceptions import FetchError, InvalidUrlError

# cssutils reports every unknown property; only critical errors matter here
cssutils.log.setLevel(logging.CRITICAL)

logger = logging.getLogger(__name__)


def page_origin(url: str) -> str:
    parsed = urlparse(url or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidUrlError(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def _headers() -> dict:
    return {
        "User-Agent": config.USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }


def fetch_page(url: str, session: requests.Session | None = None) -> str:
    """GET the page; timeouts and HTTP errors become FetchError."""
    page_origin(url)
    http = session or requests
    try:
        resp = http.get(url, headers=_headers(), timeout=config.FETCH_TIMEOUT)
        resp.raise_for_status()
    except requests.exceptions.Timeout as exc:
        raise FetchError(url, "Request timed out. The website took too long to respond.") from exc
    except requests.exceptions.RequestException as exc:
        raise FetchError(url, str(exc)) from exc

    config.check_input_size(resp.text)
    logger.info("fetched %d characters from %s", len(resp.text), url)
    return resp.text


def stylesheet_urls(html: str, origin: str) -> list[str]:
    """Absolute URLs of every linked stylesheet, in document order."""
    soup = BeautifulSoup(html or "", "html5lib")
    urls: list[str] = []
    for link in soup.find_all("link", href=True):
        rel = [r.lower() for r in (link.get("rel") or [])]
        href = link["href"].strip()
        if "stylesheet" not in rel and ".css" not in href:
            continue
        if href.startswith("//"):
            href = "https:" + href
        full = urljoin(origin + "/", href)
        if full not in urls:
            urls.append(full)
    return urls


def inline_styles(html: str) -> list[str]:
    soup = BeautifulSoup(html or "", "html5lib")
    # style contents are a Stylesheet string, which get_text() leaves out
    return [tag.string or "" for tag in soup.find_all("style")]


def absolutize_css_urls(css: str, origin: str) -> str:
    """Rewrite relative url(...) references against the page origin."""
    if not css.strip():
        return css
    sheet = cssutils.parseString(css, validate=False)

    def fix(url: str) -> str:
        if url.startswith(("data:", "http:", "https:", "//")):
            return url
        return urljoin(origin + "/", url)

    cssutils.replaceUrls(sheet, fix, ignoreImportRules=False)
    return sheet.cssText.decode("utf-8")


def collect_css(html: str, origin: str, session: requests.Session | None = None) -> str:
    """Linked + inline CSS of a page; stylesheets that fail to load are skipped."""
    http = session or requests
    chunks: list[str] = []
    for url in stylesheet_urls(html, origin):
        try:
            resp = http.get(url, headers={"User-Agent": config.USER_AGENT},
                            timeout=config.CSS_FETCH_TIMEOUT)
        except requests.exceptions.RequestException as exc:
            logger.warning("stylesheet %s skipped: %s", url, exc)
            continue
        if resp.ok:
            chunks.append(f"\n/* Cloned from: {url} */\n{resp.text}")
        else:
            logger.warning("stylesheet %s skipped: HTTP %s", url, resp.status_code)

    for style in inline_styles(html):
        if style.strip():
            chunks.append("\n/* Inline style */\n" + style)

    css = "".join(chunks)
    logger.info("collected %d characters of CSS", len(css))
    return absolutize_css_urls(css, origin)
