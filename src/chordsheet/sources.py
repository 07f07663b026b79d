"""Loading raw chord-sheet text for the command line.

A location is a local path or an ``http(s)`` URL.  HTML pages are reduced to
the text of their ``<pre>`` blocks (where chord sheets live on most sites),
falling back to the page text when there are none.
"""

import time
from pathlib import Path

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from .cache import CacheEntry
from .exceptions import FetchError, SourceError

_FETCH_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,text/plain;q=0.9,*/*;q=0.8",
}


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def load_text(location: str, timeout: float = 15) -> str:
    """Return the chord-sheet text at *location*.

    Raises FetchError on HTTP failures and SourceError when a local file
    cannot be read.
    """
    if is_url(location):
        return fetch_text(location, timeout=timeout)
    try:
        return Path(location).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(location, str(exc)) from exc


def load_text_cached(
    location: str,
    entry: CacheEntry[str] | None,
    ttl: float,
    timeout: float = 15,
) -> CacheEntry[str]:
    """Return *entry* if it is still fresh for *location*, else a new entry.

    The caller keeps the returned entry and passes it back on the next call.
    """
    if entry is not None and entry.is_fresh(location, ttl):
        logger.debug("Serving {} from cache entry", location)
        return entry
    return CacheEntry(value=load_text(location, timeout=timeout), fetched_at=time.time(), key=location)


def fetch_text(url: str, timeout: float = 15) -> str:
    """GET *url* and return its chord-sheet text."""
    try:
        resp = httpx.get(url, headers=_FETCH_HEADERS, follow_redirects=True, timeout=timeout)
    except httpx.RequestError as exc:
        raise FetchError(url, 0) from exc
    if resp.status_code != 200:
        raise FetchError(url, resp.status_code)

    logger.debug("Fetched {} ({} bytes)", url, len(resp.text))
    if "html" in resp.headers.get("content-type", ""):
        return extract_pre_text(resp.text)
    return resp.text


def extract_pre_text(html: str) -> str:
    """Return the text of every ``<pre>`` block in *html*, blank-line separated.

    Pages without ``<pre>`` blocks yield their whole visible text.
    """
    soup = BeautifulSoup(html, "html.parser")
    blocks = [pre.get_text() for pre in soup.find_all("pre")]
    if blocks:
        return "\n\n".join(block.strip("\n") for block in blocks)
    return soup.get_text()
