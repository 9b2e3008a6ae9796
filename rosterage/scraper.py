"""Downloading the season statistics page."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import requests

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0 Safari/537.36"
)


def build_session() -> requests.Session:
    """Return a basic requests session with a sensible user agent."""

    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    return session


def fetch_page(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = 20,
) -> str:
    """Fetch *url* and return the decoded HTML.

    ``file://`` URLs are read from disk so saved pages can be analysed offline.
    Network errors propagate to the caller; there is no retry.
    """

    parsed = urlparse(url)
    if parsed.scheme == "file":
        local_path = Path(unquote(parsed.path))
        logger.debug("Reading %s", local_path)
        return local_path.read_text(encoding="utf-8")

    session = session or build_session()
    logger.debug("GET %s", url)
    response = session.get(url, timeout=timeout)
    response.raise_for_status()
    return response.text
