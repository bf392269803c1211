"""Fetch a few pages and turn them into plain-text documents."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import requests
from bs4 import BeautifulSoup

from portfolio_chat.domain.document import Document

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"User-Agent": "Mozilla/5.0 (portfolio-chat-extractor)"}


def html_to_text(html: str) -> str:
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = soup.get_text(" ", strip=True)
    return " ".join(text.split())


def scrape_pages(
    urls: Iterable[str],
    *,
    session: requests.Session | None = None,
    timeout: float = 15.0,
) -> list[Document]:
    """Return one ``{title: url, content: text, source: url}`` document per reachable page.

    Failed fetches are logged and skipped.
    """
    http = session or requests.Session()
    docs: list[Document] = []
    for url in urls:
        url = (url or "").strip()
        if not url:
            continue
        try:
            response = http.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Scrape failed for %s: %s", url, exc)
            continue
        text = html_to_text(response.text)
        if text:
            docs.append(Document(title=url, content=text, source=url))
    return docs
