"""Fetch a web page and reduce it to readable text."""

import re

import httpx
from bs4 import BeautifulSoup

from models.errors import PageFetchError
from models.search import OpenedPage
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; grounded-search/1.0; +https://example.invalid/bot)"
NON_CONTENT_TAGS = ("script", "style", "noscript", "nav", "footer", "header", "iframe", "svg", "form")

_WHITESPACE_RE = re.compile(r"[ \t\r\f\v]+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")


def normalize_whitespace(text: str) -> str:
    text = _WHITESPACE_RE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    return _BLANK_LINES_RE.sub("\n\n", text).strip()


def html_to_text(html: str) -> str:
    """Strip markup and boilerplate regions from an HTML document."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(NON_CONTENT_TAGS):
        tag.decompose()

    root = soup.find("main") or soup.find("article") or soup.body or soup
    return normalize_whitespace(root.get_text(separator="\n"))


class PageReader:
    """Opens a URL and returns its visible text as an ``OpenedPage``."""

    def __init__(
        self,
        timeout_s: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.timeout_s = timeout_s
        self.user_agent = user_agent
        self._transport = transport

    async def open(self, url: str) -> OpenedPage:
        headers = {"User-Agent": self.user_agent, "Accept": "text/html,text/plain;q=0.9,*/*;q=0.5"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s,
                follow_redirects=True,
                headers=headers,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise PageFetchError(url, f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise PageFetchError(url, f"HTTP {response.status_code}")

        content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        if content_type in ("text/html", "application/xhtml+xml") or not content_type:
            text = html_to_text(response.text)
        elif content_type.startswith("text/"):
            text = normalize_whitespace(response.text)
        else:
            raise PageFetchError(url, f"Unsupported content type {content_type}")

        if not text:
            raise PageFetchError(url, "No readable text")

        logger.debug(
            "Page opened",
            extra={"extra_fields": {"url": url, "chars": len(text), "status": response.status_code}},
        )
        # Keep the requested URL so citations line up with search results
        return OpenedPage(url=url, content=text)
