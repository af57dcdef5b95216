"""Listing page retrieval."""

from typing import Optional

import requests
from bs4 import BeautifulSoup

from .errors import FetchError, FetchHTTPError, FetchNetworkError, FetchSetupError
from .logger import StructuredLogger, get_logger

# Many job boards refuse requests without a browser identity
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

SETUP_EXCEPTIONS = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
    requests.exceptions.URLRequired,
    requests.exceptions.InvalidHeader,
)

BODY_EXCERPT_CHARS = 500


class ListingFetcher:
    """Fetch job listing pages over HTTP.

    fetch() either returns the page body or raises one of the FetchError
    subclasses; no other exception leaves it.
    """

    def __init__(
        self,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logger or get_logger()

    def fetch(self, url: str) -> str:
        """Return the body of url.

        Raises:
            FetchSetupError: The URL is empty or malformed.
            FetchNetworkError: No response was received.
            FetchHTTPError: The response status is outside 2xx.
        """
        self.logger.record_fetch_attempt()
        url = (url or "").strip()
        if not url:
            self._fail(FetchSetupError("No URL given", url=url))

        try:
            resp = self.session.get(url, headers=BROWSER_HEADERS, timeout=self.timeout)
        except SETUP_EXCEPTIONS as e:
            self._fail(FetchSetupError(f"Invalid request for {url}: {e}", url=url))
        except requests.exceptions.Timeout:
            self._fail(FetchNetworkError(f"Request timed out after {self.timeout:g}s", url=url))
        except requests.exceptions.RequestException as e:
            self._fail(FetchNetworkError(f"No response received: {e}", url=url))
        except ValueError as e:
            # urllib3 rejects some hosts before requests can wrap the error
            self._fail(FetchSetupError(f"Invalid request for {url}: {e}", url=url))

        if not 200 <= resp.status_code < 300:
            body = resp.text or ""
            self._fail(FetchHTTPError(
                f"HTTP error status {resp.status_code}",
                url=url,
                status_code=resp.status_code,
                body=body,
            ))

        self.logger.record_fetch_success()
        self.logger.debug("Fetched listing", url=url, status=resp.status_code, size=len(resp.text))
        return resp.text

    def _fail(self, error: FetchError) -> None:
        self.logger.record_fetch_failure(type(error).__name__)
        raise error


def page_text(html: str, max_chars: int = 12000) -> str:
    """Reduce an HTML page to visible text, capped at max_chars."""
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    text = " ".join(soup.get_text(separator=" ").split())
    return text[:max_chars]


def body_excerpt(body: str, limit: int = BODY_EXCERPT_CHARS) -> str:
    """First limit characters of a response body, for log lines."""
    body = " ".join((body or "").split())
    if len(body) <= limit:
        return body
    return body[:limit] + "..."
