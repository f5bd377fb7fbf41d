# src/content_auditor/utils/url_utils.py
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse, urljoin

logger = logging.getLogger(__name__)

NON_NAVIGABLE_SCHEMES = ("mailto", "tel", "javascript", "data")


@dataclass(frozen=True)
class UrlParseResult:
    """
    Outcome of parsing a URL: either a success carrying scheme and host,
    or a failure carrying the reason. Callers branch on `ok`.
    """
    ok: bool
    scheme: str = ""
    host: str = ""
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "UrlParseResult":
        return cls(ok=False, error=error)


class UrlUtils:
    """A collection of static methods for URL parsing and classification."""

    @staticmethod
    def parse(url: str, base_url: str = "") -> UrlParseResult:
        """Resolves `url` against `base_url` and returns the parse result."""
        try:
            absolute_url = urljoin(base_url, url) if base_url else url
            parsed = urlparse(absolute_url)
            host = parsed.hostname or ""
        except ValueError as e:
            logger.debug(f"Could not parse invalid URL: {url}")
            return UrlParseResult.failure(str(e))
        return UrlParseResult(ok=True, scheme=parsed.scheme.lower(), host=host.lower())

    @staticmethod
    def get_origin(url: str) -> str:
        """
        Extracts the origin (scheme + netloc) from a given URL.
        Returns an empty string when the URL has no usable origin.
        """
        if not url:
            return ""
        result = UrlUtils.parse(url)
        if not result.ok or not result.scheme or not result.host:
            return ""
        return f"{result.scheme}://{urlparse(url).netloc}"

    @staticmethod
    def normalize_host(host: str) -> str:
        return host.lower().removeprefix("www.")

    @staticmethod
    def is_same_site(host: str, origin_host: str) -> bool:
        """Same host (ignoring 'www.') or a subdomain of the origin host."""
        source_domain = UrlUtils.normalize_host(origin_host)
        target_domain = UrlUtils.normalize_host(host)
        if not target_domain:
            return True
        if not source_domain:
            return False
        return target_domain == source_domain or target_domain.endswith(f".{source_domain}")
