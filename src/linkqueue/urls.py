"""URL helpers shared by extraction, matching and request building."""

import logging
import re
from urllib.parse import parse_qsl, urlencode, urljoin, urlparse, urlunparse

from url_normalize import url_normalize

logger = logging.getLogger(__name__)

# scheme ":" at the start of the value (RFC 3986 section 3.1)
_ABSOLUTE_URL_RE = re.compile(r"^[a-z][a-z0-9+.-]*:", re.IGNORECASE)

_TRACKING_PARAM_PREFIX = "utm_"

# Schemes url_normalize understands (default ports, host encoding)
_WEB_SCHEMES = frozenset({"http", "https"})


def is_absolute_url(url: str) -> bool:
    """
    Check whether a URL carries a scheme prefix.

    Args:
        url: The URL or href value to check

    Returns:
        True for values like ``https://...``, ``mailto:...`` or ``data:...``
    """
    return bool(_ABSOLUTE_URL_RE.match(url))


def resolve_url(href: str, base_url: str) -> str:
    """Resolve an href against a base URL using RFC 3986 rules."""
    return urljoin(base_url, href)


def normalize_url(url: str, keep_fragment: bool = False) -> str:
    """
    Normalize a URL for use as a deduplication key.

    Web URLs first go through ``url_normalize`` (scheme and host case,
    default ports, percent-encoding). After that ``utm_*`` tracking
    parameters are dropped, the remaining query parameters are sorted, a
    trailing slash is stripped and the fragment is removed unless
    ``keep_fragment`` is set.

    Args:
        url: The URL to normalize
        keep_fragment: Keep the ``#fragment`` part

    Returns:
        Normalized URL string
    """
    url = url.strip()
    if urlparse(url).scheme.lower() in _WEB_SCHEMES:
        try:
            url = url_normalize(url)
        except ValueError as e:
            logger.debug(f"url_normalize failed for {url!r}, using basic normalization: {e}")

    parsed = urlparse(url)

    query_params = [
        (key, value)
        for key, value in parse_qsl(parsed.query, keep_blank_values=True)
        if not key.lower().startswith(_TRACKING_PARAM_PREFIX)
    ]
    query_params.sort()

    path = parsed.path
    if path.endswith("/"):
        path = path.rstrip("/")

    return urlunparse(
        (
            parsed.scheme.lower(),
            parsed.netloc.lower(),
            path,
            parsed.params,
            urlencode(query_params),
            parsed.fragment if keep_fragment else "",
        )
    )
