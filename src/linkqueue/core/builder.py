"""Turn matched URLs into request descriptors."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Callable, Optional

from ..discovery.patterns import UrlPattern, find_matching_pattern
from ..exceptions import ConfigurationError
from ..models.request import Request
from ..urls import is_absolute_url

logger = logging.getLogger(__name__)


def match_requests(urls: Iterable[str], patterns: Sequence[UrlPattern]) -> list[Request]:
    """
    Build a Request for every URL that passes the patterns.

    With no patterns every URL passes and gets a plain GET request. Otherwise
    the first matching pattern supplies the request template and URLs that
    match nothing are dropped.
    """
    requests: list[Request] = []
    unmatched = 0

    for url in urls:
        if not patterns:
            requests.append(Request(url=url))
            continue

        pattern = find_matching_pattern(url, patterns)
        if pattern is None:
            unmatched += 1
            continue
        requests.append(pattern.create_request(url))

    if unmatched:
        logger.debug(f"Dropped {unmatched} URLs matching no pattern")
    return requests


def apply_transform(
    requests: Iterable[Request],
    transform: Callable[[Request], Any],
) -> list[Request]:
    """
    Run the caller's transform over each request, in order.

    The transform may modify the request in place and return it, return a
    new Request (or a mapping of Request fields), or return a falsy value
    to drop it.

    Raises:
        ConfigurationError: If the transform returns something unusable
    """
    transformed: list[Request] = []

    for request in requests:
        result = transform(request)
        if not result:
            logger.debug(f"Transform dropped {request.url}")
            continue

        if isinstance(result, Mapping):
            try:
                result = Request.from_dict(result)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Transform returned invalid request data: {e}") from e
        elif not isinstance(result, Request):
            raise ConfigurationError(
                f"Transform must return a Request, a mapping or a falsy value, got {type(result).__name__}"
            )

        result.refresh_unique_key()
        transformed.append(result)

    return transformed


def create_requests(
    urls: Iterable[str],
    patterns: Sequence[UrlPattern] = (),
    transform: Optional[Callable[[Request], Any]] = None,
    limit: Optional[int] = None,
) -> list[Request]:
    """
    Build the requests to enqueue from extracted URLs.

    Args:
        urls: Absolute URLs in document order
        patterns: Compiled URL patterns (empty = accept all)
        transform: Optional hook to modify or drop requests
        limit: Keep at most this many requests

    Returns:
        Requests in the same relative order as ``urls``

    Raises:
        ConfigurationError: If a request to enqueue has no absolute URL
    """
    requests = match_requests(urls, patterns)

    if transform is not None:
        requests = apply_transform(requests, transform)

    if limit is not None:
        requests = requests[:limit]

    for request in requests:
        if not request.url or not is_absolute_url(request.url):
            logger.error(f"Refusing to enqueue request without an absolute URL: {request.url!r}")
            raise ConfigurationError(f"Request without an absolute URL: {request.url!r}")

    return requests
