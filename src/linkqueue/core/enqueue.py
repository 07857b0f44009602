"""Extract links from a page or document and add them to a request queue."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..discovery.link_extractors import AnyLinkSource, DocumentSource, PageSource
from ..models.config import DEFAULT_SELECTOR, EnqueueLinksOptions, RequestTransform
from ..models.request import QueueOperationInfo
from ..queue.batch import add_requests_in_batches
from ..queue.protocols import RequestQueue
from .builder import create_requests

logger = logging.getLogger(__name__)


def _build_source(options: EnqueueLinksOptions) -> AnyLinkSource:
    if options.page is not None:
        if options.base_url:
            logger.warning(
                "The option base_url can only be used with a static document. "
                "Links on a rendered page are resolved by the browser; base_url will be ignored."
            )
        return PageSource(options.page)
    return DocumentSource(options.document, base_url=options.base_url)


async def enqueue_links(
    queue: RequestQueue,
    *,
    page: Any = None,
    document: Any = None,
    selector: str = DEFAULT_SELECTOR,
    base_url: Optional[str] = None,
    patterns: Optional[list[Any]] = None,
    limit: Optional[int] = None,
    transform: Optional[RequestTransform] = None,
) -> list[QueueOperationInfo]:
    """
    Find links in a page or document and add them to a request queue.

    Elements matching ``selector`` are located either in a rendered browser
    page or in a parsed HTML document, and the URLs in their ``href``
    attributes are enqueued. Links can be filtered with URL patterns, which
    may also carry a template for the created requests.

    Example:
        infos = await enqueue_links(
            queue,
            document=html,
            base_url="https://www.example.com",
            selector="a.product-detail",
            patterns=[
                "https://www.example.com/handbags/[.*]",
                {"purl": "https://www.example.com/purses/[.*]", "user_data": {"label": "PURSE"}},
            ],
        )

    Args:
        queue: Request queue the links are added to
        page: Rendered Playwright page. Exactly one of page/document is required.
        document: BeautifulSoup tree or raw HTML. Exactly one of page/document is required.
        selector: CSS selector matching the link elements
        base_url: Base URL for relative links in ``document``. Ignored, with a
            warning, for ``page`` since the browser resolves links itself.
        patterns: Pseudo-URL strings, regexes, ``{"purl": ..., **template}``
            mappings or UrlPattern objects. Empty or None enqueues every link.
        limit: Enqueue at most this many requests
        transform: Called with each Request before it is enqueued. May
            modify and return it, return a replacement, or return a falsy
            value to skip it. Setting ``keep_url_fragment`` here keeps URL
            fragments in the unique key.

    Returns:
        One QueueOperationInfo per enqueued request, in link order

    Raises:
        ConfigurationError: If the options are invalid (raised before any work)
        UnresolvableUrlError: If a relative link is found in a document without base_url
    """
    options = EnqueueLinksOptions.parse(
        queue=queue,
        page=page,
        document=document,
        selector=selector,
        base_url=base_url,
        patterns=patterns,
        limit=limit,
        transform=transform,
    )

    source = _build_source(options)
    urls = await source.extract_urls(options.selector)

    requests = create_requests(
        urls,
        options.patterns,
        transform=options.transform,
        limit=options.limit,
    )
    logger.debug(f"Extracted {len(urls)} links, enqueueing {len(requests)}")

    return await add_requests_in_batches(requests, options.queue)
