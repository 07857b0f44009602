"""Static HTML link extraction using BeautifulSoup."""

from __future__ import annotations

import logging
from typing import Optional, Union

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from ...exceptions import ConfigurationError, UnresolvableUrlError
from ...urls import is_absolute_url, resolve_url

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTE = "href"


class DocumentSource:
    """
    Extract links from a parsed HTML document.

    Relative links are resolved against ``base_url``. Without a base URL a
    relative link is an error, raised as soon as it is found, so that a bad
    link never turns into a failed request further down the crawl.

    Example:
        source = DocumentSource(html, base_url="https://example.com/docs/")
        urls = await source.extract_urls("a.next")
    """

    def __init__(
        self,
        document: Union[Tag, str, bytes],
        base_url: Optional[str] = None,
        attribute: str = DEFAULT_ATTRIBUTE,
    ):
        """
        Initialize the document source.

        Args:
            document: A BeautifulSoup tree or element, or raw HTML to parse
            base_url: Base URL for resolving relative links
            attribute: Element attribute holding the link
        """
        if isinstance(document, Tag):
            self._soup = document
        else:
            self._soup = BeautifulSoup(document, "html.parser")
        self.base_url = base_url
        self.attribute = attribute

    async def extract_urls(self, selector: str) -> list[str]:
        return self.select_urls(selector)

    def select_urls(self, selector: str) -> list[str]:
        """
        Synchronous variant of :meth:`extract_urls`.

        Raises:
            ConfigurationError: If the selector is not valid CSS
            UnresolvableUrlError: If a relative link is found and base_url is not set
        """
        try:
            elements = self._soup.select(selector)
        except SelectorSyntaxError as e:
            logger.error(f"Invalid CSS selector {selector!r}")
            raise ConfigurationError(f"Invalid CSS selector {selector!r}: {e}") from e

        urls: list[str] = []

        for element in elements:
            href = element.get(self.attribute)
            # multi-valued attributes come back as lists
            if isinstance(href, list):
                href = " ".join(href)
            if not href or not href.strip():
                continue

            urls.append(self._resolve(href.strip()))

        logger.debug(f"Selector {selector!r} matched {len(urls)} links in document")
        return urls

    def _resolve(self, href: str) -> str:
        if is_absolute_url(href):
            return href

        if not self.base_url:
            logger.error(f"Cannot resolve relative URL {href!r} without a base URL")
            raise UnresolvableUrlError(href)

        return resolve_url(href, self.base_url)
