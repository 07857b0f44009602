"""Exception types raised by linkqueue."""

from __future__ import annotations


class LinkQueueError(Exception):
    """Base class for all linkqueue errors."""


class ConfigurationError(LinkQueueError, ValueError):
    """
    Raised when options, patterns or request templates are invalid.

    Always raised before any extraction or queue I/O takes place.
    """


class UnresolvableUrlError(LinkQueueError, ValueError):
    """
    Raised when a relative URL is extracted from a static document
    and no base URL was supplied to resolve it.

    Attributes:
        href: The offending attribute value
    """

    def __init__(self, href: str) -> None:
        self.href = href
        super().__init__(
            f"An extracted URL: {href} is relative and base_url is not set. "
            "Pass base_url to enqueue_links() to resolve relative URLs."
        )
